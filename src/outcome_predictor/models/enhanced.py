from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Mapping, Optional

from outcome_predictor.analysis.base import NEUTRAL, FactorResult
from outcome_predictor.analysis.injuries import InjuryImpactAssessor
from outcome_predictor.analysis.matchup import HeadToHead, head_to_head, home_away_split
from outcome_predictor.analysis.news import DEFAULT_NEWS_CONFIG, NewsConfig, NewsSentimentAnalyzer
from outcome_predictor.analysis.recent_form import (
    DEFAULT_RECENT_FORM_CONFIG,
    STABLE_SUMMARY,
    RecentFormAnalysis,
    RecentFormConfig,
    analyze_recent_form,
)
from outcome_predictor.analysis.rest_travel import (
    DEFAULT_REST_TRAVEL_CONFIG,
    NORMAL_SUMMARY,
    RestTravelConfig,
    analyze_rest_and_travel,
)
from outcome_predictor.analysis.team_log import build_team_log, win_rate
from outcome_predictor.analysis.weather import DEFAULT_WEATHER_CONFIG, WeatherConfig, WeatherImpactAnalyzer
from outcome_predictor.config import EnhancedPredictorConfig
from outcome_predictor.data.sources import GameRepository, InjurySource, NewsSource, WeatherSource
from outcome_predictor.data.stadiums import STADIUMS, StadiumLocation
from outcome_predictor.domain.games import Game, Prediction, Team
from outcome_predictor.exceptions import InsufficientDataError
from outcome_predictor.models.base import FeatureHints, GamePredictor, completed_history
from outcome_predictor.utils import clamp, clamp01, pct

logger = logging.getLogger(__name__)


def form_details(game: Game, home: RecentFormAnalysis, away: RecentFormAnalysis) -> str:
    """'Team: summary; Team: summary', skipping teams with stable form."""
    details = []
    for team, form in ((game.home_team, home), (game.away_team, away)):
        summary = form.impact_summary
        if summary != STABLE_SUMMARY:
            details.append(f"{team.name}: {summary}")
    return "; ".join(details)


def average_score(team: Team, games: list[Game], last_n: int, default: int) -> int:
    """Integer mean of points scored over the last `last_n` completed games."""
    recent = build_team_log(team, games)["points_for"].tail(last_n)
    if recent.empty:
        return default
    return int(recent.sum()) // len(recent)


class EnhancedPredictor(GamePredictor):
    """
    Weighted multi-factor predictor.

    Starts from the same win-rate base as the baseline, adds a fixed
    home-field advantage and then one weighted adjustment per factor:

        p = (home rate + 1 - away rate) / 2 + hfa + sum(adjustment_x * weight_x)

    Factors are head-to-head, home/away split, injuries, news sentiment,
    weather, rest & travel and recent form. Injuries, news and weather are
    only used when their source is configured, and any failure from those
    sources is treated as a neutral factor. Failures fetching the game
    history propagate.

    Reads that do not depend on each other (both histories, the
    head-to-head seasons and the optional reports) run on a thread pool.
    """

    def __init__(
        self,
        repository: GameRepository,
        injury_source: InjurySource | None = None,
        news_source: NewsSource | None = None,
        weather_source: WeatherSource | None = None,
        config: EnhancedPredictorConfig | None = None,
        stadiums: Mapping[str, StadiumLocation] = STADIUMS,
        recent_form_config: RecentFormConfig = DEFAULT_RECENT_FORM_CONFIG,
        rest_travel_config: RestTravelConfig = DEFAULT_REST_TRAVEL_CONFIG,
        weather_config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
        news_config: NewsConfig = DEFAULT_NEWS_CONFIG,
    ) -> None:
        if config is None:
            config = EnhancedPredictorConfig()
        self.repository = repository
        self.config = config
        self.stadiums = stadiums
        self.recent_form_config = recent_form_config
        self.rest_travel_config = rest_travel_config

        self.injuries = InjuryImpactAssessor(injury_source) if injury_source is not None else None
        self.news = NewsSentimentAnalyzer(news_source, news_config) if news_source is not None else None
        self.weather = (
            WeatherImpactAnalyzer(weather_source, stadiums, weather_config)
            if weather_source is not None
            else None
        )

    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            home_future = pool.submit(completed_history, self.repository, game.home_team, game)
            away_future = pool.submit(completed_history, self.repository, game.away_team, game)
            h2h_future = pool.submit(
                head_to_head,
                self.repository,
                game.home_team,
                game.away_team,
                game.season,
                game.scheduled_date,
                self.config.head_to_head_seasons,
            )
            injury_future = news_future = weather_future = None
            if self.injuries is not None:
                injury_future = pool.submit(self.injuries.analyze, game)
            if self.news is not None:
                news_future = pool.submit(self.news.analyze, game)
            if self.weather is not None:
                weather_future = pool.submit(self.weather.fetch, game)

            home_games = home_future.result()
            away_games = away_future.result()
            h2h = h2h_future.result()
            injury = _optional(injury_future)
            news = _optional(news_future)
            conditions = weather_future.result() if weather_future is not None else None

        if not home_games and not away_games:
            raise InsufficientDataError()

        weather = NEUTRAL
        if self.weather is not None:
            weather = self.weather.assess(game, conditions, home_games, away_games)

        factors = self._factors(game, home_games, away_games, h2h, injury, news, weather)

        home_rate = win_rate(build_team_log(game.home_team, home_games))
        away_rate = win_rate(build_team_log(game.away_team, away_games))

        probability = (home_rate + (1.0 - away_rate)) / 2.0
        probability += self.config.home_field_advantage
        weights = self.config.weights
        for name, factor in factors.items():
            probability += factor.adjustment * getattr(weights, name)
        probability = clamp01(probability)

        logger.debug(
            "%s factors: %s -> p=%.4f",
            game.game_id,
            {name: round(f.adjustment, 4) for name, f in factors.items()},
            probability,
        )

        confidence = self._confidence(probability, len(home_games) + len(away_games), h2h)

        cfg = self.config
        home_avg = average_score(game.home_team, home_games, cfg.recent_score_games, cfg.default_home_score)
        away_avg = average_score(game.away_team, away_games, cfg.recent_score_games, cfg.default_away_score)
        swing = round((probability - 0.5) * cfg.score_swing)

        return Prediction(
            game=game,
            home_win_probability=probability,
            confidence=confidence,
            reasoning=self._reasoning(
                game, home_rate, away_rate, len(home_games), len(away_games), factors, confidence
            ),
            predicted_home_score=max(0, home_avg + swing),
            predicted_away_score=max(0, away_avg - swing),
        )

    def _factors(
        self,
        game: Game,
        home_games: list[Game],
        away_games: list[Game],
        h2h: HeadToHead,
        injury: FactorResult,
        news: FactorResult,
        weather: FactorResult,
    ) -> dict[str, FactorResult]:
        """Raw factor adjustments keyed by their FactorWeights field name."""
        rest = analyze_rest_and_travel(
            game, home_games, away_games, self.stadiums, self.rest_travel_config
        )
        rest_summary = rest.impact_summary

        home_form = analyze_recent_form(game.home_team, home_games, self.recent_form_config)
        away_form = analyze_recent_form(game.away_team, away_games, self.recent_form_config)

        return {
            "head_to_head": FactorResult(h2h.adjustment),
            "home_away": FactorResult(
                home_away_split(game.home_team, home_games, game.away_team, away_games)
            ),
            "injury": injury,
            "news_sentiment": news,
            "weather": weather,
            "rest_travel": FactorResult(
                rest.advantage(self.rest_travel_config),
                "" if rest_summary == NORMAL_SUMMARY else rest_summary,
            ),
            "recent_form": FactorResult(
                home_form.momentum(self.recent_form_config)
                - away_form.momentum(self.recent_form_config),
                form_details(game, home_form, away_form),
            ),
        }

    def _confidence(self, probability: float, total_games: int, h2h: HeadToHead) -> float:
        """
        Sum of four capped components, clamped to [0, 1]:
        sample size, certainty (distance from 0.5), data richness and
        head-to-head experience.

        Data richness counts configured sources, not whether their fetch
        succeeded.
        """
        cc = self.config.confidence

        sample = min(cc.sample_size_cap, total_games / cc.sample_size_games)
        certainty = min(cc.certainty_cap, abs(probability - 0.5) * cc.certainty_scale)

        richness = 0.0
        if self.injuries is not None:
            richness += cc.injury_bonus
        if self.news is not None:
            richness += cc.news_bonus
        if self.weather is not None:
            richness += cc.weather_bonus
        if h2h.games_played > 0:
            richness += cc.head_to_head_bonus

        experience = min(cc.head_to_head_cap, h2h.games_played / cc.head_to_head_games)

        return clamp(sample + certainty + richness + experience, 0.0, 1.0)

    def _reasoning(
        self,
        game: Game,
        home_rate: float,
        away_rate: float,
        home_count: int,
        away_count: int,
        factors: dict[str, FactorResult],
        confidence: float,
    ) -> str:
        home, away = game.home_team.name, game.away_team.name
        threshold = self.config.significance_threshold

        text = (
            "Enhanced prediction using multiple data sources:\n\n"
            "Overall Performance:\n"
            f"- {home}: {pct(home_rate)} win rate ({home_count} games)\n"
            f"- {away}: {pct(away_rate)} win rate ({away_count} games)\n"
        )

        h2h = factors["head_to_head"].adjustment
        if abs(h2h) > threshold:
            favored = home if h2h > 0 else away
            text += f"Head-to-Head: {favored} has historical advantage in this matchup.\n"

        split = factors["home_away"].adjustment
        if abs(split) > threshold:
            if split > 0:
                text += f"Home/Away Split: {home} strong at home, {away} struggles on road.\n"
            else:
                text += f"Home/Away Split: {away} plays well on road despite home disadvantage.\n"

        sections = (
            ("Recent Form & Momentum", "recent_form"),
            ("Rest & Travel", "rest_travel"),
            ("Weather Conditions", "weather"),
            ("Injury Report", "injury"),
            ("Recent News Impact", "news_sentiment"),
        )
        for title, name in sections:
            details = factors[name].details
            if details:
                text += f"\n{title}:\n{details}\n"

        text += f"\nPrediction Confidence: {pct(confidence)}"
        return text


def _optional(future: Future | None) -> FactorResult:
    if future is None:
        return NEUTRAL
    return future.result()

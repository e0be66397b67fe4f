from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from outcome_predictor.analysis.base import NEUTRAL, FactorResult
from outcome_predictor.analysis.team_log import average_points, build_team_log
from outcome_predictor.data.sources import WeatherSource
from outcome_predictor.data.stadiums import STADIUMS, StadiumLocation, is_dome_team, weather_location
from outcome_predictor.domain.games import Game, Team
from outcome_predictor.domain.reports import WeatherConditions
from outcome_predictor.utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherConfig:
    """
    Weather thresholds (imperial units) and the pass-ratio estimate.

    Attributes
    ----------
    severe_wind_mph / strong_wind_mph:
        Wind speeds above which passing teams are penalised.
    severe_wind_pass_ratio / strong_wind_pass_ratio:
        Pass ratio above which a team counts as pass-heavy for each wind band.
    extreme_cold_f / freezing_f:
        Temperature bands; dome-based home teams take an extra penalty.
    likely_precip / possible_precip:
        Precipitation probability bands.
    run_leaning_pass_ratio:
        Pass ratio below which a team counts as run-leaning in the rain.
    league_pass_ratio / league_points / pass_ratio_per_point:
        Pass ratio estimate = league_pass_ratio + (avg points - league_points) * per_point.
    """

    severe_wind_mph: float = 20.0
    strong_wind_mph: float = 15.0
    severe_wind_pass_ratio: float = 0.60
    strong_wind_pass_ratio: float = 0.65
    severe_wind_penalty: float = 0.10
    strong_wind_penalty: float = 0.05

    extreme_cold_f: float = 20.0
    freezing_f: float = 32.0
    extreme_cold_penalty: float = 0.08
    extreme_cold_dome_penalty: float = 0.06
    freezing_penalty: float = 0.04
    freezing_dome_penalty: float = 0.04

    likely_precip: float = 0.7
    possible_precip: float = 0.5
    run_leaning_pass_ratio: float = 0.50
    likely_precip_run_bonus: float = 0.06
    likely_precip_pass_penalty: float = 0.08
    possible_precip_run_bonus: float = 0.03
    possible_precip_pass_penalty: float = 0.04

    impact_bound: float = 0.15

    league_pass_ratio: float = 0.55
    league_points: float = 24.0
    pass_ratio_per_point: float = 0.01
    min_pass_ratio: float = 0.40
    max_pass_ratio: float = 0.70
    pass_ratio_games: int = 8


DEFAULT_WEATHER_CONFIG = WeatherConfig()


def weather_impact(
    conditions: WeatherConditions,
    home_pass_ratio: float,
    away_pass_ratio: float,
    home_is_dome: bool,
    config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
) -> float:
    """
    Weather adjustment for the home team in [-0.15, 0.15] (with default bounds).

    Wind hurts pass-heavy sides, cold hurts the home side (more so when it
    normally plays indoors), precipitation favours run-leaning sides.
    Indoor games always return 0.
    """
    if conditions.is_indoor:
        return 0.0

    impact = 0.0

    if conditions.wind_speed > config.severe_wind_mph:
        if home_pass_ratio > config.severe_wind_pass_ratio:
            impact -= config.severe_wind_penalty
        if away_pass_ratio > config.severe_wind_pass_ratio:
            impact += config.severe_wind_penalty
    elif conditions.wind_speed > config.strong_wind_mph:
        if home_pass_ratio > config.strong_wind_pass_ratio:
            impact -= config.strong_wind_penalty
        if away_pass_ratio > config.strong_wind_pass_ratio:
            impact += config.strong_wind_penalty

    if conditions.temperature < config.extreme_cold_f:
        impact -= config.extreme_cold_penalty
        if home_is_dome:
            impact -= config.extreme_cold_dome_penalty
    elif conditions.temperature < config.freezing_f:
        impact -= config.freezing_penalty
        if home_is_dome:
            impact -= config.freezing_dome_penalty

    if conditions.precipitation_probability > config.likely_precip:
        run_bonus, pass_penalty = config.likely_precip_run_bonus, config.likely_precip_pass_penalty
    elif conditions.precipitation_probability > config.possible_precip:
        run_bonus, pass_penalty = config.possible_precip_run_bonus, config.possible_precip_pass_penalty
    else:
        run_bonus = pass_penalty = 0.0

    if run_bonus or pass_penalty:
        impact += run_bonus if home_pass_ratio < config.run_leaning_pass_ratio else -pass_penalty
        impact += -run_bonus if away_pass_ratio < config.run_leaning_pass_ratio else pass_penalty

    return clamp(impact, -config.impact_bound, config.impact_bound)


def weather_summary(conditions: WeatherConditions, config: WeatherConfig = DEFAULT_WEATHER_CONFIG) -> str:
    if conditions.is_indoor:
        return "Indoor game - no weather impact"

    factors = []
    wind = int(conditions.wind_speed)
    temp = int(conditions.temperature)
    precip = int(conditions.precipitation_probability * 100)

    if conditions.wind_speed > config.severe_wind_mph:
        factors.append(f"severe wind ({wind}mph) - favors running game")
    elif conditions.wind_speed > config.strong_wind_mph:
        factors.append(f"strong wind ({wind}mph) - passing difficult")

    if conditions.temperature < config.extreme_cold_f:
        factors.append(f"extreme cold ({temp}°F) - ball handling issues")
    elif conditions.temperature < config.freezing_f:
        factors.append(f"freezing temps ({temp}°F) - affects grip")

    if conditions.precipitation_probability > config.likely_precip:
        factors.append(f"likely precipitation ({precip}%) - favors rush")
    elif conditions.precipitation_probability > config.possible_precip:
        factors.append(f"possible precipitation ({precip}%)")

    if not factors:
        return f"Good weather conditions ({temp}°F, {wind}mph wind)"
    return "; ".join(factors)


def estimate_pass_ratio(
    team: Team,
    games: Iterable[Game],
    config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
) -> float:
    """
    Rough pass-play share from recent scoring; higher-scoring teams pass more.

    Uses up to the last `pass_ratio_games` completed games; a team without
    completed games gets the league-average ratio.
    """
    avg = average_points(build_team_log(team, games), config.pass_ratio_games)
    if avg is None:
        return config.league_pass_ratio
    ratio = config.league_pass_ratio + (avg - config.league_points) * config.pass_ratio_per_point
    return clamp(ratio, config.min_pass_ratio, config.max_pass_ratio)


class WeatherImpactAnalyzer:
    """
    Fetch the kickoff forecast at the home stadium and turn it into a factor.

    Fail-soft: any error from the weather source yields a neutral factor.
    """

    def __init__(
        self,
        source: WeatherSource,
        stadiums: Mapping[str, StadiumLocation] = STADIUMS,
        config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
    ) -> None:
        self.source = source
        self.stadiums = stadiums
        self.config = config

    def fetch(self, game: Game) -> WeatherConditions | None:
        location = weather_location(game.home_team, self.stadiums)
        try:
            return self.source.weather(location, game.scheduled_date)
        except Exception as e:
            logger.warning("Weather unavailable for %s at %s: %s", game.game_id, location, e)
            return None

    def assess(
        self,
        game: Game,
        conditions: WeatherConditions | None,
        home_games: Iterable[Game],
        away_games: Iterable[Game],
    ) -> FactorResult:
        if conditions is None:
            return NEUTRAL

        home_ratio = estimate_pass_ratio(game.home_team, home_games, self.config)
        away_ratio = estimate_pass_ratio(game.away_team, away_games, self.config)
        try:
            adjustment = weather_impact(
                conditions,
                home_ratio,
                away_ratio,
                is_dome_team(game.home_team, self.stadiums),
                self.config,
            )
            summary = weather_summary(conditions, self.config)
        except Exception as e:
            logger.warning("Unreadable forecast for %s: %s", game.game_id, e)
            return NEUTRAL
        return FactorResult(adjustment, summary)

    def analyze(self, game: Game, home_games: Iterable[Game], away_games: Iterable[Game]) -> FactorResult:
        return self.assess(game, self.fetch(game), home_games, away_games)

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import pandas as pd

from outcome_predictor.analysis.team_log import build_team_log
from outcome_predictor.domain.games import Game, Team
from outcome_predictor.utils import clamp

STABLE_SUMMARY = "Stable recent performance"


class TrendDirection(str, Enum):
    STRONGLY_IMPROVING = "strongly_improving"
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
    STRONGLY_DECLINING = "strongly_declining"


@dataclass(frozen=True)
class RecentFormConfig:
    """
    Windows, thresholds and momentum weights for recent-form analysis.

    Attributes
    ----------
    recent_window:
        Games used for the recent win rate and score differential.
    margin_window:
        Games scanned for blowout losses and clutch wins.
    streak_window:
        Maximum games scanned back when measuring the current streak.
    scoring_window:
        Games required for a scoring trend; split into two equal halves.
    blowout_margin:
        A loss by this many points or more is a blowout.
    clutch_margin:
        A win by this many points or fewer is a clutch win.
    score_normalizer:
        Points treated as one "unit" of differential / scoring change.
    strong_trend_delta / trend_delta:
        Recent-vs-overall win rate gaps for strong / regular trends.
    trend_scoring_threshold:
        Scoring trend needed (with a 2+ streak) for a regular trend.
    trend_bonus:
        Momentum bonus per trend direction.
    momentum_bound:
        Momentum is clamped to [-momentum_bound, momentum_bound].
    """

    recent_window: int = 3
    margin_window: int = 5
    streak_window: int = 10
    scoring_window: int = 8
    blowout_margin: int = 14
    clutch_margin: int = 7
    score_normalizer: float = 14.0

    strong_trend_delta: float = 0.30
    trend_delta: float = 0.15
    trend_scoring_threshold: float = 0.3

    win_rate_weight: float = 0.20
    score_diff_weight: float = 0.08
    trend_bonus: dict = field(
        default_factory=lambda: {
            TrendDirection.STRONGLY_IMPROVING: 0.08,
            TrendDirection.IMPROVING: 0.04,
            TrendDirection.STABLE: 0.0,
            TrendDirection.DECLINING: -0.04,
            TrendDirection.STRONGLY_DECLINING: -0.08,
        }
    )
    long_streak_bonus: float = 0.06
    short_streak_bonus: float = 0.03
    multiple_blowouts_penalty: float = 0.05
    single_blowout_penalty: float = 0.02
    clutch_bonus: float = 0.03
    scoring_trend_weight: float = 0.04
    momentum_bound: float = 0.15


DEFAULT_RECENT_FORM_CONFIG = RecentFormConfig()


@dataclass(frozen=True)
class RecentFormAnalysis:
    """
    Recent performance profile of one team.

    `current_streak` is positive for wins, negative for losses;
    `scoring_trend` is in [-1, 1], positive when the offense is improving.
    """

    last3_win_rate: float = 0.5
    last3_score_differential: float = 0.0
    trend: TrendDirection = TrendDirection.STABLE
    blowout_losses: int = 0
    clutch_wins: int = 0
    current_streak: int = 0
    scoring_trend: float = 0.0

    def momentum(self, config: RecentFormConfig = DEFAULT_RECENT_FORM_CONFIG) -> float:
        """
        Momentum adjustment in [-0.15, 0.15] (with default bounds).

        Positive values indicate a hot team, negative a cold one.
        """
        momentum = (self.last3_win_rate - 0.5) * config.win_rate_weight
        momentum += (self.last3_score_differential / config.score_normalizer) * config.score_diff_weight
        momentum += config.trend_bonus[self.trend]

        if self.current_streak >= 3:
            momentum += config.long_streak_bonus
        elif self.current_streak >= 2:
            momentum += config.short_streak_bonus
        elif self.current_streak <= -3:
            momentum -= config.long_streak_bonus
        elif self.current_streak <= -2:
            momentum -= config.short_streak_bonus

        if self.blowout_losses >= 2:
            momentum -= config.multiple_blowouts_penalty
        elif self.blowout_losses == 1:
            momentum -= config.single_blowout_penalty

        if self.clutch_wins >= 2:
            momentum += config.clutch_bonus

        momentum += self.scoring_trend * config.scoring_trend_weight

        return clamp(momentum, -config.momentum_bound, config.momentum_bound)

    @property
    def impact_summary(self) -> str:
        factors = []

        recent_pct = int(self.last3_win_rate * 100)
        if self.trend != TrendDirection.STABLE:
            label = self.trend.value.replace("_", " ")
            factors.append(f"{label} ({recent_pct}% in last 3)")

        if self.current_streak >= 2:
            factors.append(f"{self.current_streak}-game win streak")
        elif self.current_streak <= -2:
            factors.append(f"{abs(self.current_streak)}-game losing streak")

        if self.last3_score_differential > 10:
            factors.append(f"dominant wins (+{int(self.last3_score_differential)} avg margin)")
        elif self.last3_score_differential < -10:
            factors.append(f"struggling ({int(self.last3_score_differential)} avg margin)")

        if self.blowout_losses >= 2:
            factors.append(f"{self.blowout_losses} blowout losses in last 5")
        if self.clutch_wins >= 2:
            factors.append(f"{self.clutch_wins} clutch wins in last 5")

        return "; ".join(factors) if factors else STABLE_SUMMARY


def _current_streak(wins: pd.Series, window: int) -> int:
    """Consecutive same-result games ending at the most recent one (+wins / -losses)."""
    recent = wins.tail(window).tolist()
    last_win = bool(recent[-1])
    streak = 0
    for won in reversed(recent):
        if bool(won) != last_win:
            break
        streak += 1 if last_win else -1
    return streak


def _scoring_trend(points: pd.Series, config: RecentFormConfig) -> float:
    if len(points) < config.scoring_window:
        return 0.0
    window = points.tail(config.scoring_window)
    half = config.scoring_window // 2
    earlier = float(window.iloc[:half].mean())
    recent = float(window.iloc[half:].mean())
    return clamp((recent - earlier) / config.score_normalizer, -1.0, 1.0)


def _determine_trend(
    last3_win_rate: float,
    overall_win_rate: float,
    streak: int,
    scoring_trend: float,
    config: RecentFormConfig,
) -> TrendDirection:
    delta = last3_win_rate - overall_win_rate

    if delta > config.strong_trend_delta and streak >= 2:
        return TrendDirection.STRONGLY_IMPROVING
    if delta > config.trend_delta or (streak >= 2 and scoring_trend > config.trend_scoring_threshold):
        return TrendDirection.IMPROVING
    if delta < -config.strong_trend_delta and streak <= -2:
        return TrendDirection.STRONGLY_DECLINING
    if delta < -config.trend_delta or (streak <= -2 and scoring_trend < -config.trend_scoring_threshold):
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def analyze_recent_form(
    team: Team,
    games: Iterable[Game],
    config: RecentFormConfig = DEFAULT_RECENT_FORM_CONFIG,
) -> RecentFormAnalysis:
    """
    Compute a team's recent form from its completed games.

    Games without an outcome are ignored; the rest are ordered by kickoff.
    A team with no completed games gets a neutral (stable, 50%) profile.
    """
    log = build_team_log(team, games)
    if log.empty:
        return RecentFormAnalysis()

    last3 = log.tail(config.recent_window)
    last3_win_rate = float(last3["team_win"].mean())
    avg_diff = float(last3["point_diff"].mean())

    margins = log["point_diff"].tail(config.margin_window)
    blowouts = int((margins <= -config.blowout_margin).sum())
    clutch = int(((margins > 0) & (margins <= config.clutch_margin)).sum())

    streak = _current_streak(log["team_win"], config.streak_window)
    scoring_trend = _scoring_trend(log["points_for"], config)
    trend = _determine_trend(
        last3_win_rate,
        float(log["team_win"].mean()),
        streak,
        scoring_trend,
        config,
    )

    return RecentFormAnalysis(
        last3_win_rate=last3_win_rate,
        last3_score_differential=avg_diff,
        trend=trend,
        blowout_losses=blowouts,
        clutch_wins=clutch,
        current_streak=streak,
        scoring_trend=scoring_trend,
    )

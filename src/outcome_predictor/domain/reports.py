"""
Value objects supplied by the optional collaborators (injuries, news, weather).

These are produced by adapters outside the engine; the engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence

from outcome_predictor.domain.games import Team


class InjuryStatus(str, Enum):
    OUT = "Out"
    DOUBTFUL = "Doubtful"
    QUESTIONABLE = "Questionable"
    PROBABLE = "Probable"
    HEALTHY = "Healthy"

    @property
    def multiplier(self) -> float:
        return _STATUS_MULTIPLIERS[self]


class PlayerPosition(str, Enum):
    QUARTERBACK = "QB"
    RUNNING_BACK = "RB"
    WIDE_RECEIVER = "WR"
    TIGHT_END = "TE"
    DEFENSE = "DEF"
    OTHER = "Other"

    @property
    def impact_weight(self) -> float:
        return _POSITION_WEIGHTS[self]


_STATUS_MULTIPLIERS = {
    InjuryStatus.OUT: 1.0,
    InjuryStatus.DOUBTFUL: 0.75,
    InjuryStatus.QUESTIONABLE: 0.4,
    InjuryStatus.PROBABLE: 0.15,
    InjuryStatus.HEALTHY: 0.0,
}

_POSITION_WEIGHTS = {
    PlayerPosition.QUARTERBACK: 1.0,
    PlayerPosition.RUNNING_BACK: 0.6,
    PlayerPosition.WIDE_RECEIVER: 0.5,
    PlayerPosition.TIGHT_END: 0.3,
    PlayerPosition.DEFENSE: 0.4,
    PlayerPosition.OTHER: 0.1,
}

# Diminishing weights for the three most impactful injuries
_TOP_INJURY_WEIGHTS = (1.0, 0.5, 0.25)


@dataclass(frozen=True)
class InjuredPlayer:
    name: str
    position: PlayerPosition
    status: InjuryStatus
    description: str | None = None

    @property
    def impact(self) -> float:
        """Impact on team performance in [0, 1]."""
        return self.position.impact_weight * self.status.multiplier


@dataclass(frozen=True)
class TeamInjuryReport:
    team: Team
    injuries: Sequence[InjuredPlayer] = ()
    fetched_at: datetime = field(default_factory=datetime.now)

    @property
    def total_impact(self) -> float:
        """Top-3 impacts with diminishing weights, capped at 1.0."""
        impacts = sorted((p.impact for p in self.injuries), reverse=True)
        total = sum(i * w for i, w in zip(impacts, _TOP_INJURY_WEIGHTS))
        return min(1.0, total)

    @property
    def key_injuries(self) -> list[InjuredPlayer]:
        return [
            p
            for p in self.injuries
            if p.impact > 0.3 and p.status in (InjuryStatus.OUT, InjuryStatus.DOUBTFUL)
        ]


@dataclass(frozen=True)
class Article:
    """News article or social post about one or more teams."""

    title: str
    content: str
    published_date: datetime
    source: str = ""
    teams: Sequence[Team] = ()


@dataclass(frozen=True)
class NewsSentiment:
    """Keyword-derived sentiment impact, in [-0.15, 0.10]."""

    impact: float
    key_news: str | None = None


@dataclass(frozen=True)
class WeatherConditions:
    """
    Forecast conditions at kickoff.

    Attributes:
        temperature: Degrees Fahrenheit.
        wind_speed: Miles per hour.
        precipitation_probability: Chance of rain/snow in [0, 1].
        is_indoor: Dome or closed roof; indoor games carry no weather impact.
        location: City or venue the forecast is for.
        forecast_time: When the forecast applies.
        description: Free-text summary ("Clear", "Snow", ...).
    """

    temperature: float
    wind_speed: float
    precipitation_probability: float
    is_indoor: bool
    location: str
    forecast_time: datetime
    description: str = ""

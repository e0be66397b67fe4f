"""
Abstract collaborators consumed by the prediction engine.

Concrete adapters (HTTP clients, caches, databases) live outside this
package; only the read contracts below matter to the predictors. Any method
may raise; the history source's errors propagate, the optional sources'
errors are absorbed by the analyzers that call them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from outcome_predictor.domain.games import Game, Team
from outcome_predictor.domain.reports import Article, TeamInjuryReport, WeatherConditions


class GameRepository(ABC):
    """Historical and scheduled games."""

    @abstractmethod
    def games_for_team(self, team: Team, season: int) -> list[Game]:
        """All games (completed and scheduled) involving `team` in `season`, chronological."""

    @abstractmethod
    def games_between(self, start: datetime, end: datetime) -> list[Game]:
        """All games with kickoff in [start, end], chronological."""


class InjurySource(ABC):
    @abstractmethod
    def injuries(self, team: Team, season: int) -> TeamInjuryReport:
        """Current injury report for `team`."""


class NewsSource(ABC):
    @abstractmethod
    def articles(self, team: Team, before: datetime) -> list[Article]:
        """Articles about `team` published before `before`."""


class WeatherSource(ABC):
    @abstractmethod
    def weather(self, location: str, at: datetime) -> WeatherConditions:
        """Forecast for `location` at `at`; may fail beyond the forecast horizon."""

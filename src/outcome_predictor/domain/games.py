from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from outcome_predictor.exceptions import InvalidConfidenceError, InvalidProbabilityError


class Conference(str, Enum):
    AFC = "AFC"
    NFC = "NFC"


class Division(str, Enum):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"


@dataclass(frozen=True)
class Team:
    """
    An NFL franchise.

    Attributes:
        abbreviation: Team code used as identity (e.g. "KC").
        name: Full team name (e.g. "Kansas City Chiefs").
        conference: AFC or NFC.
        division: Division within the conference.
    """

    abbreviation: str
    name: str
    conference: Conference
    division: Division

    def same_division(self, other: "Team") -> bool:
        return self.conference == other.conference and self.division == other.division


class Winner(str, Enum):
    HOME = "home"
    AWAY = "away"
    TIE = "tie"


@dataclass(frozen=True)
class GameOutcome:
    """Final score of a completed game."""

    home_score: int
    away_score: int

    def __post_init__(self):
        if self.home_score < 0 or self.away_score < 0:
            raise ValueError(
                f"Scores must be non-negative; got {self.home_score}-{self.away_score}"
            )

    @property
    def winner(self) -> Winner:
        if self.home_score > self.away_score:
            return Winner.HOME
        if self.away_score > self.home_score:
            return Winner.AWAY
        return Winner.TIE

    @property
    def point_differential(self) -> int:
        """Point differential from the home team's perspective."""
        return self.home_score - self.away_score


@dataclass(frozen=True)
class Game:
    """
    A scheduled or completed game.

    Attributes:
        game_id: Stable identifier (e.g. "2023_01_DET_KC").
        home_team / away_team: Participants.
        scheduled_date: Kickoff time.
        week: Week number in the season.
        season: Season year.
        outcome: Final score if the game has been played.
    """

    game_id: str
    home_team: Team
    away_team: Team
    scheduled_date: datetime
    week: int
    season: int
    outcome: GameOutcome | None = None

    @property
    def is_completed(self) -> bool:
        return self.outcome is not None

    def completed_before(self, moment: datetime) -> bool:
        """True if the game has an outcome and kicked off strictly before `moment`."""
        return self.outcome is not None and self.scheduled_date < moment

    def involves(self, team: Team) -> bool:
        return team.abbreviation in (self.home_team.abbreviation, self.away_team.abbreviation)

    def is_home(self, team: Team) -> bool:
        return self.home_team.abbreviation == team.abbreviation

    def is_away(self, team: Team) -> bool:
        return self.away_team.abbreviation == team.abbreviation

    def is_matchup(self, team_a: Team, team_b: Team) -> bool:
        """True if the game is between the two teams, either side at home."""
        return self.involves(team_a) and self.involves(team_b)

    def points_for(self, team: Team) -> int | None:
        if self.outcome is None:
            return None
        if self.is_home(team):
            return self.outcome.home_score
        if self.is_away(team):
            return self.outcome.away_score
        return None

    def point_diff(self, team: Team) -> int | None:
        """Score differential from `team`'s perspective."""
        if self.outcome is None:
            return None
        if self.is_home(team):
            return self.outcome.point_differential
        if self.is_away(team):
            return -self.outcome.point_differential
        return None

    def team_won(self, team: Team) -> bool:
        if self.outcome is None:
            return False
        if self.is_home(team):
            return self.outcome.winner == Winner.HOME
        if self.is_away(team):
            return self.outcome.winner == Winner.AWAY
        return False


@dataclass(frozen=True)
class Prediction:
    """
    Predicted outcome of a game.

    Construction fails with InvalidProbabilityError / InvalidConfidenceError
    when either value falls outside [0, 1].
    """

    game: Game
    home_win_probability: float
    confidence: float
    reasoning: str
    predicted_home_score: int | None = None
    predicted_away_score: int | None = None
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not 0.0 <= self.home_win_probability <= 1.0:
            raise InvalidProbabilityError(self.home_win_probability)
        if not 0.0 <= self.confidence <= 1.0:
            raise InvalidConfidenceError(self.confidence)

    @property
    def predicted_winner(self) -> Winner:
        if self.home_win_probability > 0.5:
            return Winner.HOME
        if self.home_win_probability < 0.5:
            return Winner.AWAY
        return Winner.TIE

    @property
    def away_win_probability(self) -> float:
        return 1.0 - self.home_win_probability

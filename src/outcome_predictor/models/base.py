from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from outcome_predictor.data.sources import GameRepository
from outcome_predictor.domain.games import Game, Prediction, Team

FeatureHints = Mapping[str, float]


class GamePredictor(ABC):
    """Anything that can turn a scheduled game into a Prediction."""

    @abstractmethod
    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        """
        Predict `game`.

        Parameters
        ----------
        game:
            The game to predict; its kickoff is the cut-off for history.
        features:
            Optional sparse hints (e.g. {"news_volume": 3.0}). Only the
            context router reads them.

        Raises
        ------
        InsufficientDataError
            If neither team has completed history before kickoff.
        """


def completed_history(repository: GameRepository, team: Team, game: Game) -> list[Game]:
    """`team`'s games in `game`'s season that finished before its kickoff."""
    return [
        g
        for g in repository.games_for_team(team, game.season)
        if g.completed_before(game.scheduled_date)
    ]

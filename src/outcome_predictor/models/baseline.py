from __future__ import annotations

from typing import Optional

from outcome_predictor.analysis.team_log import build_team_log, win_rate
from outcome_predictor.config import BaselineConfig
from outcome_predictor.data.sources import GameRepository
from outcome_predictor.domain.games import Game, Prediction
from outcome_predictor.exceptions import InsufficientDataError
from outcome_predictor.models.base import FeatureHints, GamePredictor, completed_history
from outcome_predictor.utils import clamp01, pct


class BaselinePredictor(GamePredictor):
    """
    Win rate + home-field advantage.

    p = clamp01((home win rate + hfa + (1 - away win rate)) / 2), with a
    0.5 win rate for a team without completed games this season.
    Confidence grows linearly with the number of completed games.
    """

    def __init__(self, repository: GameRepository, config: BaselineConfig | None = None) -> None:
        if config is None:
            config = BaselineConfig()
        self.repository = repository
        self.config = config

    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        home_games = completed_history(self.repository, game.home_team, game)
        away_games = completed_history(self.repository, game.away_team, game)
        if not home_games and not away_games:
            raise InsufficientDataError()

        home_rate = win_rate(build_team_log(game.home_team, home_games))
        away_rate = win_rate(build_team_log(game.away_team, away_games))
        hfa = self.config.home_field_advantage

        probability = clamp01((home_rate + hfa + (1.0 - away_rate)) / 2.0)
        total = len(home_games) + len(away_games)
        confidence = min(1.0, total / self.config.full_confidence_games)

        reasoning = (
            "Baseline prediction based on historical win rates:\n"
            f"- {game.home_team.name}: {pct(home_rate)} win rate ({len(home_games)} games)\n"
            f"- {game.away_team.name}: {pct(away_rate)} win rate ({len(away_games)} games)\n"
            f"- Home field advantage: +{pct(hfa)}\n"
            f"- Confidence: {pct(confidence)}"
        )

        return Prediction(
            game=game,
            home_win_probability=probability,
            confidence=confidence,
            reasoning=reasoning,
        )

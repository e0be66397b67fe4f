from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Tuple

import numpy as np
import pandas as pd

from outcome_predictor.domain.games import GameOutcome, Prediction, Winner

LOG_LOSS_EPS = 1e-15

PredictionPair = Tuple[Prediction, GameOutcome]

FRAME_COLS = [
    "game_id",
    "season",
    "week",
    "home_win_probability",
    "confidence",
    "predicted_winner",
    "actual_winner",
    "home_won",
]


@dataclass(frozen=True)
class EvaluationMetrics:
    """
    Aggregate quality of a batch of settled predictions.

    Attributes:
        accuracy: Fraction of games whose predicted winner matched the result.
        brier_score: Mean squared error of the home-win probability (lower is better).
        log_loss: Mean negative log-likelihood of the result (lower is better).
        total_predictions: Number of (prediction, outcome) pairs scored.
    """

    accuracy: float = 0.0
    brier_score: float = 0.0
    log_loss: float = 0.0
    total_predictions: int = 0


def predictions_frame(pairs: Iterable[PredictionPair]) -> pd.DataFrame:
    """
    One row per (prediction, outcome) pair.

    'home_won' is 1 only for a home win; ties and away wins are both 0.
    """
    records = [
        (
            p.game.game_id,
            p.game.season,
            p.game.week,
            p.home_win_probability,
            p.confidence,
            p.predicted_winner.value,
            outcome.winner.value,
            int(outcome.winner == Winner.HOME),
        )
        for p, outcome in pairs
    ]
    return pd.DataFrame.from_records(records, columns=FRAME_COLS)


def _score_frame(df: pd.DataFrame) -> EvaluationMetrics:
    if df.empty:
        return EvaluationMetrics()

    p = df["home_win_probability"].to_numpy(dtype=float)
    actual = df["home_won"].to_numpy(dtype=float)

    correct = df["predicted_winner"].to_numpy() == df["actual_winner"].to_numpy()
    brier = np.mean((p - actual) ** 2)

    likelihood = np.clip(np.where(actual == 1.0, p, 1 - p), LOG_LOSS_EPS, 1 - LOG_LOSS_EPS)
    log_loss = np.mean(-np.log(likelihood))

    return EvaluationMetrics(
        accuracy=float(np.mean(correct)),
        brier_score=float(brier),
        log_loss=float(log_loss),
        total_predictions=len(df),
    )


def evaluate(pairs: Iterable[PredictionPair]) -> EvaluationMetrics:
    """
    Score settled predictions.

    Empty input gives all-zero metrics. A tie is scored like an away win
    (actual = 0) for both Brier score and log loss.
    """
    return _score_frame(predictions_frame(pairs))


def evaluate_by_season(pairs: Iterable[PredictionPair]) -> pd.DataFrame:
    """
    Metrics per season, one row each, sorted by season.

    Columns: season, accuracy, brier_score, log_loss, total_predictions.
    """
    df = predictions_frame(pairs)
    rows = [
        {"season": int(season), **asdict(_score_frame(group))}
        for season, group in df.groupby("season", sort=True)
    ]
    return pd.DataFrame(
        rows, columns=["season", "accuracy", "brier_score", "log_loss", "total_predictions"]
    )


class PredictionEvaluator:
    """Stateless wrapper so evaluators can be passed around like predictors."""

    def evaluate(self, pairs: Iterable[PredictionPair]) -> EvaluationMetrics:
        return evaluate(pairs)

    def evaluate_by_season(self, pairs: Iterable[PredictionPair]) -> pd.DataFrame:
        return evaluate_by_season(pairs)

import math

import pytest

from outcome_predictor.domain.games import GameOutcome
from outcome_predictor.evaluation.metrics import (
    EvaluationMetrics,
    PredictionEvaluator,
    evaluate,
    evaluate_by_season,
    predictions_frame,
)

HOME_WIN = GameOutcome(27, 20)
AWAY_WIN = GameOutcome(13, 24)
TIE = GameOutcome(20, 20)


def test_metrics_for_two_correct_predictions(make_prediction):
    pairs = [(make_prediction(0.8), HOME_WIN), (make_prediction(0.3), AWAY_WIN)]

    metrics = PredictionEvaluator().evaluate(pairs)

    assert metrics.accuracy == pytest.approx(1.0)
    assert metrics.brier_score == pytest.approx(0.065)
    assert metrics.log_loss == pytest.approx((-math.log(0.8) - math.log(0.7)) / 2)
    assert metrics.log_loss == pytest.approx(0.2899, abs=1e-4)
    assert metrics.total_predictions == 2


def test_empty_input_gives_zero_metrics():
    assert evaluate([]) == EvaluationMetrics(0.0, 0.0, 0.0, 0)


def test_wrong_pick_lowers_accuracy(make_prediction):
    pairs = [(make_prediction(0.8), AWAY_WIN), (make_prediction(0.6), HOME_WIN)]

    metrics = evaluate(pairs)

    assert metrics.accuracy == pytest.approx(0.5)
    assert metrics.brier_score == pytest.approx((0.64 + 0.16) / 2)


def test_tie_is_scored_as_away_win(make_prediction):
    """Known simplification: a tie counts as actual = 0 for Brier and log loss."""
    metrics = evaluate([(make_prediction(0.6), TIE)])

    assert metrics.accuracy == 0.0
    assert metrics.brier_score == pytest.approx(0.36)
    assert metrics.log_loss == pytest.approx(-math.log(0.4))


def test_certain_wrong_prediction_has_finite_log_loss(make_prediction):
    metrics = evaluate([(make_prediction(1.0), AWAY_WIN)])

    assert math.isfinite(metrics.log_loss)
    assert metrics.log_loss > 30


def test_predictions_frame_columns(make_prediction):
    df = predictions_frame([(make_prediction(0.7), HOME_WIN), (make_prediction(0.7), TIE)])

    assert list(df["home_won"]) == [1, 0]
    assert list(df["actual_winner"]) == ["home", "tie"]
    assert list(df["predicted_winner"]) == ["home", "home"]


def test_evaluate_by_season(make_prediction):
    pairs = [
        (make_prediction(0.8, season=2022), HOME_WIN),
        (make_prediction(0.8, season=2023), AWAY_WIN),
        (make_prediction(0.3, season=2023), AWAY_WIN),
    ]

    df = evaluate_by_season(pairs)

    assert list(df["season"]) == [2022, 2023]
    assert list(df["total_predictions"]) == [1, 2]
    assert df.loc[df["season"] == 2022, "accuracy"].iloc[0] == pytest.approx(1.0)
    assert df.loc[df["season"] == 2023, "accuracy"].iloc[0] == pytest.approx(0.5)
    assert df.loc[df["season"] == 2023, "brier_score"].iloc[0] == pytest.approx((0.64 + 0.09) / 2)


def test_evaluate_by_season_empty():
    df = evaluate_by_season([])
    assert df.empty
    assert list(df.columns) == ["season", "accuracy", "brier_score", "log_loss", "total_predictions"]

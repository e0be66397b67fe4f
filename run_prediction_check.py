"""
Quick Prediction Check

Loads real schedules, predicts one week of a season with every predictor
variant, prints the evaluation metrics for each and saves the predictions
to results/predictions/ as parquet.

Example:
    python run_prediction_check.py
    python run_prediction_check.py 2023 12
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

# Ensure src/ is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from outcome_predictor.config import LOG_CONFIG  # noqa: E402
from outcome_predictor.data.loaders.schedules import ScheduleLoader, ScheduleLoaderConfig  # noqa: E402
from outcome_predictor.data.repository import (  # noqa: E402
    InMemoryPredictionRepository,
    ScheduleFrameRepository,
)
from outcome_predictor.evaluation.metrics import PredictionEvaluator  # noqa: E402
from outcome_predictor.exceptions import InsufficientDataError  # noqa: E402
from outcome_predictor.models.baseline import BaselinePredictor  # noqa: E402
from outcome_predictor.models.enhanced import EnhancedPredictor  # noqa: E402
from outcome_predictor.models.ensemble import (  # noqa: E402
    AdaptiveEnsemble,
    ContextRouter,
    StaticEnsemble,
)


def _predictions_table(stores: dict[str, InMemoryPredictionRepository], start, end) -> pd.DataFrame:
    rows = [
        {
            "model": name,
            "game_id": p.game.game_id,
            "home_win_probability": p.home_win_probability,
            "confidence": p.confidence,
            "created_at": p.created_at,
        }
        for name, store in stores.items()
        for p in store.predictions_between(start, end)
    ]
    return pd.DataFrame(rows)


def main(season: int = 2023, week: int = 10) -> None:
    logging.basicConfig(level=LOG_CONFIG.level, format=LOG_CONFIG.format)
    print(f"▶ Running prediction check for {season} week {week}...\n")
    run_started = datetime.now()

    # Two prior seasons feed the head-to-head lookups
    loader = ScheduleLoader(
        ScheduleLoaderConfig(seasons=list(range(season - 2, season + 1)), include_postseason=False)
    )
    try:
        schedules = loader.load()
    except Exception as exc:  # pragma: no cover - manual inspection script
        print("\n❌ ERROR while loading schedules:\n")
        print(type(exc).__name__, ":", str(exc))
        return

    repository = ScheduleFrameRepository(schedules)
    baseline = BaselinePredictor(repository)
    enhanced = EnhancedPredictor(repository)
    adaptive = AdaptiveEnsemble(baseline, enhanced)

    variants = {
        "baseline": baseline,
        "enhanced": enhanced,
        "static_ensemble": StaticEnsemble([(baseline, 0.3), (enhanced, 0.7)]),
        "context_router": ContextRouter(baseline, enhanced),
        "adaptive_ensemble": adaptive,
    }
    stores = {name: InMemoryPredictionRepository() for name in variants}

    week_games = [g for g in repository.games_for_week(season, week) if g.outcome is not None]
    print(f"Games with results in week {week}: {len(week_games)}\n")
    if not week_games:
        print("✅ Nothing to predict.")
        return

    for game in week_games:
        for name, predictor in variants.items():
            if name == "adaptive_ensemble":
                continue
            try:
                stores[name].save(predictor.predict(game))
            except InsufficientDataError:
                print(f"  {name}: not enough history for {game.game_id}")

        try:
            result = adaptive.predict_with_components(game)
        except InsufficientDataError:
            continue
        stores["adaptive_ensemble"].save(result.prediction)
        adaptive.update_weights(result.baseline, result.enhanced, game.outcome)

    sample = stores["enhanced"].predictions_for(week_games[0].game_id)
    if sample:
        print("--- Sample enhanced reasoning ---")
        print(sample[-1].reasoning)
        print()

    first_kickoff = week_games[0].scheduled_date
    last_kickoff = week_games[-1].scheduled_date
    evaluator = PredictionEvaluator()
    print("--- Metrics ---")
    for name, store in stores.items():
        m = evaluator.evaluate(store.settled(repository, first_kickoff, last_kickoff))
        print(
            f"{name:<18} n={m.total_predictions:<3} acc={m.accuracy:.3f} "
            f"brier={m.brier_score:.4f} logloss={m.log_loss:.4f}"
        )

    base_w, enh_w = adaptive.weights
    print(f"\nAdaptive weights: baseline={base_w:.3f} enhanced={enh_w:.3f}")

    table = _predictions_table(stores, run_started, datetime.now())
    LOG_CONFIG.predictions_dir.mkdir(parents=True, exist_ok=True)
    out_path = LOG_CONFIG.predictions_dir / f"predictions_{season}_week{week:02d}.parquet"
    table.to_parquet(out_path, index=False)
    print(f"Saved {len(table)} predictions to: {out_path}")
    print("\n✅ Prediction check complete.")


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:3]]
    main(*args)

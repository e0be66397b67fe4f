"""
Meta-strategies over other predictors.

- StaticEnsemble: fixed-weight average over any number of predictors
- AdaptiveEnsemble: two predictors whose weights follow their rolling accuracy
- ContextRouter: picks one of two predictors per game
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Optional, Sequence

from outcome_predictor.domain.games import Game, GameOutcome, Prediction
from outcome_predictor.exceptions import InsufficientDataError
from outcome_predictor.models.base import FeatureHints, GamePredictor
from outcome_predictor.utils import clamp01, pct

logger = logging.getLogger(__name__)


class StaticEnsemble(GamePredictor):
    """
    Weighted average of several predictors.

    Weights must be positive. Members that raise are logged and skipped;
    the average is normalised by the weights of the members that succeeded,
    so the result always lies between the smallest and largest surviving
    probability.
    """

    def __init__(self, members: Sequence[tuple[GamePredictor, float]]) -> None:
        if not members:
            raise ValueError("StaticEnsemble needs at least one member.")
        if any(weight <= 0 for _, weight in members):
            raise ValueError("StaticEnsemble member weights must be positive.")
        self.members = list(members)

    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        results: list[tuple[Prediction, float]] = []
        for predictor, weight in self.members:
            try:
                results.append((predictor.predict(game, features), weight))
            except Exception as e:
                logger.warning(
                    "Ensemble member %s failed for %s: %s",
                    type(predictor).__name__,
                    game.game_id,
                    e,
                )

        if not results:
            raise InsufficientDataError()

        total_weight = sum(w for _, w in results)
        shares = [(p, w / total_weight) for p, w in results]
        probability = sum(p.home_win_probability * share for p, share in shares)
        confidence = sum(p.confidence * share for p, share in shares)

        lines = [
            f"Ensemble Prediction (combining {len(results)} models):",
            f"Final probability: {pct(probability)}",
            "",
            "Individual predictions:",
            "",
        ]
        for i, (prediction, weight) in enumerate(results, start=1):
            lines += [
                f"Model {i} (weight: {weight:.2f}):",
                f"- Probability: {pct(prediction.home_win_probability)}",
                f"- Confidence: {pct(prediction.confidence)}",
                "",
            ]

        return Prediction(
            game=game,
            home_win_probability=clamp01(probability),
            confidence=clamp01(confidence),
            reasoning="\n".join(lines),
        )


@dataclass(frozen=True)
class AdaptiveResult:
    """Blended prediction plus the member predictions it was built from."""

    prediction: Prediction
    baseline: Prediction
    enhanced: Prediction


class AdaptiveEnsemble(GamePredictor):
    """
    Two-member ensemble whose weights track recent accuracy.

    `update_weights` records whether each member picked the right winner in
    a rolling window of `window_size` games and resets the weights to each
    member's share of the combined window accuracy. When neither member has
    been right in the window the weights are left unchanged.

    The weight pair and the window are guarded by a lock; member
    predictions run outside it, so `predict` may see weights that are one
    update stale.
    """

    def __init__(
        self,
        baseline: GamePredictor,
        enhanced: GamePredictor,
        baseline_weight: float = 0.3,
        enhanced_weight: float = 0.7,
        window_size: int = 20,
    ) -> None:
        if window_size < 1:
            raise ValueError("window_size must be at least 1.")
        if baseline_weight <= 0 or enhanced_weight <= 0:
            raise ValueError("AdaptiveEnsemble weights must be positive.")
        self.baseline = baseline
        self.enhanced = enhanced
        self.window_size = window_size
        self._baseline_weight = baseline_weight
        self._enhanced_weight = enhanced_weight
        self._window: deque[tuple[bool, bool]] = deque(maxlen=window_size)
        self._lock = threading.Lock()

    @property
    def weights(self) -> tuple[float, float]:
        """(baseline weight, enhanced weight)."""
        with self._lock:
            return self._baseline_weight, self._enhanced_weight

    @property
    def window(self) -> list[tuple[bool, bool]]:
        """Copy of the rolling (baseline correct, enhanced correct) window, oldest first."""
        with self._lock:
            return list(self._window)

    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        return self.predict_with_components(game, features).prediction

    def predict_with_components(
        self, game: Game, features: Optional[FeatureHints] = None
    ) -> AdaptiveResult:
        """Blend both members; member failures propagate."""
        baseline = self.baseline.predict(game, features)
        enhanced = self.enhanced.predict(game, features)

        with self._lock:
            w_base, w_enh = self._baseline_weight, self._enhanced_weight
            observed = len(self._window)

        total = w_base + w_enh
        probability = (
            baseline.home_win_probability * w_base + enhanced.home_win_probability * w_enh
        ) / total
        confidence = (baseline.confidence * w_base + enhanced.confidence * w_enh) / total

        reasoning = (
            "Adaptive Ensemble Prediction:\n"
            f"- Baseline: {pct(baseline.home_win_probability)} (weight: {w_base:.2f})\n"
            f"- Enhanced: {pct(enhanced.home_win_probability)} (weight: {w_enh:.2f})\n"
            f"- Final: {pct(probability)}\n"
            "\n"
            f"Recent accuracy window: {observed}/{self.window_size} predictions"
        )

        blended = Prediction(
            game=game,
            home_win_probability=clamp01(probability),
            confidence=clamp01(confidence),
            reasoning=reasoning,
        )
        return AdaptiveResult(prediction=blended, baseline=baseline, enhanced=enhanced)

    def update_weights(
        self,
        baseline_prediction: Prediction,
        enhanced_prediction: Prediction,
        outcome: GameOutcome,
    ) -> tuple[float, float]:
        """
        Record one settled game and re-derive the weights.

        Returns the (baseline, enhanced) weights after the update.
        """
        baseline_correct = baseline_prediction.predicted_winner == outcome.winner
        enhanced_correct = enhanced_prediction.predicted_winner == outcome.winner

        with self._lock:
            self._window.append((baseline_correct, enhanced_correct))

            n = len(self._window)
            baseline_acc = sum(1 for b, _ in self._window if b) / n
            enhanced_acc = sum(1 for _, e in self._window if e) / n
            total = baseline_acc + enhanced_acc

            if total > 0:
                self._baseline_weight = baseline_acc / total
                self._enhanced_weight = enhanced_acc / total

            weights = (self._baseline_weight, self._enhanced_weight)

        logger.info(
            "Adaptive weights after %d settled games: baseline=%.3f enhanced=%.3f",
            n,
            weights[0],
            weights[1],
        )
        return weights


SIGNAL_PREFIXES = ("sentiment_", "news_")
LATE_SEASON_WEEK = 15


class ContextRouter(GamePredictor):
    """
    Send each game to exactly one of two predictors.

    The enhanced predictor handles division games, games with news or
    sentiment feature hints and games from week 15 on; everything else goes
    to the baseline.
    """

    def __init__(self, baseline: GamePredictor, enhanced: GamePredictor) -> None:
        self.baseline = baseline
        self.enhanced = enhanced

    @staticmethod
    def prefers_enhanced(game: Game, features: Optional[FeatureHints] = None) -> bool:
        if game.home_team.same_division(game.away_team):
            return True
        if features and any(key.startswith(SIGNAL_PREFIXES) for key in features):
            return True
        return game.week >= LATE_SEASON_WEEK

    def route(self, game: Game, features: Optional[FeatureHints] = None) -> GamePredictor:
        if self.prefers_enhanced(game, features):
            return self.enhanced
        return self.baseline

    def predict(self, game: Game, features: Optional[FeatureHints] = None) -> Prediction:
        predictor = self.route(game, features)
        logger.debug("Routing %s to %s", game.game_id, type(predictor).__name__)
        return predictor.predict(game, features)

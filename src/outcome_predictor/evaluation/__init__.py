"""Scoring settled predictions: accuracy, Brier score and log loss."""

__all__: list[str] = []

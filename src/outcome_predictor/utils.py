"""Small numeric helpers shared by analyzers and predictors."""

from __future__ import annotations


def clamp(value: float, lower: float, upper: float) -> float:
    """Restrict `value` to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def pct(value: float) -> str:
    """Format a 0..1 fraction as a percentage with one decimal, e.g. '67.5%'."""
    return f"{value * 100:.1f}%"

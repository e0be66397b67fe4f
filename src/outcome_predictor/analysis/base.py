from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FactorResult:
    """
    Output of a single factor analyzer.

    Attributes:
        adjustment: Raw (unweighted) adjustment; positive favors the home team.
        details: Explanation fragment for the reasoning text; empty when the
            factor has nothing to report or its data source failed.
    """

    adjustment: float = 0.0
    details: str = ""


NEUTRAL = FactorResult()

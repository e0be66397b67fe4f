"""
Game predictors.

- base: the GamePredictor interface shared by every variant
- baseline: win rate + home-field advantage
- enhanced: weighted multi-factor model over the analysis package
- ensemble: static ensemble, accuracy-adaptive ensemble and context router
"""

__all__: list[str] = []

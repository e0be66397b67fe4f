"""
outcome_predictor

Core package for the NFL game outcome prediction engine.

Structure:
- domain: teams, games, predictions and external report value objects
- data: reference tables (teams, stadiums), history/report sources, loaders
- analysis: factor analyzers (recent form, rest & travel, weather, matchups,
  injuries, news sentiment)
- models: baseline / enhanced predictors and the meta-strategies built on them
- evaluation: accuracy, Brier score and log loss over settled predictions
"""

__all__ = ["config"]

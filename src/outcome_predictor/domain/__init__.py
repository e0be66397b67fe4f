"""Domain value objects: teams, games, outcomes, predictions and collaborator reports."""

from outcome_predictor.domain.games import (
    Conference,
    Division,
    Game,
    GameOutcome,
    Prediction,
    Team,
    Winner,
)
from outcome_predictor.domain.reports import (
    Article,
    InjuredPlayer,
    InjuryStatus,
    NewsSentiment,
    PlayerPosition,
    TeamInjuryReport,
    WeatherConditions,
)

__all__ = [
    "Article",
    "Conference",
    "Division",
    "Game",
    "GameOutcome",
    "InjuredPlayer",
    "InjuryStatus",
    "NewsSentiment",
    "PlayerPosition",
    "Prediction",
    "Team",
    "TeamInjuryReport",
    "WeatherConditions",
    "Winner",
]

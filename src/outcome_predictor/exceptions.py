"""Errors raised by the prediction engine."""


class PredictionError(Exception):
    """Base class for failures while producing a prediction."""


class InsufficientDataError(PredictionError):
    """Neither team has any completed history before kickoff."""

    def __init__(self, message: str = "Insufficient data to make prediction"):
        super().__init__(message)


class InvalidProbabilityError(PredictionError, ValueError):
    """A home-win probability outside [0, 1] reached a Prediction."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Invalid probability: {value}. Must be between 0.0 and 1.0")


class InvalidConfidenceError(PredictionError, ValueError):
    """A confidence outside [0, 1] reached a Prediction."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Invalid confidence: {value}. Must be between 0.0 and 1.0")

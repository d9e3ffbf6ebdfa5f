"""Exception hierarchy shared by the prediction core and the API layer."""


class WellPredictError(Exception):
    """Base class for all service errors."""


class PredictionValidationError(WellPredictError):
    """A prediction request was rejected before reaching the scoring engine."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class PersistenceError(WellPredictError):
    """Writing prediction history to the durable store failed."""


class EngineFailure(WellPredictError):
    """The scoring step raised while resolving a pending prediction."""

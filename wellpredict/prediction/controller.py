"""Asynchronous request/result lifecycle around the scoring engine."""

import asyncio
import logging
from collections.abc import Callable, Mapping

from pydantic import ValidationError

from wellpredict.config import PREDICTION_DELAY_SECONDS
from wellpredict.errors import EngineFailure, PersistenceError, PredictionValidationError
from wellpredict.prediction.engine import score
from wellpredict.prediction.history_store import HistoryStore, InMemoryHistoryStore
from wellpredict.prediction.schemas import (
    LifecycleState, PredictionRequest, PredictionResult, PredictionStatus,
)

logger = logging.getLogger(__name__)


class PredictionController:
    """Owns the pending/succeeded/failed state and the prediction history.

    State only changes through ``submit`` and ``clear``. Overlapping
    submissions are allowed: whichever resolves last becomes ``current``,
    and every resolved result is appended to ``history``.
    """

    def __init__(self,
                 store: HistoryStore | None = None,
                 delay: float = PREDICTION_DELAY_SECONDS,
                 engine: Callable[[PredictionRequest], PredictionResult] = score):
        self.store = store or InMemoryHistoryStore()
        self.delay = delay
        self.engine = engine
        self._status = PredictionStatus.IDLE
        self._current: PredictionResult | None = None
        self._last_error: str | None = None
        self._history: list[PredictionResult] = self.store.load()
        self._in_flight: set[asyncio.Task] = set()

    @property
    def status(self) -> PredictionStatus:
        return self._status

    @property
    def current(self) -> PredictionResult | None:
        return self._current

    @property
    def history(self) -> list[PredictionResult]:
        return list(self._history)

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def pending_count(self) -> int:
        return len(self._in_flight)

    @property
    def state(self) -> LifecycleState:
        return LifecycleState(
            status=self._status,
            current=self._current,
            history=list(self._history),
            last_error=self._last_error,
        )

    def find(self, prediction_id: int) -> PredictionResult | None:
        for result in self._history:
            if result.id == prediction_id:
                return result
        return None

    def submit(self, request: PredictionRequest | Mapping) -> asyncio.Task:
        """Start a prediction and return its task without waiting for it.

        Raises ``PredictionValidationError`` synchronously when ``request``
        does not validate; the controller is then left in FAILED with
        ``current`` and ``history`` untouched.
        """
        if not isinstance(request, PredictionRequest):
            try:
                request = PredictionRequest.model_validate(request)
            except ValidationError as e:
                message = f"Invalid prediction request: {e.error_count()} validation error(s)"
                self._fail(message)
                raise PredictionValidationError(
                    message, errors=e.errors(include_url=False, include_context=False),
                ) from e

        loop = asyncio.get_running_loop()
        self._status = PredictionStatus.PENDING
        self._last_error = None
        logger.info("Prediction submitted: %s/%s at %d m", request.soil_type, request.rock_type, request.depth)
        task = loop.create_task(self._resolve(request, self.delay))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    def clear(self) -> None:
        """Drop the latest result from view; history and status are kept."""
        self._current = None

    async def wait(self) -> LifecycleState:
        """Wait for every in-flight submission, then return the state."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))
        return self.state

    async def _resolve(self, request: PredictionRequest, delay: float) -> PredictionResult | None:
        if delay > 0:
            await asyncio.sleep(delay)

        try:
            result = self.engine(request)
        except Exception as e:
            failure = EngineFailure(f"Scoring failed: {e}")
            logger.error("%s", failure)
            self._fail(str(failure))
            return None

        self._current = result
        self._history.append(result)
        self._status = PredictionStatus.SUCCEEDED
        logger.info("Prediction %d resolved: confidence=%d%%, %s",
                    result.id, result.confidence, result.recommendation)
        self._persist()
        return result

    def _persist(self) -> None:
        # synchronous on the loop so writes land in resolution order
        try:
            self.store.save(self._history)
        except PersistenceError as e:
            logger.warning("Prediction history not persisted: %s", e)

    def _fail(self, message: str) -> None:
        self._status = PredictionStatus.FAILED
        self._last_error = message

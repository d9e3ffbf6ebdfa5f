"""Durable storage for prediction history.

The JSON store keeps the whole history in one file, the same way the
dashboard kept it under a single local-storage key. Every successful
prediction rewrites the file in full.
"""

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from wellpredict.config import HISTORY_PATH
from wellpredict.errors import PersistenceError
from wellpredict.prediction.schemas import PredictionResult

logger = logging.getLogger(__name__)

_history_adapter = TypeAdapter(list[PredictionResult])


def dump_history(history: Sequence[PredictionResult]) -> str:
    return _history_adapter.dump_json(list(history)).decode("utf-8")


def parse_history(raw: str | bytes) -> list[PredictionResult]:
    """Parse serialized history. Raises ``ValueError`` on any malformed input."""
    try:
        return _history_adapter.validate_json(raw)
    except ValidationError as e:
        raise ValueError(f"Malformed prediction history: {e.error_count()} errors") from e


class HistoryStore:
    """Interface: ``load`` never raises, ``save`` raises ``PersistenceError``."""

    def load(self) -> list[PredictionResult]:
        raise NotImplementedError

    def save(self, history: Sequence[PredictionResult]) -> None:
        raise NotImplementedError


class InMemoryHistoryStore(HistoryStore):

    def __init__(self, initial: Sequence[PredictionResult] = (), fail_writes: bool = False):
        self.saved: list[PredictionResult] = list(initial)
        self.fail_writes = fail_writes
        self.n_writes = 0

    def load(self) -> list[PredictionResult]:
        return list(self.saved)

    def save(self, history: Sequence[PredictionResult]) -> None:
        if self.fail_writes:
            raise PersistenceError("In-memory store configured to fail writes")
        self.saved = list(history)
        self.n_writes += 1


class JsonHistoryStore(HistoryStore):

    def __init__(self, path: Path = HISTORY_PATH):
        self.path = Path(path)

    def load(self) -> list[PredictionResult]:
        if not self.path.exists():
            logger.info("No prediction history at %s, starting empty", self.path)
            return []
        try:
            raw = self.path.read_bytes()
            history = parse_history(raw)
        except (OSError, ValueError) as e:
            logger.warning("Discarding unreadable prediction history %s: %s", self.path, e)
            return []
        logger.info("Loaded %d predictions from %s", len(history), self.path)
        return history

    def save(self, history: Sequence[PredictionResult]) -> None:
        """Replace the stored history atomically (temp file + rename)."""
        payload = dump_history(history)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e
        logger.debug("Persisted %d predictions to %s", len(history), self.path)

"""Device-local persistence for completed quiz attempts.

The history is a single JSON array stored under one fixed key, newest
first, capped at ``MAX_STORED_ATTEMPTS`` records. A file that is not a
JSON array reads as "no history"; malformed records inside the array are
skipped one by one and the rest are kept.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter

from pm_quiz.constants.quiz_constants import ATTEMPT_STORAGE_KEY, MAX_STORED_ATTEMPTS
from pm_quiz.core.models import Attempt

logger = logging.getLogger(__name__)


class AttemptRecord(BaseModel):
    """On-disk schema of one attempt."""

    topic_id: str
    topic_title: str
    score: int
    total: int
    percent: int
    timestamp_iso: str
    badge: str

    @classmethod
    def from_attempt(cls, attempt: Attempt) -> "AttemptRecord":
        return cls(
            topic_id=attempt.topic_id,
            topic_title=attempt.topic_title,
            score=attempt.score,
            total=attempt.total,
            percent=attempt.percent,
            timestamp_iso=attempt.timestamp_iso,
            badge=attempt.badge,
        )

    def to_attempt(self) -> Attempt:
        return Attempt(**self.model_dump())


_RAW_LIST = TypeAdapter(list[Any])
_RECORD_LIST = TypeAdapter(list[AttemptRecord])


class AttemptStore(Protocol):
    """Persistence interface the quiz session depends on."""

    def load(self) -> list[Attempt]: ...

    def save(self, attempt: Attempt) -> None: ...

    def attempts_for_topic(self, topic_id: str, limit: int | None = None) -> list[Attempt]: ...


def _filter_topic(attempts: list[Attempt], topic_id: str, limit: int | None) -> list[Attempt]:
    matching = [attempt for attempt in attempts if attempt.topic_id == topic_id]
    if limit is not None:
        return matching[: max(0, limit)]
    return matching


class InMemoryAttemptStore:
    """Attempt store kept in process memory."""

    def __init__(self, attempts: list[Attempt] | None = None, max_attempts: int = MAX_STORED_ATTEMPTS) -> None:
        self._max_attempts = max_attempts
        self._attempts: list[Attempt] = list(attempts or [])[:max_attempts]

    def load(self) -> list[Attempt]:
        return list(self._attempts)

    def save(self, attempt: Attempt) -> None:
        self._attempts = [attempt, *self._attempts][: self._max_attempts]

    def attempts_for_topic(self, topic_id: str, limit: int | None = None) -> list[Attempt]:
        return _filter_topic(self._attempts, topic_id, limit)


class JsonFileAttemptStore:
    """Attempt store backed by ``<data_dir>/<key>.json``."""

    def __init__(
        self,
        data_dir: Path,
        key: str = ATTEMPT_STORAGE_KEY,
        max_attempts: int = MAX_STORED_ATTEMPTS,
    ) -> None:
        self._path = Path(data_dir) / f"{key}.json"
        self._max_attempts = max_attempts

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Attempt]:
        """Return persisted attempts, or an empty list if none can be read."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Could not read attempt history %s: %s", self._path, exc)
            return []

        if not raw.strip():
            return []
        try:
            items = _RAW_LIST.validate_json(raw)
        except ValueError as exc:
            logger.warning("Ignoring malformed attempt history %s: %s", self._path, exc)
            return []

        attempts: list[Attempt] = []
        for position, item in enumerate(items):
            try:
                attempts.append(AttemptRecord.model_validate(item).to_attempt())
            except ValueError as exc:
                # pydantic ValidationError is a ValueError, as is an invalid score.
                logger.warning("Skipping attempt record %d in %s: %s", position, self._path, exc)
        return attempts

    def save(self, attempt: Attempt) -> None:
        """Prepend ``attempt`` and write back at most ``max_attempts`` records.

        The write is best effort: failures are logged, not raised.
        """
        attempts = [attempt, *self.load()][: self._max_attempts]
        payload = _RECORD_LIST.dump_json(
            [AttemptRecord.from_attempt(item) for item in attempts], indent=2
        )
        try:
            self._write_atomically(payload)
        except OSError as exc:
            logger.warning("Could not write attempt history %s: %s", self._path, exc)

    def attempts_for_topic(self, topic_id: str, limit: int | None = None) -> list[Attempt]:
        return _filter_topic(self.load(), topic_id, limit)

    def _write_atomically(self, payload: bytes) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.stem}-", dir=self._path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


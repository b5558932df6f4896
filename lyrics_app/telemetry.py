"""JSON-lines event log for learning activity.

Each event has a fixed set of allowed fields. Records are handed to a
background listener so writing the log never blocks a store command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import json
import logging
import logging.handlers
import os
from pathlib import Path
import queue
from typing import Final

LOG_DIR_ENV: Final[str] = "LYRICS_LOG_DIR"
LOG_ENABLED_ENV: Final[str] = "LYRICS_LOGGING"
LOG_FILE_NAME: Final[str] = "lyrics.log"

logger = logging.getLogger(__name__)


class Event(Enum):
    STORE_READY = "store_ready"
    STORE_INIT_FAILED = "store_init_failed"
    SONG_ADDED = "song_added"
    SONG_ADD_FAILED = "song_add_failed"
    PROGRESS_RECORDED = "progress_recorded"
    PROGRESS_FAILED = "progress_failed"
    SESSION_RECORDED = "session_recorded"
    SESSION_FAILED = "session_failed"
    TRANSLATION_RESOLVED = "translation_resolved"
    BACKFILL_FAILED = "backfill_failed"


_TEXT_FIELDS: Final[frozenset[str]] = frozenset({"text_len", "text_hash"})

EVENT_FIELDS: Final[dict[Event, frozenset[str]]] = {
    Event.STORE_READY: frozenset({"languages"}),
    Event.STORE_INIT_FAILED: frozenset(),
    Event.SONG_ADDED: frozenset({"song_id", "language", "words", "skipped_words"})
    | _TEXT_FIELDS,
    Event.SONG_ADD_FAILED: frozenset({"language"}),
    Event.PROGRESS_RECORDED: frozenset({"song_id", "line", "completed", "sessions"}),
    Event.PROGRESS_FAILED: frozenset({"song_id", "line"}),
    Event.SESSION_RECORDED: frozenset({"song_id", "words", "minutes"}),
    Event.SESSION_FAILED: frozenset({"song_id"}),
    Event.TRANSLATION_RESOLVED: frozenset({"language", "source", "confidence"})
    | _TEXT_FIELDS,
    Event.BACKFILL_FAILED: frozenset({"entry_id", "language"}),
}

FieldValue = str | int | float | bool | None


def default_log_path() -> Path:
    override = os.environ.get(LOG_DIR_ENV, "").strip()
    if override:
        return Path(override) / LOG_FILE_NAME
    return Path.home() / ".lyrics_learner" / "logs" / LOG_FILE_NAME


def logging_enabled() -> bool:
    return os.environ.get(LOG_ENABLED_ENV, "1").strip() != "0"


@dataclass(slots=True)
class EventLog:
    path: Path
    enabled: bool = True
    _logger: logging.Logger | None = field(default=None, init=False)
    _listener: logging.handlers.QueueListener | None = field(default=None, init=False)
    _handler: logging.Handler | None = field(default=None, init=False)

    @classmethod
    def from_environment(cls) -> "EventLog":
        return cls(path=default_log_path(), enabled=logging_enabled())

    @property
    def is_open(self) -> bool:
        return self._logger is not None

    def open(self) -> None:
        if not self.enabled or self._logger is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        except OSError as exc:
            # An unwritable log directory only turns the event log off.
            logger.warning("Event log disabled, cannot open %s: %s", self.path, exc)
            self.enabled = False
            return
        handler.setFormatter(logging.Formatter("%(message)s"))
        record_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        # Private logger so two open logs never share handlers.
        event_logger = logging.Logger(f"lyrics_learner.events:{self.path}", logging.INFO)
        event_logger.addHandler(logging.handlers.QueueHandler(record_queue))
        listener = logging.handlers.QueueListener(record_queue, handler)
        listener.start()
        self._logger = event_logger
        self._listener = listener
        self._handler = handler

    def close(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
        if self._handler is not None:
            self._handler.close()
            self._handler = None
        self._logger = None

    def record(self, event: Event, **fields: object) -> None:
        payload = self._payload(event, fields)
        if payload is None or self._logger is None:
            return
        self._logger.info(_encode(payload))

    def record_failure(
        self, event: Event, exc: BaseException, **fields: object
    ) -> None:
        payload = self._payload(event, fields)
        if payload is None or self._logger is None:
            return
        payload["error_type"] = exc.__class__.__name__
        payload["error"] = str(exc)
        self._logger.error(_encode(payload))

    def _payload(
        self, event: Event, fields: dict[str, object]
    ) -> dict[str, FieldValue] | None:
        unknown = set(fields) - EVENT_FIELDS[event]
        if unknown:
            raise ValueError(
                f"Unexpected fields for {event.value}: {', '.join(sorted(unknown))}"
            )
        self.open()
        if self._logger is None:
            return None
        payload: dict[str, FieldValue] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "event": event.value,
        }
        for key, value in fields.items():
            payload[key] = _field_value(value)
        return payload


def _field_value(value: object) -> FieldValue:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def _encode(payload: dict[str, FieldValue]) -> str:
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))

"""Telemetry sinks for gameplay events.

The engine only needs ``emit(event_type, fields)``. Sinks must never block or raise
into the caller; ``TelemetrySystem`` additionally guards every call.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

SESSION_START = "session_start"
SESSION_END = "session_end"
CELL_CLICK = "cell_click"
CORRECT_MATCH = "correct_match"
WRONG_MATCH = "wrong_match"
GAME_OVER = "game_over"

EVENT_TYPES = (SESSION_START, SESSION_END, CELL_CLICK, CORRECT_MATCH, WRONG_MATCH, GAME_OVER)


class TelemetrySink(Protocol):
    def emit(self, event_type: str, fields: Mapping[str, str]) -> None: ...


@dataclass(frozen=True, slots=True)
class TelemetryEvent:
    event_type: str
    timestamp: datetime
    session_id: str
    fields: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "eventType": self.event_type,
            "timestamp": self.timestamp.isoformat(),
            "sessionId": self.session_id,
            "additionalData": dict(self.fields),
        }


class LoggingTelemetrySink:
    """Writes each event as a log line."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO):
        self._log = log or logger
        self._level = level

    def emit(self, event_type: str, fields: Mapping[str, str]) -> None:
        self._log.log(self._level, "[Telemetry] %s: %s", event_type, dict(fields))


class InMemoryTelemetrySink:
    """Buffers events for the current process, tagged with one sink-wide session id."""

    def __init__(
        self,
        *,
        session_id: Optional[str] = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._events: List[TelemetryEvent] = []

    def emit(self, event_type: str, fields: Mapping[str, str]) -> None:
        self._events.append(
            TelemetryEvent(
                event_type=event_type,
                timestamp=self._now(),
                session_id=self.session_id,
                fields={str(key): str(value) for key, value in fields.items()},
            )
        )

    def events(self, event_type: Optional[str] = None) -> List[TelemetryEvent]:
        if event_type is None:
            return list(self._events)
        return [event for event in self._events if event.event_type == event_type]

    def event_types(self) -> List[str]:
        return [event.event_type for event in self._events]

    def clear(self) -> None:
        self._events.clear()


class CompositeTelemetrySink:
    """Fans each event out to several sinks; one failing sink does not starve the rest."""

    def __init__(self, sinks: Iterable[TelemetrySink]):
        self._sinks = list(sinks)

    def emit(self, event_type: str, fields: Mapping[str, str]) -> None:
        for sink in self._sinks:
            try:
                sink.emit(event_type, fields)
            except Exception:
                logger.exception("Telemetry sink %r failed on %s", sink, event_type)

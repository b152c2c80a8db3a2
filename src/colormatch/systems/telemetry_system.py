from __future__ import annotations

import logging
from typing import Mapping

from colormatch.components.game_session import GameMode
from colormatch.events.bus import (
    EVENT_CELL_SELECTED,
    EVENT_MATCH_CORRECT,
    EVENT_MATCH_WRONG,
    EVENT_SESSION_ENDED,
    EVENT_SESSION_STARTED,
    EventBus,
)
from colormatch.telemetry import (
    CELL_CLICK,
    CORRECT_MATCH,
    GAME_OVER,
    SESSION_END,
    SESSION_START,
    WRONG_MATCH,
    TelemetrySink,
)

logger = logging.getLogger(__name__)


class TelemetrySystem:
    """Forwards lifecycle events to a telemetry sink as flat string payloads.

    Sink failures are logged and swallowed: telemetry is fire-and-forget.
    """

    def __init__(self, event_bus: EventBus, sink: TelemetrySink | None):
        self.event_bus = event_bus
        self.sink = sink
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.event_bus.subscribe(EVENT_CELL_SELECTED, self.on_cell_selected)
        self.event_bus.subscribe(EVENT_MATCH_CORRECT, self.on_match_correct)
        self.event_bus.subscribe(EVENT_MATCH_WRONG, self.on_match_wrong)
        self.event_bus.subscribe(EVENT_SESSION_ENDED, self.on_session_ended)

    def on_session_started(self, sender, **kwargs):
        mode = kwargs.get("mode")
        self._send(
            SESSION_START,
            {
                "player_name": kwargs.get("player_name", ""),
                "game_mode": _mode_title(mode),
                "grid_size": kwargs.get("dimension", ""),
                "level": kwargs.get("level", ""),
                "session_id": kwargs.get("session_id", ""),
            },
        )

    def on_cell_selected(self, sender, **kwargs):
        self._send(
            CELL_CLICK,
            {
                "cell_index": kwargs.get("index", ""),
                "game_mode": _mode_title(kwargs.get("mode")),
            },
        )

    def on_match_correct(self, sender, **kwargs):
        self._send(CORRECT_MATCH, {"combo": kwargs.get("combo", 0)})

    def on_match_wrong(self, sender, **kwargs):
        self._send(WRONG_MATCH, {"combo": 0})

    def on_session_ended(self, sender, **kwargs):
        score = kwargs.get("score", 0)
        self._send(
            GAME_OVER,
            {
                "result": "won" if kwargs.get("won") else "lost",
                "score": score,
                "level": kwargs.get("level", ""),
            },
        )
        self._send(
            SESSION_END,
            {
                "duration": f"{float(kwargs.get('duration', 0.0)):.2f}",
                "score": score,
            },
        )

    def _send(self, event_type: str, fields: Mapping[str, object]) -> None:
        if self.sink is None:
            return
        payload = {key: str(value) for key, value in fields.items()}
        try:
            self.sink.emit(event_type, payload)
        except Exception:
            logger.exception("Telemetry sink failed on %s", event_type)


def _mode_title(mode) -> str:
    if isinstance(mode, GameMode):
        return mode.title
    return "" if mode is None else str(mode)

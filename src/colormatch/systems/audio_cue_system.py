from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque

from colormatch.events.bus import EVENT_SOUND_CUE, EventBus

logger = logging.getLogger(__name__)

CUES = ("tap", "match", "combo", "wrong", "win", "lose")

CuePlayer = Callable[[str], None]


class AudioCueSystem:
    """Relays engine cue notifications to optional sound and haptic players.

    Playback itself is the caller's business; this system only filters on the
    sound and haptics settings and keeps a short history of requested sound cues.
    """

    def __init__(
        self,
        event_bus: EventBus,
        *,
        player: CuePlayer | None = None,
        enabled: bool = True,
        haptic_player: CuePlayer | None = None,
        haptics_enabled: bool = True,
        history_size: int = 32,
    ) -> None:
        self.event_bus = event_bus
        self.player = player
        self.enabled = enabled
        self.haptic_player = haptic_player
        self.haptics_enabled = haptics_enabled
        self.history: Deque[str] = deque(maxlen=history_size)
        self.event_bus.subscribe(EVENT_SOUND_CUE, self.on_sound_cue)

    def on_sound_cue(self, sender, **kwargs):
        cue = kwargs.get("cue")
        if cue not in CUES:
            return
        if self.enabled:
            self.history.append(cue)
            self._play(self.player, cue, "Cue player")
        if self.haptics_enabled:
            self._play(self.haptic_player, cue, "Haptic player")

    @staticmethod
    def _play(player: CuePlayer | None, cue: str, label: str) -> None:
        if player is None:
            return
        try:
            player(cue)
        except Exception:
            logger.exception("%s failed on %s", label, cue)

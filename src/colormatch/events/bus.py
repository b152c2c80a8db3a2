from blinker import Signal
from typing import Dict

class EventBus:
    """Synchronous event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_CELL_CLICK = "cell_click"                    # payload: index=int


# ============================================================================
# GRID & SELECTION
# ============================================================================
EVENT_GRID_BUILD_REQUEST = "grid_build_request"    # payload: dimension=int
EVENT_GRID_BUILT = "grid_built"                    # payload: dimension=int, color_indices=list[int]
EVENT_CELL_SELECTED = "cell_selected"              # payload: index=int, pending=bool
EVENT_MATCH_CORRECT = "match_correct"              # payload: first=int, second=int, combo=int, points=int
EVENT_MATCH_WRONG = "match_wrong"                  # payload: first=int, second=int, lives=int
EVENT_TILES_RESET = "tiles_reset"                  # payload: indices=list[int], clear_wrong=bool


# ============================================================================
# SESSION LIFECYCLE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: dimension=int|None
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"    # payload: None
EVENT_SESSION_STARTED = "session_started"          # payload: session_id=str, player_name=str, mode=GameMode, dimension=int, level=int
EVENT_SESSION_END_REQUEST = "session_end_request"  # payload: won=bool, reason=str
EVENT_SESSION_ENDED = "session_ended"              # payload: session_id=str, won=bool, reason=str, score=int, bonus=int, level=int, duration=float
EVENT_TIMER_CHANGED = "timer_changed"              # payload: time_remaining=int


# ============================================================================
# FEEDBACK
# ============================================================================
EVENT_FEEDBACK = "feedback"                        # payload: message=str, duration=float|None
EVENT_SOUND_CUE = "sound_cue"                      # payload: cue=str
EVENT_BEST_SCORE_CHANGED = "best_score_changed"    # payload: previous=int, value=int

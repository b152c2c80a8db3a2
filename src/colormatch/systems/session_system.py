"""Session lifecycle: starting, restarting, advancing and finalizing sessions."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from time import monotonic
from typing import Callable

from esper import World

from colormatch.components.best_score import BestScore
from colormatch.components.countdown_timer import CountdownTimer
from colormatch.components.feedback import Feedback
from colormatch.components.game_session import GameMode, GameSession, Outcome
from colormatch.constants import STARTING_LIVES, TIME_ATTACK_SECONDS
from colormatch.events.bus import (
    EVENT_BEST_SCORE_CHANGED,
    EVENT_GRID_BUILD_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_SESSION_END_REQUEST,
    EVENT_SESSION_ENDED,
    EVENT_SESSION_STARTED,
    EVENT_SOUND_CUE,
    EventBus,
)
from colormatch.scoring import next_dimension, win_bonus
from colormatch.storage import ScoreStore
from colormatch.systems.grid_ops import get_session_entity, validate_dimension
from colormatch.systems.transient_state_system import cancel_tile_resets

logger = logging.getLogger(__name__)


class SessionSystem:
    """Resets session state for new games and finalizes finished ones exactly once.

    The engine's own state (outcome, bonus, best score) is settled before the score
    store is called, so a failing store never affects the result shown to the player.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        score_store: ScoreStore | None = None,
        clock: Callable[[], float] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.score_store = score_store
        self._clock = clock or monotonic
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self._on_next_level)
        self.event_bus.subscribe(EVENT_SESSION_END_REQUEST, self._on_end_request)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_new_game(self, sender, **payload) -> None:
        dimension = payload.get("dimension")
        if dimension is None:
            dimension = self._session().dimension
        self.start(dimension)

    def _on_next_level(self, sender, **payload) -> None:
        session = self._session()
        session.level += 1
        self.start(next_dimension(session.dimension))

    def _on_end_request(self, sender, **payload) -> None:
        self.finish(bool(payload.get("won", False)), reason=payload.get("reason") or "unknown")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, dimension: int) -> None:
        validate_dimension(dimension)

        session = self._session()
        timer = self._component(CountdownTimer)
        timer.stop()
        cancel_tile_resets(self.world)
        self._component(Feedback).hide()

        session.dimension = dimension
        session.session_id = uuid.uuid4().hex
        session.score = 0
        session.bonus = 0
        session.combo_count = 0
        session.lives = STARTING_LIVES if session.mode is GameMode.SURVIVAL else 0
        session.time_remaining = TIME_ATTACK_SECONDS if session.mode is GameMode.TIME_ATTACK else 0
        session.pending_index = None
        session.outcome = Outcome.UNRESOLVED
        session.end_reason = None
        session.started_at = self._clock()

        self.event_bus.emit(EVENT_GRID_BUILD_REQUEST, dimension=dimension)
        if session.mode is GameMode.TIME_ATTACK:
            timer.running = True
        logger.info(
            "Session %s started: player=%s mode=%s grid=%dx%d level=%d",
            session.session_id,
            session.player_name,
            session.mode.title,
            dimension,
            dimension,
            session.level,
        )
        self.event_bus.emit(
            EVENT_SESSION_STARTED,
            session_id=session.session_id,
            player_name=session.player_name,
            mode=session.mode,
            dimension=dimension,
            level=session.level,
        )

    def finish(self, won: bool, *, reason: str) -> None:
        session = self._session()
        if session.is_over:
            return
        session.outcome = Outcome.WON if won else Outcome.LOST
        session.end_reason = reason
        session.pending_index = None
        self._component(CountdownTimer).stop()
        cancel_tile_resets(self.world)

        if won:
            session.bonus = win_bonus(
                session.mode,
                time_remaining=session.time_remaining,
                lives=session.lives,
            )
            session.score += session.bonus
        duration = max(0.0, self._clock() - session.started_at)

        best = self._component(BestScore)
        previous_best = best.value
        best_changed = best.offer(session.score)

        logger.info(
            "Session %s %s (%s): score=%d bonus=%d level=%d",
            session.session_id,
            "won" if won else "lost",
            reason,
            session.score,
            session.bonus,
            session.level,
        )
        self.event_bus.emit(
            EVENT_SESSION_ENDED,
            session_id=session.session_id,
            player_name=session.player_name,
            won=won,
            reason=reason,
            score=session.score,
            bonus=session.bonus,
            level=session.level,
            duration=duration,
        )
        self.event_bus.emit(EVENT_SOUND_CUE, cue="win" if won else "lose")
        self._record_score(session)
        if best_changed:
            self.event_bus.emit(EVENT_BEST_SCORE_CHANGED, previous=previous_best, value=best.value)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record_score(self, session: GameSession) -> None:
        if self.score_store is None:
            return
        try:
            self.score_store.record(session.player_name, session.score, self._now())
        except Exception:
            logger.exception("Failed to record score for %s", session.player_name)

    def _session(self) -> GameSession:
        return self.world.component_for_entity(get_session_entity(self.world), GameSession)

    def _component(self, component_type):
        return self.world.component_for_entity(get_session_entity(self.world), component_type)

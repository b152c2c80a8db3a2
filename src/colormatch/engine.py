"""Public surface of the game session engine.

``GameEngine`` hides the ECS world behind the handful of operations a presentation
layer needs and hands out immutable snapshots for rendering.
"""
from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from esper import World

from colormatch.components.best_score import BestScore
from colormatch.components.feedback import Feedback
from colormatch.components.game_session import GameMode, GameSession, Outcome
from colormatch.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_TICK,
    EventBus,
)
from colormatch.storage import ScoreStore
from colormatch.systems.grid_ops import (
    get_palette,
    get_session_entity,
    ordered_tiles,
    validate_dimension,
)
from colormatch.telemetry import TelemetrySink
from colormatch.world import create_world

RGB = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class TileSnapshot:
    id: int
    index: int
    color_index: int
    color: RGB
    matched: bool
    selected: bool
    wrong: bool


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    session_id: str
    player_name: str
    mode: GameMode
    dimension: int
    level: int
    grid: Tuple[TileSnapshot, ...]
    score: int
    lives: int
    time_remaining: int
    combo_count: int
    outcome: Outcome
    feedback: str
    feedback_visible: bool
    best_score: int

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.UNRESOLVED


class GameEngine:
    """Single-writer facade over one session world.

    Every mutating call takes the same re-entrant lock, so a countdown driven from a
    background thread can never interleave with a tap.
    """

    def __init__(
        self,
        dimension: int,
        mode: GameMode | str = GameMode.CLASSIC,
        player_name: str = "Player",
        palette: Sequence | None = None,
        *,
        score_store: ScoreStore | None = None,
        telemetry: TelemetrySink | None = None,
        best_score: BestScore | None = None,
        rng: random.Random | None = None,
        transient_delays: bool = True,
        clock: Callable[[], float] | None = None,
        now: Callable[[], datetime] | None = None,
        cue_player: Callable[[str], None] | None = None,
        sound_enabled: bool = True,
        haptic_player: Callable[[str], None] | None = None,
        haptics_enabled: bool = True,
        event_bus: EventBus | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self.event_bus = event_bus or EventBus()
        self.world: World = create_world(
            self.event_bus,
            dimension,
            mode,
            player_name,
            palette,
            score_store=score_store,
            telemetry=telemetry,
            best_score=best_score,
            rng=rng,
            transient_delays=transient_delays,
            clock=clock,
            now=now,
            cue_player=cue_player,
            sound_enabled=sound_enabled,
            haptic_player=haptic_player,
            haptics_enabled=haptics_enabled,
        )
        self._session_entity = get_session_entity(self.world)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select_cell(self, index: int) -> None:
        """Select a tile. Invalid, matched, already selected or post-game taps do nothing."""
        with self._lock:
            self.event_bus.emit(EVENT_CELL_CLICK, index=index)

    def start_new_game(self, dimension: Optional[int] = None) -> None:
        if dimension is not None:
            validate_dimension(dimension)
        with self._lock:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST, dimension=dimension)

    def next_level(self) -> None:
        with self._lock:
            self.event_bus.emit(EVENT_NEXT_LEVEL_REQUEST)

    def tick(self, dt: float) -> None:
        """Advance timers and transient state by ``dt`` seconds."""
        with self._lock:
            self.event_bus.emit(EVENT_TICK, dt=dt)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def session(self) -> GameSession:
        return self.world.component_for_entity(self._session_entity, GameSession)

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def lives(self) -> int:
        return self.session.lives

    @property
    def time_remaining(self) -> int:
        return self.session.time_remaining

    @property
    def combo_count(self) -> int:
        return self.session.combo_count

    @property
    def level(self) -> int:
        return self.session.level

    @property
    def outcome(self) -> Outcome:
        return self.session.outcome

    @property
    def mode(self) -> GameMode:
        return self.session.mode

    @property
    def dimension(self) -> int:
        return self.session.dimension

    @property
    def pending_index(self) -> Optional[int]:
        return self.session.pending_index

    @property
    def best_score(self) -> int:
        return self.world.component_for_entity(self._session_entity, BestScore).value

    @property
    def feedback(self) -> Feedback:
        return self.world.component_for_entity(self._session_entity, Feedback)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            session = self.session
            palette = get_palette(self.world)
            feedback = self.feedback
            grid = tuple(
                TileSnapshot(
                    id=entity,
                    index=position,
                    color_index=tile.color_index,
                    color=palette.rgb_for(tile.color_index),
                    matched=tile.matched,
                    selected=tile.selected,
                    wrong=tile.wrong,
                )
                for position, (entity, tile) in enumerate(ordered_tiles(self.world))
            )
            return SessionSnapshot(
                session_id=session.session_id,
                player_name=session.player_name,
                mode=session.mode,
                dimension=session.dimension,
                level=session.level,
                grid=grid,
                score=session.score,
                lives=session.lives,
                time_remaining=session.time_remaining,
                combo_count=session.combo_count,
                outcome=session.outcome,
                feedback=feedback.message if feedback.visible else "",
                feedback_visible=feedback.visible,
                best_score=self.best_score,
            )

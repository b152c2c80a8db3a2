from __future__ import annotations

import logging

from esper import World

from colormatch.components.game_session import GameMode, GameSession
from colormatch.components.tile import Tile
from colormatch.constants import MATCH_DESELECT_DELAY, WRONG_RESET_DELAY
from colormatch.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_CELL_SELECTED,
    EVENT_FEEDBACK,
    EVENT_MATCH_CORRECT,
    EVENT_MATCH_WRONG,
    EVENT_SESSION_END_REQUEST,
    EVENT_SOUND_CUE,
    EventBus,
)
from colormatch.scoring import points_for_match
from colormatch.systems.grid_ops import board_cleared, get_session, tile_at
from colormatch.systems.transient_state_system import schedule_tile_reset

logger = logging.getLogger(__name__)

WRONG_FEEDBACK = "Wrong! Try again."


class SelectionSystem:
    """Turns cell clicks into selections and resolves pairs.

    The second selection of a pair is resolved synchronously inside the click handler,
    so at most one tile is ever pending.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)

    def on_cell_click(self, sender, **kwargs):
        index = kwargs.get("index")
        session = get_session(self.world)
        if session.is_over:
            logger.debug("Ignoring click on %r: session is over", index)
            return
        if isinstance(index, bool) or not isinstance(index, int):
            logger.debug("Ignoring click with invalid index %r", index)
            return
        tile = tile_at(self.world, index)
        if tile is None:
            logger.debug("Ignoring click on out-of-range index %d", index)
            return
        if tile.matched or tile.selected:
            return
        self.select(session, index, tile)

    def select(self, session: GameSession, index: int, tile: Tile) -> None:
        tile.selected = True
        first = session.pending_index
        self.event_bus.emit(EVENT_CELL_SELECTED, index=index, pending=first is None, mode=session.mode)
        self.event_bus.emit(EVENT_SOUND_CUE, cue="tap")
        if first is None:
            session.pending_index = index
            return
        session.pending_index = None
        first_tile = tile_at(self.world, first)
        if first_tile is None:
            # pending index outlived its grid; start over from this tile
            session.pending_index = index
            return
        if first_tile.color_index == tile.color_index:
            self._handle_correct(session, first, index, first_tile, tile)
        else:
            self._handle_wrong(session, first, index, first_tile, tile)

    def _handle_correct(self, session: GameSession, first: int, second: int, first_tile: Tile, second_tile: Tile) -> None:
        first_tile.matched = True
        second_tile.matched = True
        session.combo_count += 1
        points = points_for_match(session.combo_count)
        session.score += points
        self.event_bus.emit(
            EVENT_MATCH_CORRECT,
            first=first,
            second=second,
            combo=session.combo_count,
            points=points,
        )
        self.event_bus.emit(EVENT_FEEDBACK, message=f"Perfect! +{points}")
        self.event_bus.emit(EVENT_SOUND_CUE, cue="combo" if session.combo_count >= 3 else "match")
        schedule_tile_reset(self.world, self.event_bus, (first, second), MATCH_DESELECT_DELAY)
        if board_cleared(self.world):
            self.event_bus.emit(EVENT_SESSION_END_REQUEST, won=True, reason="cleared")

    def _handle_wrong(self, session: GameSession, first: int, second: int, first_tile: Tile, second_tile: Tile) -> None:
        session.combo_count = 0
        if session.mode is GameMode.SURVIVAL:
            session.lives -= 1
        self.event_bus.emit(EVENT_MATCH_WRONG, first=first, second=second, lives=session.lives)
        if session.mode is GameMode.CLASSIC:
            self.event_bus.emit(EVENT_SESSION_END_REQUEST, won=False, reason="mistake")
            return
        if session.mode is GameMode.SURVIVAL and session.lives <= 0:
            session.lives = 0
            self.event_bus.emit(EVENT_SESSION_END_REQUEST, won=False, reason="out_of_lives")
            return
        first_tile.wrong = True
        second_tile.wrong = True
        self.event_bus.emit(EVENT_FEEDBACK, message=WRONG_FEEDBACK)
        self.event_bus.emit(EVENT_SOUND_CUE, cue="wrong")
        schedule_tile_reset(self.world, self.event_bus, (first, second), WRONG_RESET_DELAY, clear_wrong=True)

from __future__ import annotations

import logging
import random

from esper import World

from colormatch.components.board import Board
from colormatch.components.tile import GridIndex, Tile
from colormatch.events.bus import EVENT_GRID_BUILD_REQUEST, EVENT_GRID_BUILT, EventBus
from colormatch.systems.grid_ops import (
    generate_color_indices,
    get_board,
    get_palette,
    usable_palette_size,
)

logger = logging.getLogger(__name__)


class GridSystem:
    """Owns the tile entities: builds a fresh shuffled grid on request."""

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_GRID_BUILD_REQUEST, self.on_build_request)

    def on_build_request(self, sender, **kwargs):
        dimension = kwargs.get("dimension")
        if dimension is None:
            dimension = get_board(self.world).dimension
        self.build(dimension)

    def build(self, dimension: int) -> list[int]:
        palette = get_palette(self.world)
        palette.usable = usable_palette_size(dimension, len(palette.colors))
        color_indices = generate_color_indices(dimension, palette.usable, self._rng)
        self.clear()
        for grid_index, color_index in enumerate(color_indices):
            self.world.create_entity(Tile(color_index=color_index), GridIndex(index=grid_index))
        board: Board = get_board(self.world)
        board.dimension = dimension
        logger.debug("Built %dx%d grid with colors %s", dimension, dimension, color_indices)
        self.event_bus.emit(EVENT_GRID_BUILT, dimension=dimension, color_indices=list(color_indices))
        return color_indices

    def clear(self) -> None:
        for entity, _ in list(self.world.get_component(Tile)):
            self.world.delete_entity(entity, immediate=True)

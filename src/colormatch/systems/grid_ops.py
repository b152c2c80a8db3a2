from __future__ import annotations

import random
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from esper import World

from colormatch.components.board import Board
from colormatch.components.game_session import GameSession
from colormatch.components.palette import Palette
from colormatch.components.tile import GridIndex, Tile
from colormatch.constants import MIN_GRID_SIZE
from colormatch.errors import ConfigurationError

TileEntry = Tuple[int, Tile]


def validate_dimension(dimension) -> int:
    if isinstance(dimension, bool) or not isinstance(dimension, int):
        raise ConfigurationError(f"Grid dimension must be an int, got {dimension!r}")
    if dimension < MIN_GRID_SIZE:
        raise ConfigurationError(
            f"Grid dimension must be at least {MIN_GRID_SIZE}, got {dimension}"
        )
    return dimension


def usable_palette_size(dimension: int, palette_size: int) -> int:
    """Number of leading palette colors a ``dimension`` board draws from."""
    if palette_size < 2:
        raise ConfigurationError(
            f"Palette must contain at least 2 colors, got {palette_size}"
        )
    return min(palette_size, max(2, dimension))


def generate_color_indices(
    dimension: int,
    palette_size: int,
    rng: random.Random | None = None,
) -> List[int]:
    """Return ``dimension**2`` shuffled palette indices satisfying the pairing invariant.

    Pair colors are drawn with replacement, so a color may own several pairs. When the
    cell count is odd one extra unpaired index is appended before shuffling.
    """
    rng = rng or random.Random()
    validate_dimension(dimension)
    usable = usable_palette_size(dimension, palette_size)
    total_cells = dimension * dimension
    pairs_needed = total_cells // 2

    drawn = [rng.randrange(usable) for _ in range(pairs_needed)]
    indices = drawn + drawn
    if total_cells % 2 == 1:
        indices.append(rng.randrange(usable))
    while len(indices) < total_cells:
        indices.append(rng.randrange(usable))
    indices = indices[:total_cells]
    rng.shuffle(indices)
    return indices


def color_counts(color_indices: Iterable[int]) -> Dict[int, int]:
    return dict(Counter(color_indices))


def satisfies_pairing(color_indices: List[int]) -> bool:
    odd = [count for count in color_counts(color_indices).values() if count % 2 == 1]
    return len(odd) == len(color_indices) % 2


# ---------------------------------------------------------------------------
# World queries
# ---------------------------------------------------------------------------

def get_session(world: World) -> GameSession:
    for _, session in world.get_component(GameSession):
        return session
    raise RuntimeError("GameSession not found")


def get_session_entity(world: World) -> int:
    for entity, _ in world.get_component(GameSession):
        return entity
    raise RuntimeError("GameSession not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_palette(world: World) -> Palette:
    for _, palette in world.get_component(Palette):
        return palette
    raise RuntimeError("Palette not found")


def ordered_tiles(world: World) -> List[TileEntry]:
    """Tile entities sorted by grid index."""
    entries = [
        (grid_index.index, entity, tile)
        for entity, (tile, grid_index) in world.get_components(Tile, GridIndex)
    ]
    entries.sort(key=lambda item: item[0])
    return [(entity, tile) for _, entity, tile in entries]


def tile_at(world: World, index: int) -> Tile | None:
    for _, (tile, grid_index) in world.get_components(Tile, GridIndex):
        if grid_index.index == index:
            return tile
    return None


def unmatched_count(world: World) -> int:
    return sum(1 for _, tile in world.get_component(Tile) if not tile.matched)


def board_cleared(world: World) -> bool:
    """True once no pair can be formed from the remaining tiles.

    On odd-sized boards the single unpaired filler tile never counts against clearance.
    """
    board = get_board(world)
    return unmatched_count(world) <= board.total_cells % 2

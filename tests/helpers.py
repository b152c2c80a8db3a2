from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Sequence

from colormatch.components.game_session import GameMode
from colormatch.engine import GameEngine
from colormatch.systems.grid_ops import ordered_tiles


class FakeClock:
    """Monotonic clock stand-in advanced by hand."""

    def __init__(self, start: float = 100.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_engine(
    dimension: int = 4,
    mode: GameMode | str = GameMode.CLASSIC,
    *,
    seed: int = 7,
    transient_delays: bool = False,
    **kwargs,
) -> GameEngine:
    """Headless engine with a seeded grid; resets apply immediately unless asked otherwise."""
    kwargs.setdefault("clock", FakeClock())
    kwargs.setdefault("now", lambda: FIXED_NOW)
    return GameEngine(
        dimension,
        mode,
        kwargs.pop("player_name", "Tester"),
        kwargs.pop("palette", None),
        rng=random.Random(seed),
        transient_delays=transient_delays,
        **kwargs,
    )


def arrange_grid(engine: GameEngine, color_indices: Sequence[int]) -> None:
    """Overwrite tile colors in grid order so a test controls which pairs match."""
    tiles = ordered_tiles(engine.world)
    assert len(tiles) == len(color_indices)
    for (_, tile), color_index in zip(tiles, color_indices):
        tile.color_index = color_index


def grid_colors(engine: GameEngine) -> list[int]:
    return [tile.color_index for _, tile in ordered_tiles(engine.world)]


def matching_pair(engine: GameEngine) -> tuple[int, int]:
    """First two open tiles sharing a color."""
    seen: dict[int, int] = {}
    for position, (_, tile) in enumerate(ordered_tiles(engine.world)):
        if tile.matched or tile.selected:
            continue
        if tile.color_index in seen:
            return seen[tile.color_index], position
        seen[tile.color_index] = position
    raise AssertionError("no matching pair left on the board")


def wrong_pair(engine: GameEngine) -> tuple[int, int]:
    """First two open tiles with different colors."""
    open_tiles = [
        (position, tile.color_index)
        for position, (_, tile) in enumerate(ordered_tiles(engine.world))
        if not tile.matched and not tile.selected
    ]
    first_index, first_color = open_tiles[0]
    for position, color_index in open_tiles[1:]:
        if color_index != first_color:
            return first_index, position
    raise AssertionError("every open tile has the same color")


def play_pair(engine: GameEngine, pair: tuple[int, int]) -> None:
    engine.select_cell(pair[0])
    engine.select_cell(pair[1])


def clear_board(engine: GameEngine) -> None:
    while not engine.snapshot().is_over:
        play_pair(engine, matching_pair(engine))

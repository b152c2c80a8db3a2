from __future__ import annotations

from typing import Iterable

from esper import World

from colormatch.components.tile_reset import TileReset
from colormatch.events.bus import EVENT_TICK, EVENT_TILES_RESET, EventBus
from colormatch.systems.grid_ops import tile_at


def schedule_tile_reset(
    world: World,
    event_bus: EventBus,
    indices: Iterable[int],
    delay: float,
    *,
    clear_wrong: bool = False,
) -> int | None:
    """Queue a cosmetic flag reversion, or apply it at once when delays are disabled."""
    indices = tuple(indices)
    if delay <= 0.0 or not getattr(world, "transient_delays", True):
        apply_tile_reset(world, event_bus, indices, clear_wrong=clear_wrong)
        return None
    return world.create_entity(TileReset(indices=indices, remaining=float(delay), clear_wrong=clear_wrong))


def apply_tile_reset(
    world: World,
    event_bus: EventBus,
    indices: Iterable[int],
    *,
    clear_wrong: bool = False,
) -> None:
    indices = list(indices)
    for index in indices:
        tile = tile_at(world, index)
        if tile is None:
            continue
        tile.selected = False
        if clear_wrong:
            tile.wrong = False
    event_bus.emit(EVENT_TILES_RESET, indices=indices, clear_wrong=clear_wrong)


def cancel_tile_resets(world: World) -> int:
    """Drop every pending reversion without applying it. Returns how many were dropped."""
    pending = [entity for entity, _ in world.get_component(TileReset)]
    for entity in pending:
        world.delete_entity(entity, immediate=True)
    return len(pending)


class TransientStateSystem:
    """Counts down pending TileReset entities and applies them when due.

    Only ``selected``/``wrong`` flags are touched; matched state, score and outcome
    are never changed here.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get("dt", 1 / 60)
        if dt is None or dt <= 0:
            return
        due: list[tuple[int, TileReset]] = []
        for entity, reset in list(self.world.get_component(TileReset)):
            reset.remaining -= dt
            if reset.remaining <= 0.0:
                due.append((entity, reset))
        for entity, reset in due:
            self.world.delete_entity(entity, immediate=True)
            apply_tile_reset(self.world, self.event_bus, reset.indices, clear_wrong=reset.clear_wrong)

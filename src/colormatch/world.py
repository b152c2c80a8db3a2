import random
from datetime import datetime
from typing import Callable, Sequence

from esper import World

from colormatch.components.best_score import BestScore
from colormatch.components.board import Board
from colormatch.components.countdown_timer import CountdownTimer
from colormatch.components.feedback import Feedback
from colormatch.components.game_session import GameMode, GameSession
from colormatch.components.palette import Palette
from colormatch.errors import ConfigurationError
from colormatch.events.bus import EventBus, EVENT_NEW_GAME_REQUEST
from colormatch.palettes import NORMAL_COLORS, normalize_palette
from colormatch.storage import ScoreStore
from colormatch.systems.audio_cue_system import AudioCueSystem
from colormatch.systems.feedback_system import FeedbackSystem
from colormatch.systems.grid_ops import usable_palette_size, validate_dimension
from colormatch.systems.grid_system import GridSystem
from colormatch.systems.selection_system import SelectionSystem
from colormatch.systems.session_system import SessionSystem
from colormatch.systems.telemetry_system import TelemetrySystem
from colormatch.systems.timer_system import TimerSystem
from colormatch.systems.transient_state_system import TransientStateSystem
from colormatch.telemetry import TelemetrySink


def resolve_mode(mode) -> GameMode:
    if isinstance(mode, GameMode):
        return mode
    if isinstance(mode, str):
        key = mode.strip().upper().replace(" ", "_").replace("-", "_")
        aliases = {
            "NO_MISTAKES": GameMode.CLASSIC,
            "LIMITED_LIVES": GameMode.SURVIVAL,
            "TIMED": GameMode.TIME_ATTACK,
        }
        if key in aliases:
            return aliases[key]
        try:
            return GameMode[key]
        except KeyError:
            pass
    raise ConfigurationError(f"Unknown game mode {mode!r}")


def create_world(
    event_bus: EventBus,
    dimension: int,
    mode: GameMode = GameMode.CLASSIC,
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
    start: bool = True,
) -> World:
    """Build the session world, register every system and start the first session.

    Invalid input raises ConfigurationError before any entity or system is created.
    """
    mode = resolve_mode(mode)
    validate_dimension(dimension)
    colors = normalize_palette(palette if palette is not None else NORMAL_COLORS)
    usable = usable_palette_size(dimension, len(colors))

    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "transient_delays", transient_delays)

    # Single session entity carries every per-session resource.
    world.create_entity(
        GameSession(player_name=player_name, mode=mode, dimension=dimension),
        Board(dimension=dimension),
        Palette(colors=colors, usable=usable),
        CountdownTimer(),
        Feedback(),
        best_score if best_score is not None else BestScore(),
    )

    systems = {
        "grid": GridSystem(world, event_bus),
        "selection": SelectionSystem(world, event_bus),
        "session": SessionSystem(world, event_bus, score_store=score_store, clock=clock, now=now),
        "timer": TimerSystem(world, event_bus),
        "transient": TransientStateSystem(world, event_bus),
        "feedback": FeedbackSystem(world, event_bus),
        "telemetry": TelemetrySystem(event_bus, telemetry),
        "audio": AudioCueSystem(
            event_bus,
            player=cue_player,
            enabled=sound_enabled,
            haptic_player=haptic_player,
            haptics_enabled=haptics_enabled,
        ),
    }
    setattr(world, "systems", systems)

    if start:
        event_bus.emit(EVENT_NEW_GAME_REQUEST, dimension=dimension)
    return world

"""Arcade window hosting a single colour match session."""
import argparse
import logging
from pathlib import Path

import arcade
from arcade import Window, run, set_background_color, color

from colormatch.components.best_score import BestScore
from colormatch.components.game_session import GameMode, Outcome
from colormatch.constants import DEFAULT_GRID_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH
from colormatch.engine import GameEngine
from colormatch.events.bus import EVENT_MOUSE_PRESS
from colormatch.rendering.high_scores import HighScoreBoard, run_score_command
from colormatch.rendering.input_system import InputSystem
from colormatch.rendering.render_system import RenderSystem
from colormatch.settings import Difficulty, load_settings, palette_for
from colormatch.storage import JsonScoreStore, ScoreStore
from colormatch.telemetry import LoggingTelemetrySink

logger = logging.getLogger(__name__)


class ColorMatchWindow(Window):
    def __init__(self, engine: GameEngine, score_store: ScoreStore | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Color Match", resizable=True)
        self.set_update_rate(1 / 60)
        self.engine = engine
        self.event_bus = engine.event_bus
        self.input_system = InputSystem(self.event_bus, self, engine)
        self.render_system = RenderSystem(engine, self)
        self.high_scores = HighScoreBoard(score_store)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()
        if self.high_scores.visible:
            self.render_system.draw_high_scores(self.high_scores.lines)

    def on_update(self, delta_time: float):
        self.engine.tick(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if self.high_scores.visible:
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.H:
            self.high_scores.toggle()
        elif symbol == arcade.key.X and self.high_scores.visible:
            self.high_scores.reset()
        elif symbol == arcade.key.R:
            self.engine.start_new_game()
        elif symbol == arcade.key.N and self.engine.outcome is Outcome.WON:
            self.engine.next_level()
        elif symbol == arcade.key.ESCAPE:
            self.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="colormatch", description="Colour pair matching puzzle")
    parser.add_argument("--player", default=None, help="Player name (defaults to saved settings)")
    parser.add_argument(
        "--mode",
        default=GameMode.CLASSIC.name.lower(),
        choices=[mode.name.lower() for mode in GameMode],
    )
    size = parser.add_mutually_exclusive_group()
    size.add_argument("--size", type=int, default=None, help="Grid dimension")
    size.add_argument("--difficulty", choices=[d.name.lower() for d in Difficulty], default=None)
    parser.add_argument("--color-blind", action="store_true", help="Use the colour-blind palette")
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--scores", action="store_true", help="Print the top scores and exit")
    parser.add_argument("--reset-scores", action="store_true", help="Clear the saved scores and exit")
    parser.add_argument("--scores-file", type=Path, default=None, help="Score file (defaults to data/scores.json)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_dimension(args) -> int:
    if args.size is not None:
        return args.size
    if args.difficulty is not None:
        return Difficulty[args.difficulty.upper()].grid_size
    return DEFAULT_GRID_SIZE


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    if args.color_blind:
        settings.color_blind_mode = True
    store = JsonScoreStore(args.scores_file)
    if run_score_command(args, store):
        return
    engine = GameEngine(
        resolve_dimension(args),
        args.mode,
        args.player or settings.player_name,
        palette_for(settings),
        score_store=store,
        telemetry=LoggingTelemetrySink(),
        best_score=BestScore(store.best_score()),
        sound_enabled=settings.sound_enabled and not args.mute,
        haptics_enabled=settings.haptic_enabled,
    )
    logger.info("Starting %s on a %dx%d grid", engine.mode.title, engine.dimension, engine.dimension)
    ColorMatchWindow(engine, store)
    run()


if __name__ == "__main__":
    main()

"""Draws the grid and HUD from engine snapshots."""
import arcade

from colormatch.components.game_session import GameMode, Outcome
from colormatch.constants import TILE_GAP
from colormatch.engine import GameEngine, SessionSnapshot, TileSnapshot
from colormatch.rendering.layout import cell_origin

MATCHED_TILE_COLOR = (30, 30, 36)
SELECTED_OUTLINE = arcade.color.WHITE
WRONG_OUTLINE = arcade.color.RED


class RenderSystem:
    """Read-only view of the engine; never mutates session state."""

    def __init__(self, engine: GameEngine, window) -> None:
        self.engine = engine
        self.window = window

    def process(self) -> None:
        snapshot = self.engine.snapshot()
        for tile in snapshot.grid:
            self._draw_tile(snapshot, tile)
        self._draw_hud(snapshot)
        if snapshot.is_over:
            self._draw_outcome(snapshot)

    def _draw_tile(self, snapshot: SessionSnapshot, tile: TileSnapshot) -> None:
        left, bottom, size = cell_origin(tile.index, self.window.width, self.window.height, snapshot.dimension)
        inner = max(1, size - TILE_GAP)
        if tile.matched and not tile.selected:
            fill = MATCHED_TILE_COLOR
        else:
            fill = tile.color
        arcade.draw_lbwh_rectangle_filled(left, bottom, inner, inner, fill)
        if tile.wrong:
            arcade.draw_lbwh_rectangle_outline(left, bottom, inner, inner, WRONG_OUTLINE, border_width=4)
        elif tile.selected:
            arcade.draw_lbwh_rectangle_outline(left, bottom, inner, inner, SELECTED_OUTLINE, border_width=3)

    def _draw_hud(self, snapshot: SessionSnapshot) -> None:
        top = self.window.height - 30
        parts = [f"Score: {snapshot.score}", f"Best: {snapshot.best_score}", f"Level: {snapshot.level}"]
        if snapshot.mode is GameMode.SURVIVAL:
            parts.append(f"Lives: {snapshot.lives}")
        if snapshot.mode is GameMode.TIME_ATTACK:
            parts.append(f"Time: {snapshot.time_remaining}s")
        if snapshot.combo_count >= 2:
            parts.append(f"Combo x{snapshot.combo_count}")
        arcade.draw_text(snapshot.mode.title, 20, top, arcade.color.LIGHT_GRAY, 14, bold=True)
        arcade.draw_text("   ".join(parts), 20, top - 26, arcade.color.WHITE, 14)
        if snapshot.feedback:
            arcade.draw_text(
                snapshot.feedback,
                self.window.width / 2,
                top - 56,
                arcade.color.GOLD,
                18,
                anchor_x="center",
                bold=True,
            )

    def _draw_outcome(self, snapshot: SessionSnapshot) -> None:
        won = snapshot.outcome is Outcome.WON
        title = "You Win!" if won else "Game Over"
        hint = "N: next level   R: restart" if won else "R: restart"
        arcade.draw_lbwh_rectangle_filled(0, 0, self.window.width, self.window.height, (0, 0, 0, 170))
        arcade.draw_text(
            title,
            self.window.width / 2,
            self.window.height / 2 + 20,
            arcade.color.WHITE,
            36,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        arcade.draw_text(
            f"Final score: {snapshot.score}    {hint}",
            self.window.width / 2,
            self.window.height / 2 - 30,
            arcade.color.LIGHT_GRAY,
            16,
            anchor_x="center",
            anchor_y="center",
        )

    def draw_high_scores(self, lines) -> None:
        arcade.draw_lbwh_rectangle_filled(0, 0, self.window.width, self.window.height, (0, 0, 0, 220))
        top = self.window.height - 60
        arcade.draw_text(
            "High Scores",
            self.window.width / 2,
            top,
            arcade.color.GOLD,
            28,
            anchor_x="center",
            bold=True,
        )
        for row, line in enumerate(lines):
            arcade.draw_text(
                line,
                self.window.width / 2,
                top - 50 - row * 28,
                arcade.color.WHITE,
                16,
                anchor_x="center",
                font_name=("Courier New", "Courier", "monospace"),
            )
        arcade.draw_text(
            "H: close   X: reset scores",
            self.window.width / 2,
            30,
            arcade.color.LIGHT_GRAY,
            12,
            anchor_x="center",
        )

"""Entry point for the Hexten hex puzzle.

Sets up the game session and an Arcade window that draws its snapshots.
"""
import logging

from arcade import Window, run, set_background_color, color, draw_circle_filled, draw_text, key

from hexten.constants import ROW_COUNTS
from hexten.components.game_state import GameMode
from hexten.components.status_message import MessageCategory
from hexten.components.tile_highlight import HIGHLIGHT_PENALTY, HIGHLIGHT_REJECTED
from hexten.session import GameSession
from hexten.ui.layout import compute_board_geometry, tile_at_point, tile_center

MESSAGE_COLORS = {
    MessageCategory.NEUTRAL: color.LIGHT_GRAY,
    MessageCategory.ERROR: color.RED,
    MessageCategory.MERGE_UNDER: color.SKY_BLUE,
    MessageCategory.MERGE_OVER: color.ORANGE,
    MessageCategory.SUCCESS: color.GREEN,
    MessageCategory.LEVEL_UP: color.VIOLET,
}


class HextenWindow(Window):
    def __init__(self):
        super().__init__(800, 700, "Hexten")
        self.set_update_rate(1/60)
        self.session = GameSession()
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        snap = self.session.snapshot()
        geometry = compute_board_geometry(self.width, self.height, ROW_COUNTS)
        radius = geometry[0]
        for (row, col), value in snap.tiles.items():
            x, y = tile_center(row, col, geometry, ROW_COUNTS)
            highlight = snap.highlights.get((row, col))
            if highlight == HIGHLIGHT_REJECTED:
                fill = color.DARK_RED
            elif highlight == HIGHLIGHT_PENALTY:
                fill = color.DARK_ORANGE
            elif (row, col) in snap.selection:
                fill = color.GOLD
            elif value is None:
                fill = color.DARK_SLATE_GRAY
            else:
                fill = color.SLATE_BLUE
            draw_circle_filled(x, y, radius, fill)
            if value is not None:
                draw_text(str(value), x, y, color.WHITE, int(radius * 0.8), anchor_x="center", anchor_y="center")
        hud_y = self.height - 30
        draw_text(
            f"Score {snap.score}   Best {snap.high_score}   Level {snap.level}   Sum {snap.running_sum}",
            20, hud_y, color.WHITE, 16,
        )
        draw_text(f"Next tile {snap.spawn_progress:3.0f}%   Speed: {snap.speed_label}", 20, hud_y - 28, color.LIGHT_GRAY, 14)
        draw_text(snap.message, 20, hud_y - 56, MESSAGE_COLORS.get(snap.message_category, color.WHITE), 14)
        if snap.game_over:
            draw_text(
                f"{snap.game_over_reason}  Final score {snap.final_score}. Press R to restart.",
                self.width / 2, 30, color.RED, 16, anchor_x="center",
            )
        elif snap.mode is GameMode.READY:
            draw_text("Press SPACE to start", self.width / 2, 30, color.WHITE, 16, anchor_x="center")

    def on_update(self, delta_time: float):
        self.session.advance(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        geometry = compute_board_geometry(self.width, self.height, ROW_COUNTS)
        target = tile_at_point(x, y, geometry, ROW_COUNTS)
        if target is not None:
            self.session.tap(*target)

    def on_key_press(self, symbol: int, modifiers: int):
        snap = self.session.snapshot()
        if symbol == key.SPACE and snap.mode is GameMode.READY:
            self.session.start()
        elif symbol == key.R:
            self.session.restart()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    window = HextenWindow()
    run()


if __name__ == "__main__":
    main()

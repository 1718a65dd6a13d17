from __future__ import annotations

import math
from typing import Sequence, Tuple

from hexten.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    ROW_COUNTS,
    TILE_GAP,
    TILE_RADIUS,
)
from hexten.utils.hex_grid import is_short_row

ROW_PITCH_FACTOR = math.sqrt(3) / 2


def compute_board_geometry(window_width: int, window_height: int, row_counts: Sequence[int] = ROW_COUNTS):
    """Return (radius, start_x, top_y) for drawing and hit-testing the hex board.

    Rows are laid out top-down in arcade's y-up space; ``top_y`` is the centre
    line of row 0.
    """
    max_cols = max(row_counts)
    rows = len(row_counts)
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    pitch_by_w = max_board_w / max_cols
    pitch_by_h = max_board_h / (1 + (rows - 1) * ROW_PITCH_FACTOR)
    pitch = min(pitch_by_w, pitch_by_h, 2 * TILE_RADIUS + TILE_GAP)
    radius = max(8.0, (pitch - TILE_GAP) / 2)
    pitch = 2 * radius + TILE_GAP
    start_x = (window_width - max_cols * pitch) / 2
    board_h = pitch + (rows - 1) * pitch * ROW_PITCH_FACTOR
    top_y = BOTTOM_MARGIN + (window_height - BOTTOM_MARGIN - HUD_HEIGHT + board_h) / 2 - pitch / 2
    return radius, start_x, top_y


def tile_center(row: int, col: int, geometry, row_counts: Sequence[int] = ROW_COUNTS) -> Tuple[float, float]:
    radius, start_x, top_y = geometry
    pitch = 2 * radius + TILE_GAP
    x = start_x + col * pitch + pitch / 2
    if is_short_row(row, row_counts):
        x += pitch / 2
    y = top_y - row * pitch * ROW_PITCH_FACTOR
    return x, y


def tile_at_point(x: float, y: float, geometry, row_counts: Sequence[int] = ROW_COUNTS):
    """Coordinate of the tile under (x, y), or None when the point misses every tile."""
    radius = geometry[0]
    best = None
    best_dist = radius * radius
    for row, count in enumerate(row_counts):
        for col in range(count):
            cx, cy = tile_center(row, col, geometry, row_counts)
            dist = (cx - x) ** 2 + (cy - y) ** 2
            if dist <= best_dist:
                best = (row, col)
                best_dist = dist
    return best

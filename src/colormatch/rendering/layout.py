from colormatch.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
)


def compute_board_geometry(window_width: int, window_height: int, dimension: int):
    """Return (tile_size, start_x, start_y) for a square board.

    ``start_y`` is the bottom edge of the board; row 0 is drawn at the top, matching
    grid index order. Render and input mapping both use this so they stay consistent.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w, max_board_h) / max(1, dimension))
    if tile_size < 20:
        tile_size = 20
    total = dimension * tile_size
    start_x = (window_width - total) / 2
    start_y = BOTTOM_MARGIN + (window_height - BOTTOM_MARGIN - HUD_HEIGHT - total) / 2
    if start_y < BOTTOM_MARGIN:
        start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, dimension: int) -> int | None:
    """Map a window coordinate to a grid index, or None outside the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, dimension)
    total = dimension * tile_size
    if not (start_x <= x < start_x + total and start_y <= y < start_y + total):
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = dimension - 1 - row_from_bottom
    return row * dimension + col


def cell_origin(index: int, window_width: int, window_height: int, dimension: int):
    """Bottom-left corner and size of the cell at ``index``."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, dimension)
    row, col = divmod(index, dimension)
    left = start_x + col * tile_size
    bottom = start_y + (dimension - 1 - row) * tile_size
    return left, bottom, tile_size

# grid.py
"""
Translates a pixel surface and font metrics into a character grid.

Every cell of the grid is one glyph wide and one line high, so the grid
dimensions depend on both the surface size and the font in use.
"""
import logging
from typing import NamedTuple, Tuple

import numpy as np

# Forward reference for type hinting only
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from engine import FontMetrics


# --- Data Contracts ---
#
# compute_grid(surface_w, surface_h, cell_w, cell_h) -> Tuple[int, int]:
#   - Outputs: (num_cols, num_rows) where
#       num_cols = ceil(surface_w / cell_w), num_rows = ceil(surface_h / cell_h).
#     Ceiling leaves no empty strip at the right and bottom edges.
#   - Errors: InvalidMetrics if any argument is <= 0.
#
# cell_width_from_font(metrics, min_cp, max_cp) -> int:
#   - Outputs: the widest glyph advance over code points [min_cp, max_cp],
#     both inclusive, so every drawable character fits in one column.
#
# measure_grid(surface_w, surface_h, metrics, min_cp, max_cp) -> GridMetrics:
#   - Combines the two operations above with the font's line height.


class InvalidMetrics(ValueError):
    """Raised when a cell or surface dimension is not strictly positive."""


class GridMetrics(NamedTuple):
    num_cols: int
    num_rows: int
    cell_width: int
    cell_height: int


def compute_grid(surface_w: float, surface_h: float, cell_w: float, cell_h: float) -> Tuple[int, int]:
    """
    Computes how many columns and rows fit on the surface.

    Args:
        surface_w (float): Surface width in pixels.
        surface_h (float): Surface height in pixels.
        cell_w (float): Width of a single character cell in pixels.
        cell_h (float): Height of a single character cell in pixels.

    Returns:
        Tuple[int, int]: (num_cols, num_rows).
    """
    if cell_w <= 0 or cell_h <= 0:
        raise InvalidMetrics(f"Cell size must be positive, got {cell_w}x{cell_h}.")
    if surface_w <= 0 or surface_h <= 0:
        raise InvalidMetrics(f"Surface size must be positive, got {surface_w}x{surface_h}.")

    num_cols = int(np.ceil(surface_w / cell_w))
    num_rows = int(np.ceil(surface_h / cell_h))
    return num_cols, num_rows


def cell_width_from_font(metrics: "FontMetrics", min_cp: int, max_cp: int) -> int:
    """Returns the maximum glyph advance over [min_cp, max_cp] inclusive."""
    if min_cp > max_cp:
        raise ValueError(f"Empty code point range [{min_cp:#06x}, {max_cp:#06x}].")
    return max(metrics.glyph_advance(cp) for cp in range(min_cp, max_cp + 1))


def measure_grid(
    surface_w: float, surface_h: float, metrics: "FontMetrics", min_cp: int, max_cp: int
) -> GridMetrics:
    """
    Measures the font and lays a grid over the surface.

    Raises:
        InvalidMetrics: if the font or the surface has a non-positive dimension.
    """
    cell_width = cell_width_from_font(metrics, min_cp, max_cp)
    cell_height = metrics.line_height()
    num_cols, num_rows = compute_grid(surface_w, surface_h, cell_width, cell_height)
    logging.debug(
        f"Measured grid: cell {cell_width}x{cell_height}px, "
        f"{num_cols} cols x {num_rows} rows for {surface_w}x{surface_h} surface."
    )
    return GridMetrics(num_cols, num_rows, cell_width, cell_height)

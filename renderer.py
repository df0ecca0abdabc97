# renderer.py
"""
Draws the streamers onto a character grid through a drawing sink.

The per-character work (color choice, text rotation, bounds and overlap
checks) is done by Numba-jitted kernels that write the glyphs to draw into
preallocated arrays. The Renderer then hands those glyphs to the sink, which
is the only part that touches the host toolkit.
"""
import logging
import math
import numpy as np
from typing import Dict, Any, Optional
from numba import jit

from constants import (
    COLOR_HEAD, COLOR_NEAR_HEAD, COLOR_SLOW, COLOR_FAST, PALETTE,
    SLOW_SPEED_THRESHOLD, NEAR_HEAD_LENGTH
)
from grid import GridMetrics
from streamer import StreamerSystem

# Forward reference for type hinting only
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from engine import GlyphSink

# --- Data Contracts ---
#
# class Renderer:
#   - resize(self, grid: GridMetrics) -> None:
#     - Side Effects: Reallocates the (num_rows, num_cols) occupancy bitmap
#       and the glyph output buffers.
#
#   - draw(self, sink: GlyphSink, streamers: StreamerSystem) -> int:
#     - Outputs: number of glyphs drawn.
#     - Side Effects: Clears the occupancy bitmap, then draws every streamer
#       in index order through sink.draw_char(char, x, y, color).
#     - Invariants: At most one draw_char per cell per pass. The first
#       streamer to claim a cell keeps it.
#
#   - draw_streamer(self, sink, streamers, index) -> int:
#     - Draws a single streamer against the current occupancy bitmap
#       without clearing it.


@jit(nopython=True)
def _layout_streamer_numba(
    column, row, speed, length, text_row, occupancy, num_rows,
    slow_threshold, near_head_length,
    out_chars, out_cols, out_rows, out_colors, count
):
    """
    Numba-jitted layout of one streamer. Appends each visible, unclaimed
    glyph to the output arrays starting at `count` and returns the new count.
    """
    head = int(math.floor(row))
    for i in range(length):
        if i == 0:
            color = COLOR_HEAD
        elif i <= near_head_length:
            color = COLOR_NEAR_HEAD
        elif speed < slow_threshold:
            color = COLOR_SLOW
        else:
            color = COLOR_FAST

        # Reflects rather than wraps while i > head; the glyph stays put in
        # its cell as the streamer slides down.
        char_idx = abs(i - head) % length

        target_row = head - i
        if target_row < 0:
            # Rows only decrease from here on.
            break
        if target_row >= num_rows or occupancy[target_row, column]:
            continue

        out_chars[count] = text_row[char_idx]
        out_cols[count] = column
        out_rows[count] = target_row
        out_colors[count] = color
        occupancy[target_row, column] = True
        count += 1
    return count


@jit(nopython=True)
def _layout_glyphs_numba(
    columns, rows, speeds, lengths, text, occupancy, num_rows,
    slow_threshold, near_head_length,
    out_chars, out_cols, out_rows, out_colors
):
    """
    Numba-jitted layout of a full pass. Clears the occupancy bitmap and lays
    out every streamer in index order.
    """
    occupancy[:, :] = False
    count = 0
    for s in range(columns.shape[0]):
        count = _layout_streamer_numba(
            columns[s], rows[s], speeds[s], lengths[s], text[s], occupancy, num_rows,
            slow_threshold, near_head_length,
            out_chars, out_cols, out_rows, out_colors, count
        )
    return count


class Renderer:
    """
    Turns streamer state into draw_char calls, one glyph per grid cell.
    """
    def __init__(self, params: Optional[Dict[str, Any]] = None):
        params = params if params is not None else {}
        self.slow_threshold = float(params.get('slow_speed_threshold', SLOW_SPEED_THRESHOLD))
        self.near_head_length = NEAR_HEAD_LENGTH
        self.grid: Optional[GridMetrics] = None
        self.occupancy = np.zeros((0, 0), dtype=np.bool_)
        self._allocate_buffers(0)

    def _allocate_buffers(self, capacity: int) -> None:
        # One glyph per cell at most, so the grid size bounds a pass.
        self._out_chars = np.zeros(capacity, dtype=np.uint32)
        self._out_cols = np.zeros(capacity, dtype=np.int64)
        self._out_rows = np.zeros(capacity, dtype=np.int64)
        self._out_colors = np.zeros(capacity, dtype=np.int64)

    def resize(self, grid: GridMetrics) -> None:
        """Reallocates the occupancy bitmap and output buffers for a new grid."""
        self.grid = grid
        self.occupancy = np.zeros((grid.num_rows, grid.num_cols), dtype=np.bool_)
        self._allocate_buffers(grid.num_rows * grid.num_cols)
        logging.debug(f"Occupancy bitmap reallocated with shape {self.occupancy.shape}.")

    def draw(self, sink: "GlyphSink", streamers: StreamerSystem) -> int:
        """
        Draws one frame.

        Returns:
            int: The number of glyphs handed to the sink.
        """
        if self.grid is None:
            return 0
        count = _layout_glyphs_numba(
            streamers.columns, streamers.rows, streamers.speeds, streamers.lengths,
            streamers.text, self.occupancy, self.grid.num_rows,
            self.slow_threshold, self.near_head_length,
            self._out_chars, self._out_cols, self._out_rows, self._out_colors
        )
        self._emit(sink, count)
        return count

    def draw_streamer(self, sink: "GlyphSink", streamers: StreamerSystem, index: int) -> int:
        """Draws a single streamer against the current occupancy bitmap."""
        if self.grid is None:
            return 0
        count = _layout_streamer_numba(
            streamers.columns[index], streamers.rows[index], streamers.speeds[index],
            streamers.lengths[index], streamers.text[index], self.occupancy, self.grid.num_rows,
            self.slow_threshold, self.near_head_length,
            self._out_chars, self._out_cols, self._out_rows, self._out_colors, 0
        )
        self._emit(sink, count)
        return count

    def _emit(self, sink: "GlyphSink", count: int) -> None:
        cell_width = self.grid.cell_width
        cell_height = self.grid.cell_height
        chars = self._out_chars[:count].tolist()
        cols = self._out_cols[:count].tolist()
        rows = self._out_rows[:count].tolist()
        colors = self._out_colors[:count].tolist()
        for cp, col, row, color in zip(chars, cols, rows, colors):
            sink.draw_char(chr(cp), col * cell_width, row * cell_height, PALETTE[color])

# engine.py
"""
The matrix rain engine: binds the simulation and renderer to host callbacks.

A host (see visualization.py) calls `on_tick` periodically and `on_paint`
whenever it wants a frame. The engine works out when the grid has to be
rebuilt and never touches the host toolkit directly; it only sees font
metrics and a glyph sink.
"""
import logging
import time
import numpy as np
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from constants import PREFERRED_SIZE, MIN_CODE_POINT, MAX_CODE_POINT
from grid import GridMetrics, InvalidMetrics, measure_grid
from renderer import Renderer
from simulation import Simulation

# --- Data Contracts ---
#
# class MatrixRain:
#   - __init__(self, params=None, clock=monotonic_ms, request_repaint=None):
#     - Inputs:
#       - params: "simulation_parameters" section of config.json.
#         - "seed": int or None (optional)
#         - "min_code_point", "max_code_point": int (optional)
#       - clock: callable returning the current time in milliseconds. Must
#         share a time base with the values passed to on_tick.
#       - request_repaint: callable invoked after every tick.
#
#   - on_tick(self, now_ms: float) -> None:
#     - Side Effects: Advances the simulation to now_ms, then requests a repaint.
#
#   - on_paint(self, width, height, font_metrics, sink) -> bool:
#     - Outputs: True if a frame was drawn, False if it was skipped.
#     - Side Effects: On first paint or after a size change, measures the
#       font, rebuilds the grid, the occupancy bitmap and the streamers.
#       Then draws one frame through the sink.
#     - Errors: Invalid metrics skip the frame and leave the engine usable.
#
#   - preferred_size(self) -> Tuple[int, int]


class FontMetrics(Protocol):
    def glyph_advance(self, cp: int) -> int: ...
    def line_height(self) -> int: ...


class GlyphSink(Protocol):
    def draw_char(self, char: str, x: int, y: int, color: Tuple[int, int, int]) -> None: ...


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class MatrixRain:
    """
    Façade over the simulation and renderer, driven by host tick and paint callbacks.
    """
    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        clock: Callable[[], float] = monotonic_ms,
        request_repaint: Optional[Callable[[], None]] = None,
    ):
        self.params = params if params is not None else {}
        self.clock = clock
        self.request_repaint = request_repaint if request_repaint is not None else (lambda: None)

        # All randomness is drawn from this one generator.
        self.rng = np.random.default_rng(self.params.get('seed'))
        self.min_code_point = int(self.params.get('min_code_point', MIN_CODE_POINT))
        self.max_code_point = int(self.params.get('max_code_point', MAX_CODE_POINT))

        self.simulation = Simulation(self.params, self.rng, self.clock())
        self.renderer = Renderer(self.params)
        self.grid: Optional[GridMetrics] = None
        self.last_surface_size: Tuple[int, int] = PREFERRED_SIZE
        self.rebuild_count = 0
        self.tick_count = 0

        logging.info("Matrix rain engine initialized.")

    def preferred_size(self) -> Tuple[int, int]:
        return PREFERRED_SIZE

    def on_tick(self, now_ms: float) -> None:
        self.tick_count += 1
        self.simulation.advance(now_ms)
        self.request_repaint()

    def on_paint(self, width: int, height: int, font_metrics: FontMetrics, sink: GlyphSink) -> bool:
        """
        Draws one frame, rebuilding the grid first if needed.

        Args:
            width (int): Surface width in pixels.
            height (int): Surface height in pixels.
            font_metrics (FontMetrics): Metrics of the font the sink draws with.
            sink (GlyphSink): Receives one draw_char call per visible glyph.

        Returns:
            bool: False if the frame was skipped because of invalid metrics.
        """
        if self.tick_count == 0 and not self.simulation.is_built:
            logging.warning("Paint requested before the first tick.")

        surface_size = (width, height)
        if not self.simulation.is_built or surface_size != self.last_surface_size:
            try:
                grid = measure_grid(
                    width, height, font_metrics, self.min_code_point, self.max_code_point
                )
            except InvalidMetrics as e:
                logging.warning(f"Skipping frame, grid cannot be built: {e}")
                return False
            self._rebuild(grid, surface_size)

        self.renderer.draw(sink, self.simulation.streamers)
        return True

    def _rebuild(self, grid: GridMetrics, surface_size: Tuple[int, int]) -> None:
        logging.info(
            f"Surface is {surface_size[0]}x{surface_size[1]}px "
            f"(previously {self.last_surface_size[0]}x{self.last_surface_size[1]}px). Rebuilding grid."
        )
        self.grid = grid
        self.renderer.resize(grid)
        self.simulation.rebuild(grid.num_cols, grid.num_rows, self.clock())
        self.last_surface_size = surface_size
        self.rebuild_count += 1

# visualization.py
"""
Hosts the matrix rain in a Pygame window.
"""
import logging
import pygame
from typing import Dict, Optional, Tuple

from constants import (
    BACKGROUND_COLOR, FONT_NAME, FONT_SIZE, GRID_LINE_COLOR, TICK_MS
)

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from engine import MatrixRain


# --- Data Contracts ---
#
# class PygameFontMetrics:
#   - Adapts a pygame.font.Font to the engine's FontMetrics interface.
#   - glyph_advance(cp) -> int: horizontal advance of chr(cp), 0 if the
#     font has no glyph for it.
#   - line_height() -> int: recommended line spacing of the font.
#
# class PygameGlyphSink:
#   - draw_char(char, x, y, color) -> None: blits the glyph onto the target
#     surface with its top-left corner at (x, y). Rendered glyphs are cached
#     per (char, color).
#
# class Visualizer:
#   - __init__(self, engine: MatrixRain, vis_params: Optional[dict] = None):
#     - Side Effects: Initializes Pygame and opens a resizable window at
#       the engine's preferred size.
#   - draw(self, engine: MatrixRain) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles events, clears the window and asks the engine
#       to paint one frame.


class PygameFontMetrics:
    def __init__(self, font: pygame.font.Font):
        self.font = font

    def glyph_advance(self, cp: int) -> int:
        metrics = self.font.metrics(chr(cp))
        if not metrics or metrics[0] is None:
            return 0
        return metrics[0][4]

    def line_height(self) -> int:
        return self.font.get_linesize()


class PygameGlyphSink:
    """
    Blits pre-rendered glyphs onto a surface.
    """
    def __init__(self, font: pygame.font.Font):
        self.font = font
        self.target: Optional[pygame.Surface] = None
        self._glyph_cache: Dict[Tuple[str, Tuple[int, int, int]], pygame.Surface] = {}

    def draw_char(self, char: str, x: int, y: int, color: Tuple[int, int, int]) -> None:
        key = (char, color)
        glyph = self._glyph_cache.get(key)
        if glyph is None:
            glyph = self.font.render(char, True, color)
            self._glyph_cache[key] = glyph
        self.target.blit(glyph, (x, y))

    @property
    def cached_glyphs(self) -> int:
        return len(self._glyph_cache)


class Visualizer:
    """
    Owns the Pygame window and feeds it to the engine's paint callback.
    """
    def __init__(self, engine: "MatrixRain", vis_params: Optional[dict] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}
        pygame.init()
        pygame.font.init()

        width, height = vis_params.get('window_size', engine.preferred_size())
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Matrix Rain")
        self.tick_ms = vis_params.get('tick_ms', TICK_MS)
        self.show_grid = vis_params.get('show_grid', False)

        font_name = vis_params.get('font_name', FONT_NAME)
        font_size = vis_params.get('font_size', FONT_SIZE)
        try:
            self.font = pygame.font.SysFont(font_name, font_size)
        except pygame.error:
            logging.warning(f"Font '{font_name}' not found, falling back to the default font.")
            self.font = pygame.font.Font(None, font_size)

        self.font_metrics = PygameFontMetrics(self.font)
        self.sink = PygameGlyphSink(self.font)
        # The first frame is painted without waiting for a tick.
        self.repaint_pending = True

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def request_repaint(self) -> None:
        self.repaint_pending = True

    def draw(self, engine: "MatrixRain") -> bool:
        """
        Handles events and, if a repaint was requested, paints one frame.

        Returns:
            bool: False if the animation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False
            if event.type == pygame.VIDEORESIZE:
                self.repaint_pending = True

        if not self.repaint_pending:
            return True
        self.repaint_pending = False

        self.screen.fill(BACKGROUND_COLOR)
        self.sink.target = self.screen
        width, height = self.screen.get_size()
        painted = engine.on_paint(width, height, self.font_metrics, self.sink)
        if painted and self.show_grid:
            self._draw_grid_lines(engine)

        pygame.display.flip()
        return True

    def _draw_grid_lines(self, engine: "MatrixRain"):
        """Draws the cell boundaries. Debugging aid for font metrics."""
        grid = engine.grid
        width, height = self.screen.get_size()
        for row in range(grid.num_rows):
            y = row * grid.cell_height
            pygame.draw.line(self.screen, GRID_LINE_COLOR, (0, y), (width, y))
        for col in range(grid.num_cols):
            x = col * grid.cell_width
            pygame.draw.line(self.screen, GRID_LINE_COLOR, (x, 0), (x, height))

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()

# simulation.py
"""
Handles the time integration of the streamers.

This module defines the Simulation class, which owns the streamer
collection, moves every streamer down by its speed times the elapsed wall
clock time, and recycles streamers whose tail has left the bottom of the
surface.
"""
import logging
import numpy as np
from typing import Dict, Any, Optional

from constants import MAX_STREAMERS
from streamer import StreamerSystem

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, params: Dict[str, Any], rng: np.random.Generator, now_ms: float):
#     - Inputs:
#       - params: "simulation_parameters" section of config.json.
#         - "max_streamers": int (optional)
#       - rng: the engine's single random generator.
#       - now_ms: clock reading at engine start, in milliseconds.
#     - Side Effects: None. No streamers exist until rebuild().
#
#   - rebuild(self, num_cols: int, num_rows: int, now_ms: float) -> None:
#     - Side Effects: Replaces self.streamers with max_streamers freshly
#       reset streamers and restarts the tick clock at now_ms.
#
#   - advance(self, now_ms: float) -> int:
#     - Outputs: number of streamers reset during this tick.
#     - Side Effects: row += speed * dt for every streamer; streamers whose
#       tail is past the last row are reset. Never draws.
#     - Invariants: dt >= 0. A clock that runs backwards yields dt = 0.


class Simulation:
    """
    Advances streamer positions using elapsed real time.
    """
    def __init__(self, params: Dict[str, Any], rng: np.random.Generator, now_ms: float):
        """
        Initializes the simulation with no streamers.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            rng (np.random.Generator): Random generator shared with the streamers.
            now_ms (float): Current clock reading in milliseconds.
        """
        self.params = params
        self.rng = rng
        self.max_streamers = int(params.get('max_streamers', MAX_STREAMERS))
        self.streamers: Optional[StreamerSystem] = None
        self.num_cols = 0
        self.num_rows = 0
        self.last_tick_ms = now_ms

    @property
    def is_built(self) -> bool:
        return self.streamers is not None

    def rebuild(self, num_cols: int, num_rows: int, now_ms: float) -> None:
        """
        Discards all streamers and creates a fresh set for a new grid.
        """
        self.num_cols = num_cols
        self.num_rows = num_rows
        self.streamers = StreamerSystem(self.params, self.max_streamers, num_cols, self.rng)
        self.last_tick_ms = now_ms
        logging.info(
            f"Simulation rebuilt: {self.max_streamers} streamers on a "
            f"{num_cols}x{num_rows} grid."
        )

    def advance(self, now_ms: float) -> int:
        """
        Executes one tick of the simulation.

        Returns:
            int: The number of streamers that were reset.
        """
        streamers = self.streamers
        if streamers is None or len(streamers) == 0:
            return 0

        dt = (now_ms - self.last_tick_ms) / 1000.0
        self.last_tick_ms = now_ms
        if dt < 0:
            logging.warning(
                f"Clock went backwards by {-dt * 1000.0:.1f}ms. Treating the tick as zero elapsed time."
            )
            dt = 0.0

        # 1. Integrate positions.
        streamers.rows += streamers.speeds * dt

        # 2. Recycle streamers whose tail is below the last row.
        exited = np.flatnonzero(streamers.rows - streamers.lengths > self.num_rows)
        streamers.reset_many(exited, self.num_cols)

        return int(exited.size)

# streamer.py
"""
Manages the state of all streamers in the simulation.

This module defines the StreamerSystem class, which stores every streamer's
column, head row, speed and text in NumPy arrays, and resets streamers in
place when they leave the screen.
"""
import logging
import numpy as np
from typing import Dict, Any, Iterable, NamedTuple

from constants import (
    MIN_SPEED, MAX_SPEED, MIN_LENGTH, MAX_LENGTH, MIN_CODE_POINT, MAX_CODE_POINT
)
from utils import rand_int

# --- Data Contracts ---
#
# class StreamerSystem:
#   - __init__(self, params, count, num_cols, rng):
#     - Inputs:
#       - params: "simulation_parameters" section of config.json. Optional keys:
#         "min_speed", "max_speed", "min_length", "max_length",
#         "min_code_point", "max_code_point" (all bounds inclusive).
#       - count: int, number of streamers.
#       - num_cols: int, number of grid columns.
#       - rng: np.random.Generator shared with the rest of the simulation.
#     - Side Effects: Allocates the state arrays and resets every streamer.
#     - Invariants:
#       - self.columns: (N,) int64, 0 <= column < num_cols.
#       - self.rows: (N,) float64, fractional row of each head, >= 0.
#       - self.speeds: (N,) float64, rows per second in [min_speed, max_speed].
#       - self.lengths: (N,) int64 in [min_length, max_length].
#       - self.text: (N, max_length) uint32 code points. Only the first
#         lengths[i] entries of row i are meaningful.
#
#   - reset(self, index, num_cols) -> None:
#     - Moves streamer `index` to row 0 of a random column with a fresh
#       speed and text. The text buffer is written in place.


class Streamer(NamedTuple):
    """Read-only snapshot of a single streamer."""
    column: int
    row: float
    speed: float
    text: str


class StreamerSystem:
    """
    A container for all streamers, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], count: int, num_cols: int, rng: np.random.Generator):
        """
        Initializes the streamer system.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            count (int): Number of streamers to create.
            num_cols (int): Number of grid columns streamers may occupy.
            rng (np.random.Generator): Source of every random draw.
        """
        self.min_speed = int(params.get('min_speed', MIN_SPEED))
        self.max_speed = int(params.get('max_speed', MAX_SPEED))
        self.min_length = int(params.get('min_length', MIN_LENGTH))
        self.max_length = int(params.get('max_length', MAX_LENGTH))
        self.min_code_point = int(params.get('min_code_point', MIN_CODE_POINT))
        self.max_code_point = int(params.get('max_code_point', MAX_CODE_POINT))
        self._validate(count, num_cols)

        self.rng = rng
        self.columns = np.zeros(count, dtype=np.int64)
        self.rows = np.zeros(count, dtype=np.float64)
        self.speeds = np.zeros(count, dtype=np.float64)
        self.lengths = np.zeros(count, dtype=np.int64)
        self.text = np.zeros((count, self.max_length), dtype=np.uint32)

        self.reset_many(range(count), num_cols)

        logging.debug(
            f"StreamerSystem initialized with {count} streamers over {num_cols} columns. "
            f"Text buffer shape: {self.text.shape}"
        )

    def _validate(self, count: int, num_cols: int) -> None:
        problems = []
        if count < 0:
            problems.append(f"streamer count {count} is negative")
        if num_cols < 1:
            problems.append(f"num_cols {num_cols} must be at least 1")
        if not 0 <= self.min_speed <= self.max_speed:
            problems.append(f"speed range [{self.min_speed}, {self.max_speed}] is invalid")
        if not 1 <= self.min_length <= self.max_length:
            problems.append(f"length range [{self.min_length}, {self.max_length}] is invalid")
        if not 0 <= self.min_code_point <= self.max_code_point:
            problems.append(
                f"code point range [{self.min_code_point:#06x}, {self.max_code_point:#06x}] is invalid"
            )
        if problems:
            msg = f"Configuration error: {'; '.join(problems)}."
            logging.critical(msg)
            raise ValueError(msg)

    def __len__(self) -> int:
        return self.columns.shape[0]

    def __getitem__(self, index: int) -> Streamer:
        return Streamer(
            column=int(self.columns[index]),
            row=float(self.rows[index]),
            speed=float(self.speeds[index]),
            text=self.text_of(index),
        )

    def text_of(self, index: int) -> str:
        """Returns the meaningful part of a streamer's text buffer as a string."""
        length = self.lengths[index]
        return ''.join(chr(cp) for cp in self.text[index, :length])

    def reset(self, index: int, num_cols: int) -> None:
        """Resets a streamer to a new random column, speed and text at the top row."""
        rng = self.rng
        self.columns[index] = rand_int(rng, 0, num_cols)
        self.rows[index] = 0.0
        self.speeds[index] = rand_int(rng, self.min_speed, self.max_speed + 1)
        length = rand_int(rng, self.min_length, self.max_length + 1)
        self.lengths[index] = length
        self.text[index, :length] = rng.integers(
            self.min_code_point, self.max_code_point + 1, size=length
        )

    def reset_many(self, indices: Iterable[int], num_cols: int) -> None:
        for index in indices:
            self.reset(index, num_cols)

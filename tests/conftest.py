import numpy as np
import pytest

from streamer import StreamerSystem


class FakeFontMetrics:
    """Monospaced font with a fixed advance and line height."""
    def __init__(self, advance=9, line=18, wide=None):
        self.advance = advance
        self.line = line
        self.wide = wide if wide is not None else {}

    def glyph_advance(self, cp):
        return self.wide.get(cp, self.advance)

    def line_height(self):
        return self.line


class RecordingSink:
    def __init__(self):
        self.calls = []

    def draw_char(self, char, x, y, color):
        self.calls.append((char, x, y, color))

    def at(self, x, y):
        return [c for c in self.calls if c[1] == x and c[2] == y]


class FakeClock:
    def __init__(self, now_ms=0.0):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms


def set_streamer(system, index, column, row, speed, text):
    system.columns[index] = column
    system.rows[index] = row
    system.speeds[index] = speed
    system.lengths[index] = len(text)
    system.text[index, :len(text)] = [ord(c) for c in text]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def font():
    return FakeFontMetrics()


@pytest.fixture
def make_system(rng):
    def _make(count, num_cols=45, params=None):
        return StreamerSystem(params or {}, count, num_cols, rng)
    return _make

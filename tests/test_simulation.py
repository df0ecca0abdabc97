import logging

import numpy as np
import pytest

from simulation import Simulation
from conftest import set_streamer


@pytest.fixture
def make_sim(rng):
    def _make(params=None, num_cols=45, num_rows=23, now_ms=0.0):
        sim = Simulation(params or {}, rng, now_ms)
        sim.rebuild(num_cols, num_rows, now_ms)
        return sim
    return _make


def test_rebuild_creates_max_streamers(make_sim):
    sim = make_sim()
    assert sim.is_built
    assert len(sim.streamers) == 200
    assert np.all(sim.streamers.rows == 0.0)
    assert np.all((sim.streamers.columns >= 0) & (sim.streamers.columns < 45))


def test_rebuild_replaces_streamers_and_restarts_clock(make_sim):
    sim = make_sim(now_ms=100.0)
    old = sim.streamers
    sim.rebuild(10, 5, 2500.0)
    assert sim.streamers is not old
    assert sim.last_tick_ms == 2500.0
    assert (sim.num_cols, sim.num_rows) == (10, 5)
    assert np.all(sim.streamers.columns < 10)


def test_max_streamers_is_configurable(make_sim):
    sim = make_sim(params={"max_streamers": 7})
    assert len(sim.streamers) == 7


def test_advance_without_streamers_is_a_noop(rng):
    sim = Simulation({}, rng, 0.0)
    assert sim.advance(1000.0) == 0
    assert not sim.is_built


def test_single_tick_moves_head(make_sim):
    sim = make_sim(params={"max_streamers": 1})
    set_streamer(sim.streamers, 0, column=3, row=0.0, speed=20, text="x" * 30)

    reset = sim.advance(500.0)

    assert reset == 0
    assert sim.streamers.rows[0] == pytest.approx(10.0)
    assert sim.streamers.lengths[0] == 30
    assert sim.last_tick_ms == 500.0


def test_tail_exit_resets_streamer(make_sim):
    sim = make_sim(params={"max_streamers": 1}, num_rows=40)
    set_streamer(sim.streamers, 0, column=3, row=53.0, speed=45, text="y" * 10)

    reset = sim.advance(0.0)

    assert reset == 1
    s = sim.streamers[0]
    assert s.row == 0.0
    assert 0 <= s.column < 45
    assert 5 <= s.speed <= 45
    assert 10 <= len(s.text) <= 90
    assert "y" not in s.text


def test_tail_exactly_at_last_row_is_not_reset(make_sim):
    sim = make_sim(params={"max_streamers": 1}, num_rows=40)
    set_streamer(sim.streamers, 0, column=3, row=50.0, speed=45, text="y" * 10)

    assert sim.advance(0.0) == 0
    assert sim.streamers.rows[0] == 50.0


def test_no_streamer_left_below_screen_after_tick(make_sim):
    sim = make_sim(num_rows=23)
    now = 0.0
    for _ in range(300):
        now += 50.0
        sim.advance(now)
        s = sim.streamers
        assert not np.any(s.rows - s.lengths > sim.num_rows)


def test_rows_integrate_speed_times_elapsed_time(make_sim):
    sim = make_sim(num_rows=100000)
    speeds = sim.streamers.speeds.copy()
    now = 0.0
    deltas = [16.0, 7.0, 33.5, 10.0, 250.0]
    for delta in deltas:
        now += delta
        sim.advance(now)
    expected = speeds * sum(deltas) / 1000.0
    assert np.allclose(sim.streamers.rows, expected)


def test_backwards_clock_is_clamped_to_zero(make_sim, caplog):
    sim = make_sim(num_rows=100000)
    sim.advance(1000.0)
    rows = sim.streamers.rows.copy()

    with caplog.at_level(logging.WARNING):
        assert sim.advance(900.0) == 0

    assert np.array_equal(sim.streamers.rows, rows)
    assert "Clock went backwards" in caplog.text
    assert sim.last_tick_ms == 900.0

    sim.advance(1000.0)
    assert np.allclose(sim.streamers.rows, rows + sim.streamers.speeds * 0.1)

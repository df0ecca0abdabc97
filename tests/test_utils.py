import json
import logging

import numpy as np
import pytest

from utils import load_config, rand_int, setup_logging


def test_rand_int_stays_in_half_open_range(rng):
    draws = {rand_int(rng, 5, 46) for _ in range(5000)}
    assert min(draws) == 5
    assert max(draws) == 45


def test_rand_int_single_value_range(rng):
    assert all(rand_int(rng, 3, 4) == 3 for _ in range(20))


def test_rand_int_returns_python_int(rng):
    assert type(rand_int(rng, 0, 10)) is int


@pytest.mark.parametrize("low, high", [(5, 5), (10, 3)])
def test_rand_int_rejects_empty_range(rng, low, high):
    with pytest.raises(ValueError):
        rand_int(rng, low, high)


def test_rand_int_is_reproducible_with_seed():
    a = [rand_int(np.random.default_rng(42), 0, 1000) for _ in range(3)]
    b = [rand_int(np.random.default_rng(42), 0, 1000) for _ in range(3)]
    assert a == b


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"max_streamers": 12}}))
    config = load_config(str(path))
    assert config["simulation_parameters"]["max_streamers"] == 12


def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.json"))


def test_load_config_bad_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_creates_log_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "rain.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert log_file.exists()


def test_setup_logging_does_not_stack_handlers(tmp_path, restore_root_logger):
    config = {"logging": {"log_file": str(tmp_path / "rain.log")}}
    setup_logging(config)
    setup_logging(config)
    assert len(restore_root_logger.handlers) == 2

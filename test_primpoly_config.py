"""
Tests for the configuration helpers.
"""

import json
import logging

import pytest

from primpoly_config import DEFAULT_CONFIG, integer_limits, load_config, resolve_config, setup_basic_logger


def test_integer_limits():
    assert integer_limits(64) == (2 ** 63 - 1, 62, 31)
    assert integer_limits(128) == (2 ** 127 - 1, 125, 63)
    with pytest.raises(ValueError):
        integer_limits(32)


def test_resolve_config_overlays_defaults():
    assert resolve_config() == DEFAULT_CONFIG
    cfg = resolve_config({"integer_bits": 128})
    assert cfg["integer_bits"] == 128
    assert cfg["num_prime_test_trials"] == DEFAULT_CONFIG["num_prime_test_trials"]
    assert DEFAULT_CONFIG["integer_bits"] == 64


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"num_prime_test_trials": 10, "log_level": "DEBUG"}))
    cfg = load_config(str(path))
    assert cfg["num_prime_test_trials"] == 10
    assert cfg["log_level"] == "DEBUG"
    assert cfg["integer_bits"] == 64

    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_setup_basic_logger_adds_one_handler():
    logger = setup_basic_logger("primpoly.test", level=logging.DEBUG)
    again = setup_basic_logger("primpoly.test", level=logging.INFO)
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO

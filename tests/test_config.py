"""Tests for engine configuration loading."""

import json
import logging
from pathlib import Path

from poker_equity.calculator.config import EngineConfig, load_engine_config
from poker_equity.utils.constants import Position


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "config.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


class TestLoadEngineConfig:
    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_engine_config(tmp_path / "absent.json") == EngineConfig()

    def test_full_config(self, tmp_path) -> None:
        path = _write(tmp_path, {
            "confidence_level": 0.99,
            "base_iterations": 2000,
            "max_iterations": 20000,
            "basic_iterations": 1000,
            "workers": 4,
            "seed": 17,
            "default_position": "late",
            "default_stack_depth": 40,
            "timeout_seconds": 5,
        })
        config = load_engine_config(path)
        assert config.confidence_level == 0.99
        assert config.base_iterations == 2000
        assert config.max_iterations == 20000
        assert config.basic_iterations == 1000
        assert config.workers == 4
        assert config.seed == 17
        assert config.default_position == Position.LATE
        assert config.default_stack_depth == 40.0
        assert config.timeout_seconds == 5.0

    def test_partial_config_keeps_defaults(self, tmp_path) -> None:
        config = load_engine_config(_write(tmp_path, {"workers": 2}))
        assert config.workers == 2
        assert config.base_iterations == EngineConfig().base_iterations

    def test_invalid_json(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="poker_equity.config"):
            config = load_engine_config(_write(tmp_path, "{not json"))
        assert config == EngineConfig()
        assert "Failed to read" in caplog.text

    def test_non_object(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="poker_equity.config"):
            config = load_engine_config(_write(tmp_path, [1, 2, 3]))
        assert config == EngineConfig()
        assert "not a JSON object" in caplog.text

    def test_invalid_values_fall_back_per_key(self, tmp_path, caplog) -> None:
        path = _write(tmp_path, {
            "workers": 0,
            "seed": "abc",
            "default_position": "button",
            "timeout_seconds": -2,
            "base_iterations": True,
            "max_iterations": 9000,
        })
        with caplog.at_level(logging.WARNING, logger="poker_equity.config"):
            config = load_engine_config(path)
        defaults = EngineConfig()
        assert config.workers == defaults.workers
        assert config.seed is None
        assert config.default_position == defaults.default_position
        assert config.timeout_seconds is None
        assert config.base_iterations == defaults.base_iterations
        assert config.max_iterations == 9000
        assert caplog.text.count("Invalid value") == 5

    def test_unknown_key_ignored(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="poker_equity.config"):
            config = load_engine_config(_write(tmp_path, {"colour": "red"}))
        assert config == EngineConfig()
        assert "colour" in caplog.text

    def test_null_seed_and_timeout(self, tmp_path) -> None:
        config = load_engine_config(_write(tmp_path, {"seed": None, "timeout_seconds": None}))
        assert config.seed is None
        assert config.timeout_seconds is None

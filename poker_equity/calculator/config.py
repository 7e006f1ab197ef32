"""Engine configuration.

Loaded from ``~/.poker_equity/config.json`` when present. Every key is
optional; missing or invalid keys keep their defaults.

Expected JSON format:
    {
        "confidence_level": 0.95,
        "base_iterations": 5000,
        "max_iterations": 50000,
        "basic_iterations": 5000,
        "workers": 4,
        "seed": null,
        "default_position": "middle",
        "default_stack_depth": 100,
        "timeout_seconds": 10
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from poker_equity.utils.constants import Position

logger = logging.getLogger("poker_equity.config")

DEFAULT_CONFIG_PATH = Path.home() / ".poker_equity" / "config.json"


@dataclass(frozen=True)
class EngineConfig:
    """Tunable defaults for EquityEngine."""

    confidence_level: float = 0.95
    base_iterations: int = 5_000
    max_iterations: int = 50_000
    basic_iterations: int = 5_000  # reduced-fidelity fallback
    workers: int = 1
    seed: int | None = None
    default_position: Position = Position.MIDDLE
    default_stack_depth: float = 100.0
    timeout_seconds: float | None = None


_INT_KEYS = {"base_iterations", "max_iterations", "basic_iterations", "workers"}
_FLOAT_KEYS = {"confidence_level", "default_stack_depth"}


def _coerce(key: str, value: object) -> object:
    """Convert a raw JSON value to the field's type, or raise ValueError."""
    if key in _INT_KEYS:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"expected a positive integer, got {value!r}")
        return value
    if key in _FLOAT_KEYS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {value!r}")
        return float(value)
    if key == "default_position":
        return Position(value)
    if key == "seed":
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"expected an integer or null, got {value!r}")
        return value
    if key == "timeout_seconds":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"expected a positive number or null, got {value!r}")
        return float(value)
    raise ValueError("unknown key")


def load_engine_config(config_path: Path | None = None) -> EngineConfig:
    """Load engine configuration from JSON.

    Returns the defaults if the file does not exist or cannot be parsed.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return EngineConfig()

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read engine config at %s: %s", path, e)
        return EngineConfig()

    if not isinstance(data, dict):
        logger.warning("Engine config at %s is not a JSON object", path)
        return EngineConfig()

    known = {f.name for f in fields(EngineConfig)}
    values: dict[str, object] = {}
    for key, raw in data.items():
        if key not in known:
            logger.warning("Ignoring unknown engine config key: %s", key)
            continue
        try:
            values[key] = _coerce(key, raw)
        except ValueError as e:
            logger.warning("Invalid value for engine config key %s: %s", key, e)

    return EngineConfig(**values)

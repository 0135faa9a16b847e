# Copyright (c) Syntropy Systems
"""Configuration management for memobench."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import cast

import yaml

from memobench.controls import MAX_SUPPORTED_DEPTH
from memobench.matrix import DEFAULT_MAX_DEPTH, DEFAULT_RENDER_COUNTS
from memobench.workload import DEFAULT_COMPONENT_COUNT

CONFIG_DIR_NAME = ".memobench"
CONFIG_FILE_NAME = "config.yaml"


class ConfigError(ValueError):
    """Invalid configuration value."""


@dataclass
class BenchConfig:
    """Configuration for memobench."""

    # Deepest nesting level in the test matrix
    max_depth: int = DEFAULT_MAX_DEPTH

    # Target re-render counts, in run order
    render_counts: list[int] = field(
        default_factory=lambda: list(DEFAULT_RENDER_COUNTS)
    )

    # Root components in the workload
    component_count: int = DEFAULT_COMPONENT_COUNT

    # Upper clamp for manually entered depth levels
    max_supported_depth: int = MAX_SUPPORTED_DEPTH

    # Render counter display refresh interval (seconds)
    display_interval: float = 1.0

    # Default scatter plot output path
    plot_path: str | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def find_memobench_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .memobench directory holding a config file.

    Walks from start_path (default: cwd) up to the filesystem root. Returns
    None if no directory on the way has .memobench/config.yaml.
    """
    start = (start_path or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        config_dir = directory / CONFIG_DIR_NAME
        if (config_dir / CONFIG_FILE_NAME).is_file():
            return config_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global memobench config directory (~/.memobench)."""
    return Path.home() / CONFIG_DIR_NAME


def _non_negative_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"'{key}' must be a non-negative integer, got {value!r}"
        raise ConfigError(msg)
    return value


def parse_config(data: dict[str, object]) -> BenchConfig:
    """Build a config from a parsed YAML mapping, validating values."""
    config = BenchConfig()

    config.max_depth = _non_negative_int(data, "max_depth", config.max_depth)
    config.component_count = _non_negative_int(
        data, "component_count", config.component_count
    )
    config.max_supported_depth = _non_negative_int(
        data, "max_supported_depth", config.max_supported_depth
    )

    render_counts = data.get("render_counts", config.render_counts)
    if (
        not isinstance(render_counts, list)
        or not render_counts
        or not all(
            isinstance(v, int) and not isinstance(v, bool) and v >= 1
            for v in cast("list[object]", render_counts)
        )
    ):
        msg = f"'render_counts' must be a non-empty list of positive integers, got {render_counts!r}"
        raise ConfigError(msg)
    config.render_counts = cast("list[int]", render_counts)

    display_interval = data.get("display_interval", config.display_interval)
    if (
        isinstance(display_interval, bool)
        or not isinstance(display_interval, (int, float))
        or display_interval <= 0
    ):
        msg = f"'display_interval' must be a positive number, got {display_interval!r}"
        raise ConfigError(msg)
    config.display_interval = float(display_interval)

    plot_path = data.get("plot_path")
    if plot_path is not None and not isinstance(plot_path, str):
        msg = f"'plot_path' must be a string, got {plot_path!r}"
        raise ConfigError(msg)
    config.plot_path = plot_path

    return config


def load_config(config_path: Path | None = None) -> BenchConfig:
    """Load configuration from .memobench/config.yaml or defaults.

    Looks for config in:
    1. Provided config_path
    2. Nearest .memobench directory walking up
    3. ~/.memobench/config.yaml
    4. Defaults
    """
    if config_path is None:
        found_dir = find_memobench_dir()
        if found_dir is not None:
            config_path = found_dir / CONFIG_FILE_NAME
        else:
            global_config = get_global_config_dir() / CONFIG_FILE_NAME
            if global_config.exists():
                config_path = global_config

    if config_path is None or not config_path.exists():
        return BenchConfig()

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        msg = f"{config_path} must contain a mapping"
        raise ConfigError(msg)

    return parse_config(cast("dict[str, object]", data))

"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

from perf_sched_plot.histogram import METRICS

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    perf_binary: str = "perf"
    use_sudo: bool = True
    bins: int = 10
    width: int = 60
    metric: str = "sch_delay"
    log_level: str = "WARNING"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_key: str, yaml_data: dict, yaml_key: str, default):
    """CLI flag > environment variable > YAML key > default."""
    if cli_value is not None:
        return cli_value
    if env_key in os.environ:
        return os.environ[env_key]
    if yaml_key in yaml_data:
        return yaml_data[yaml_key]
    return default


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data."""
    no_sudo = getattr(cli_args, "no_sudo", False)

    config = Config(
        perf_binary=str(_pick(None, "PERF_BINARY", yaml_data, "perf_binary", Config.perf_binary)),
        use_sudo=False if no_sudo else _parse_bool(
            _pick(None, "PERF_USE_SUDO", yaml_data, "use_sudo", Config.use_sudo)
        ),
        bins=int(_pick(getattr(cli_args, "bins", None), "HIST_BINS", yaml_data, "bins", Config.bins)),
        width=int(_pick(getattr(cli_args, "width", None), "HIST_WIDTH", yaml_data, "width", Config.width)),
        metric=str(_pick(getattr(cli_args, "metric", None), "HIST_METRIC", yaml_data, "metric", Config.metric)),
        log_level=str(_pick(None, "LOG_LEVEL", yaml_data, "log_level", Config.log_level)).upper(),
    )

    if config.metric not in METRICS:
        raise ValueError(f"Unknown metric {config.metric!r}, expected one of {sorted(METRICS)}")
    if config.bins < 1:
        raise ValueError(f"bins must be >= 1, got {config.bins}")
    if config.width < 1:
        raise ValueError(f"width must be >= 1, got {config.width}")
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {config.log_level!r}")
    return config

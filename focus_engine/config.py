"""Engine settings with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional

__all__ = [
    "ConfigError",
    "DEFAULT_PALETTE",
    "EngineSettings",
    "OTHER_COLOR",
    "get_settings",
    "load_settings",
]

OTHER_COLOR = "#94A3B8"

# Base goal colors followed by extra series colors.
DEFAULT_PALETTE: tuple[str, ...] = (
    "#FFD700",
    "#EC4899",
    "#3B82F6",
    "#22C55E",
    "#8B5CF6",
    "#F97316",
    "#06B6D4",
    "#8B5CF6",
    "#F97316",
    "#3B82F6",
)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigError(ValueError):
    """Raised when a configuration value is missing or invalid."""


@dataclass(frozen=True)
class EngineSettings:
    """Defaults used by the report facade, CLI and demo.

    Attributes
    ----------
    default_top_n : int
        Number of groups shown individually before folding into "Other".
    other_color : str
        Neutral color for the "Other" and "No goal" groups.
    palette : tuple[str, ...]
        Fallback stack colors, picked by stack position.
    rolling_window_sizes : dict[str, int]
        Number of periods covered by a rolling range per granularity.
    log_level : str
        Level passed to ``logging.basicConfig`` by the CLI.
    """

    default_top_n: int = 6
    other_color: str = OTHER_COLOR
    palette: tuple[str, ...] = DEFAULT_PALETTE
    rolling_window_sizes: dict[str, int] = field(
        default_factory=lambda: {"day": 14, "week": 12, "month": 12}
    )
    log_level: str = "WARNING"


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got '{raw}'") from exc
    if value < 1:
        raise ConfigError(f"{name} must be >= 1, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from ``FOCUS_ENGINE_*`` environment variables."""

    env = os.environ if env is None else env
    defaults = EngineSettings()

    log_level = env.get("FOCUS_ENGINE_LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"FOCUS_ENGINE_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got '{log_level}'")

    windows = {
        granularity: _positive_int(env, f"FOCUS_ENGINE_WINDOW_{granularity.upper()}", size)
        for granularity, size in defaults.rolling_window_sizes.items()
    }

    settings = EngineSettings(
        default_top_n=_positive_int(env, "FOCUS_ENGINE_TOP_N", defaults.default_top_n),
        rolling_window_sizes=windows,
        log_level=log_level,
    )
    logging.getLogger(__name__).debug("Loaded settings: %s", settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    return load_settings()

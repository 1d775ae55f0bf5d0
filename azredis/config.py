"""Environment-variable configuration loader.

Every setting is read from an ``AZREDIS_*`` variable:

    AZREDIS_LOG_LEVEL          debug | info | warning | error   (default info)
    AZREDIS_LATE_INIT_ENABLED  boolean                           (default true)
    AZREDIS_OUTPUT_INDENT      int, clamped to 0..8              (default 2)

Integers that fail to parse fall back to their default.  An unknown log
level raises ``ValueError``.
"""

from __future__ import annotations

import os
from typing import Final

from azredis.models.config import AzRedisConfig, LogConfig, OutputConfig, ReconcileConfig

_PREFIX: Final[str] = "AZREDIS_"

_VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"debug", "info", "warning", "error"})
_TRUTHY: Final[frozenset[str]] = frozenset({"true", "1", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"false", "0", "no", "off"})


def _env(name: str) -> str | None:
    value = os.environ.get(_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


def _env_int(name: str, default: int, minimum: int, maximum: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, min(maximum, value))


def _parse_log_level(raw: str | None) -> str:
    if raw is None:
        return "info"
    level = raw.lower()
    if level not in _VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level {raw!r}; expected one of {sorted(_VALID_LOG_LEVELS)}")
    return level


def load_config() -> AzRedisConfig:
    """Build an :class:`AzRedisConfig` from the environment."""
    return AzRedisConfig(
        log=LogConfig(level=_parse_log_level(_env("LOG_LEVEL"))),
        reconcile=ReconcileConfig(late_init_enabled=_env_bool("LATE_INIT_ENABLED", True)),
        output=OutputConfig(indent=_env_int("OUTPUT_INDENT", 2, 0, 8)),
    )

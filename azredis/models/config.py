"""Runtime configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogConfig:
    level: str = "info"


@dataclass(frozen=True)
class ReconcileConfig:
    """Planner behaviour.

    late_init_enabled -- backfill absent spec fields from the provider
                         before drift detection.
    """

    late_init_enabled: bool = True


@dataclass(frozen=True)
class OutputConfig:
    """CLI rendering. ``indent`` is the JSON indent width (0..8)."""

    indent: int = 2


@dataclass(frozen=True)
class AzRedisConfig:
    """Top-level configuration, built by :func:`azredis.config.load_config`."""

    log: LogConfig = field(default_factory=LogConfig)
    reconcile: ReconcileConfig = field(default_factory=ReconcileConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

"""Prometheus metrics for azredis.

Only the reconcile planner updates these; the reconcile functions
themselves touch no process-wide state.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

plans_total = Counter(
    "azredis_plans_total",
    "Total reconcile plans computed",
    ["action"],
)

drift_fields_total = Counter(
    "azredis_drift_fields_total",
    "Total drifted fields detected",
    ["field"],
)

late_init_fields_total = Counter(
    "azredis_late_init_fields_total",
    "Total desired-spec fields backfilled from the provider",
    ["field"],
)

plan_duration_seconds = Histogram(
    "azredis_plan_duration_seconds",
    "Reconcile plan computation duration in seconds",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
)

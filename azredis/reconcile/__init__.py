"""Public API of the reconcile core.

Usage::

    from azredis.reconcile import late_initialize, needs_update, new_update_parameters

    late_initialize(spec, observed)
    if needs_update(spec, observed):
        request = new_update_parameters(spec)

Or let the planner run the whole cycle::

    from azredis.reconcile import plan

    result = plan(spec, observed)
"""

from __future__ import annotations

from azredis.reconcile.drift import FieldDrift, compute_drift, needs_update
from azredis.reconcile.late_init import late_initialize
from azredis.reconcile.observation import generate_observation
from azredis.reconcile.parameters import new_create_parameters, new_update_parameters
from azredis.reconcile.planner import PlanAction, ReconcilePlan, plan

__all__ = [
    "FieldDrift",
    "PlanAction",
    "ReconcilePlan",
    "compute_drift",
    "generate_observation",
    "late_initialize",
    "needs_update",
    "new_create_parameters",
    "new_update_parameters",
    "plan",
]

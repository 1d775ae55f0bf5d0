"""Reconcile planning: compose the reconcile functions into one decision.

The order follows a reconcile cycle:

    1. no observed resource  -> create request from the desired spec
    2. late-initialize the desired spec from the observed resource
    3. drift detection       -> update request, or nothing to do
    4. status observation of the observed resource

:func:`plan` performs no I/O.  It mutates the desired spec during step 2
(unless late initialization is disabled) and is the only place that logs or
records metrics.  Provisioning state is carried into the observation but
never influences the action.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum

from azredis.models.resources import (
    CreateParameters,
    RedisObservation,
    RedisParameters,
    RedisResource,
    UpdateParameters,
)
from azredis.observability.logging import get_logger
from azredis.observability.metrics import (
    drift_fields_total,
    late_init_fields_total,
    plan_duration_seconds,
    plans_total,
)
from azredis.reconcile.drift import FieldDrift, compute_drift
from azredis.reconcile.fields import require
from azredis.reconcile.late_init import late_initialize
from azredis.reconcile.observation import generate_observation
from azredis.reconcile.parameters import new_create_parameters, new_update_parameters

_log = get_logger("planner")


class PlanAction(StrEnum):
    """What the caller should do with the provider."""

    CREATE = "create"
    UPDATE = "update"
    NOOP = "noop"


@dataclass(frozen=True)
class ReconcilePlan:
    """Outcome of one planning pass.

    Attributes:
        action:           The provider call to make, if any.
        request:          Payload for that call; ``None`` for NOOP.
        late_initialized: Desired-spec fields backfilled during planning.
        drift:            Every drifted field (empty unless action is UPDATE).
        observation:      Status projection of the observed resource, or
                          ``None`` when the resource does not exist yet.
    """

    action: PlanAction
    request: CreateParameters | UpdateParameters | None = None
    late_initialized: list[str] = field(default_factory=list)
    drift: list[FieldDrift] = field(default_factory=list)
    observation: RedisObservation | None = None


def plan(
    spec: RedisParameters,
    observed: RedisResource | None,
    *,
    late_init: bool = True,
) -> ReconcilePlan:
    """Decide how to bring *observed* in line with *spec*.

    Args:
        spec:      The desired spec.  Mutated in place by late initialization.
        observed:  The provider's live resource, or ``None`` if it does not
                   exist.
        late_init: Backfill absent spec fields from *observed* first.

    Returns:
        A :class:`ReconcilePlan`.
    """
    require(spec, RedisParameters, "spec")
    start = time.monotonic()

    if observed is None:
        result = ReconcilePlan(action=PlanAction.CREATE, request=new_create_parameters(spec))
    else:
        require(observed, RedisResource, "observed")
        filled = late_initialize(spec, observed) if late_init else []
        drift = compute_drift(spec, observed)
        if drift:
            result = ReconcilePlan(
                action=PlanAction.UPDATE,
                request=new_update_parameters(spec),
                late_initialized=filled,
                drift=drift,
                observation=generate_observation(observed),
            )
        else:
            result = ReconcilePlan(
                action=PlanAction.NOOP,
                late_initialized=filled,
                observation=generate_observation(observed),
            )

    _record(result, time.monotonic() - start)
    return result


def _record(result: ReconcilePlan, elapsed: float) -> None:
    plans_total.labels(action=result.action.value).inc()
    plan_duration_seconds.observe(elapsed)
    for name in result.late_initialized:
        late_init_fields_total.labels(field=name).inc()
    for d in result.drift:
        drift_fields_total.labels(field=d.field_path).inc()

    _log.info(
        "plan computed",
        action=result.action.value,
        drift_fields=[d.field_path for d in result.drift],
        late_initialized=result.late_initialized,
    )

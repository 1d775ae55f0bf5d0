"""Status projection of an observed cache."""

from __future__ import annotations

import copy

from azredis.models.resources import RedisObservation, RedisResource
from azredis.reconcile.fields import observe_fields, require, resolve


def generate_observation(observed: RedisResource) -> RedisObservation:
    """Project *observed* into a :class:`RedisObservation`.

    Values are copied verbatim; anything the provider left out is reported
    as the zero value of the status field.  Linked servers are reduced to
    their ids.
    """
    require(observed, RedisResource, "observed")
    values: dict[str, object] = {}
    for f in observe_fields():
        value = resolve(observed, f.provider_path)
        if value is None:
            values[f.name] = f.zero_value()
        elif f.convert is not None:
            values[f.name] = f.convert(value)
        else:
            values[f.name] = copy.deepcopy(value)
    return RedisObservation(**values)  # type: ignore[arg-type]

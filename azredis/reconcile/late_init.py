"""Late initialization: backfill absent desired fields from the provider."""

from __future__ import annotations

import copy

from azredis.models.resources import RedisParameters, RedisResource
from azredis.reconcile.fields import is_default, late_init_fields, require, resolve


def late_initialize(spec: RedisParameters, observed: RedisResource) -> list[str]:
    """Fill every absent late-init field of *spec* from *observed*, in place.

    A field already present on *spec* is never replaced, even when the
    provider reports a different value.  Observed values that are absent or
    empty strings are not copied; the empty-string rule holds for every
    string field, not only ``minimum_tls_version``.  ``location`` and
    ``sku`` are never touched.

    The caller must hold exclusive access to *spec* for the duration of
    the call.

    Returns:
        Names of the fields that were filled, in table order.  Calling again
        with the same *observed* returns an empty list.
    """
    require(spec, RedisParameters, "spec")
    require(observed, RedisResource, "observed")
    filled: list[str] = []
    for f in late_init_fields():
        if getattr(spec, f.name) is not None:
            continue
        value = resolve(observed, f.provider_path)
        if is_default(value):
            continue
        setattr(spec, f.name, copy.deepcopy(value))
        filled.append(f.name)
    return filled

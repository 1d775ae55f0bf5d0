"""Drift detection between a desired spec and an observed cache.

Only the fields an update request would carry are compared.  A field that is
absent from the desired spec never contributes drift: the provider's value is
accepted as is.  Scalar fields are compared before mappings, and
:func:`needs_update` stops at the first difference.

:func:`compute_drift` walks every field and reports each difference as a
:class:`FieldDrift` whose values are JSON-serialised to strings, so they can
be logged or printed without further type-checking.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterator
from dataclasses import dataclass

from azredis.models.resources import RedisParameters, RedisResource
from azredis.reconcile.fields import FieldKind, FieldSpec, require, resolve, update_fields, values_equal

# Cheap comparisons first
_CHECK_ORDER: dict[FieldKind, int] = {
    FieldKind.SCALAR: 0,
    FieldKind.STRUCT: 1,
    FieldKind.SEQUENCE: 2,
    FieldKind.MAPPING: 3,
}


@dataclass(frozen=True)
class FieldDrift:
    """A single mutable field whose observed value differs from the desired one.

    Uses dotted field paths on the desired spec (e.g. ``sku.capacity``).
    """

    field_path: str
    desired: str | None
    observed: str | None


def needs_update(spec: RedisParameters, observed: RedisResource) -> bool:
    """Return True if any mutable field of *spec* differs from *observed*."""
    require(spec, RedisParameters, "spec")
    require(observed, RedisResource, "observed")
    return next(_iter_drift(spec, observed), None) is not None


def compute_drift(spec: RedisParameters, observed: RedisResource) -> list[FieldDrift]:
    """Return every drifted field, sorted by ``field_path``.

    An empty list means no update is needed.
    """
    require(spec, RedisParameters, "spec")
    require(observed, RedisResource, "observed")
    drifts = list(_iter_drift(spec, observed))
    drifts.sort(key=lambda d: d.field_path)
    return drifts


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _json_str(value: object) -> str | None:
    """Serialise *value* to a compact JSON string; ``None`` stays ``None``."""
    if value is None:
        return None
    return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)


def _iter_drift(spec: RedisParameters, observed: RedisResource) -> Iterator[FieldDrift]:
    for f in sorted(update_fields(), key=lambda f: _CHECK_ORDER[f.kind]):
        desired = getattr(spec, f.name)
        if desired is None:
            continue
        actual = resolve(observed, f.provider_path)
        if f.kind is FieldKind.STRUCT:
            yield from _iter_struct_drift(f, desired, actual)
        elif not values_equal(f.kind, desired, actual):
            yield FieldDrift(field_path=f.name, desired=_json_str(desired), observed=_json_str(actual))


def _iter_struct_drift(f: FieldSpec, desired: object, actual: object) -> Iterator[FieldDrift]:
    """Compare a nested dataclass subfield by subfield.

    A missing observed struct drifts on every subfield the spec sets.
    """
    for sub in dataclasses.fields(desired):  # type: ignore[arg-type]
        want = getattr(desired, sub.name)
        if want is None:
            continue
        got = getattr(actual, sub.name, None) if actual is not None else None
        if want != got:
            yield FieldDrift(field_path=f"{f.name}.{sub.name}", desired=_json_str(want), observed=_json_str(got))

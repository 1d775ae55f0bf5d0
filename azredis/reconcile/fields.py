"""Declarative field-mapping table shared by every reconcile function.

Each :class:`FieldSpec` row says where a field lives on the desired spec and
on the provider resource, how two values of it are compared, and which
operations it takes part in:

    create     -- copied into the create request
    update     -- copied into the update request and compared for drift
    late_init  -- backfilled into the desired spec when absent
    observe    -- projected into the status observation

The builders, the drift detector, the observation extractor and the late
initializer are all thin loops over this table, so adding a provider field
means adding one row here.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from azredis.errors import CreateOnlyFieldError, InvalidInputError
from azredis.models.resources import LinkedServer


class FieldKind(StrEnum):
    """Comparison rule for a field."""

    SCALAR = "scalar"
    # Nested dataclass compared subfield by subfield
    STRUCT = "struct"
    # Order-sensitive list
    SEQUENCE = "sequence"
    # Unordered string-to-string mapping
    MAPPING = "mapping"


@dataclass(frozen=True)
class FieldSpec:
    """One row of the field-mapping table."""

    name: str
    provider_path: tuple[str, ...]
    kind: FieldKind
    create: bool = False
    update: bool = False
    create_only: bool = False
    late_init: bool = False
    observe: bool = False
    zero: Callable[[], object] | None = None
    convert: Callable[[object], object] | None = None

    def zero_value(self) -> object:
        """Return the value reported in status when the provider omits the field."""
        if self.zero is not None:
            return self.zero()
        if self.kind is FieldKind.MAPPING:
            return {}
        if self.kind is FieldKind.SEQUENCE:
            return []
        return None


def _linked_server_ids(servers: object) -> list[str]:
    """Project linked servers to their ids; entries without an id are skipped."""
    if not isinstance(servers, list):
        return []
    return [s.id for s in servers if isinstance(s, LinkedServer) and s.id]


def build_table(specs: Iterable[FieldSpec]) -> tuple[FieldSpec, ...]:
    """Validate and freeze a field table.

    Raises:
        CreateOnlyFieldError: a create-only field is flagged for update.
        ValueError: a field name appears twice.
    """
    table = tuple(specs)
    seen: set[str] = set()
    for spec in table:
        if spec.name in seen:
            raise ValueError(f"Duplicate field '{spec.name}' in field table")
        seen.add(spec.name)
        if spec.update and spec.create_only:
            raise CreateOnlyFieldError(spec.name)
    return table


_PROPS = "properties"

FIELDS: Final[tuple[FieldSpec, ...]] = build_table(
    [
        FieldSpec("location", ("location",), FieldKind.SCALAR, create=True, create_only=True),
        FieldSpec("zones", ("zones",), FieldKind.SEQUENCE, create=True, create_only=True, late_init=True),
        FieldSpec("tags", ("tags",), FieldKind.MAPPING, create=True, update=True, late_init=True),
        FieldSpec("sku", (_PROPS, "sku"), FieldKind.STRUCT, create=True, update=True),
        FieldSpec("subnet_id", (_PROPS, "subnet_id"), FieldKind.SCALAR, create=True, create_only=True, late_init=True),
        FieldSpec("static_ip", (_PROPS, "static_ip"), FieldKind.SCALAR, create=True, create_only=True, late_init=True),
        FieldSpec(
            "enable_non_ssl_port",
            (_PROPS, "enable_non_ssl_port"),
            FieldKind.SCALAR,
            create=True,
            update=True,
            late_init=True,
            observe=True,
            zero=bool,
        ),
        FieldSpec(
            "redis_configuration",
            (_PROPS, "redis_configuration"),
            FieldKind.MAPPING,
            create=True,
            update=True,
            late_init=True,
            observe=True,
        ),
        FieldSpec(
            "tenant_settings",
            (_PROPS, "tenant_settings"),
            FieldKind.MAPPING,
            create=True,
            update=True,
            late_init=True,
            observe=True,
        ),
        FieldSpec(
            "shard_count",
            (_PROPS, "shard_count"),
            FieldKind.SCALAR,
            create=True,
            update=True,
            late_init=True,
            observe=True,
            zero=int,
        ),
        FieldSpec(
            "minimum_tls_version",
            (_PROPS, "minimum_tls_version"),
            FieldKind.SCALAR,
            create=True,
            update=True,
            late_init=True,
            observe=True,
            zero=str,
        ),
        # Read-only provider fields
        FieldSpec("redis_version", (_PROPS, "redis_version"), FieldKind.SCALAR, observe=True, zero=str),
        FieldSpec("provisioning_state", (_PROPS, "provisioning_state"), FieldKind.SCALAR, observe=True, zero=str),
        FieldSpec("host_name", (_PROPS, "host_name"), FieldKind.SCALAR, observe=True, zero=str),
        FieldSpec("port", (_PROPS, "port"), FieldKind.SCALAR, observe=True, zero=int),
        FieldSpec("ssl_port", (_PROPS, "ssl_port"), FieldKind.SCALAR, observe=True, zero=int),
        FieldSpec(
            "linked_servers",
            (_PROPS, "linked_servers"),
            FieldKind.SEQUENCE,
            observe=True,
            convert=_linked_server_ids,
        ),
    ]
)


def create_fields(table: tuple[FieldSpec, ...] = FIELDS) -> tuple[FieldSpec, ...]:
    return tuple(f for f in table if f.create)


def update_fields(table: tuple[FieldSpec, ...] = FIELDS) -> tuple[FieldSpec, ...]:
    return tuple(f for f in table if f.update)


def late_init_fields(table: tuple[FieldSpec, ...] = FIELDS) -> tuple[FieldSpec, ...]:
    return tuple(f for f in table if f.late_init)


def observe_fields(table: tuple[FieldSpec, ...] = FIELDS) -> tuple[FieldSpec, ...]:
    return tuple(f for f in table if f.observe)


# ---------------------------------------------------------------------------
# Engine helpers
# ---------------------------------------------------------------------------


def resolve(obj: object, path: tuple[str, ...]) -> object:
    """Walk attribute *path* from *obj*; any absent hop yields ``None``."""
    current: object = obj
    for attr in path:
        if current is None:
            return None
        current = getattr(current, attr, None)
    return current


def project(obj: object, fields: Iterable[FieldSpec]) -> dict[str, object]:
    """Deep-copy each field's value off *obj* into a kwargs dict keyed by name."""
    return {f.name: copy.deepcopy(getattr(obj, f.name)) for f in fields}


def is_default(value: object) -> bool:
    """True when a provider value carries no information worth backfilling.

    Absent values and empty strings are defaults.  The empty-string rule
    applies to every string field alike (``subnet_id``, ``static_ip`` and
    ``minimum_tls_version``), so an observed ``""`` is never copied into
    the desired spec.  Empty collections, ``False`` and ``0`` are not
    defaults.
    """
    return value is None or value == ""


def values_equal(kind: FieldKind, desired: object, observed: object) -> bool:
    """Compare a present desired value with an observed one under *kind* rules.

    Absent observed collections are read as empty because the provider omits
    empty maps and lists from its responses.
    """
    if kind is FieldKind.MAPPING:
        return dict(desired) == dict(observed or {})  # type: ignore[call-overload]
    if kind is FieldKind.SEQUENCE:
        return list(desired) == list(observed or [])  # type: ignore[call-overload]
    return desired == observed


def require(value: object, expected: type, argument: str) -> None:
    """Fail fast when a reconcile function receives the wrong input."""
    if not isinstance(value, expected):
        raise InvalidInputError(argument, expected, value)

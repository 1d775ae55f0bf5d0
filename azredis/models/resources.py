"""Desired-state, observed-state and request data structures.

Optional fields use ``None`` to mean *absent*.  Absent is not the same as a
present zero value: ``tags=None`` lets the provider keep whatever it has,
while ``tags={}`` explicitly asks for no tags.  Late initialization and drift
detection both depend on this distinction, so no field here defaults to an
empty collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SkuName(StrEnum):
    """Azure Cache for Redis pricing tier."""

    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class SkuFamily(StrEnum):
    """SKU family: C for Basic/Standard, P for Premium."""

    C = "C"
    P = "P"


class TLSVersion(StrEnum):
    """Minimum TLS versions accepted by the provider."""

    TLS_1_0 = "1.0"
    TLS_1_1 = "1.1"
    TLS_1_2 = "1.2"


class ProvisioningState(StrEnum):
    """Provisioning states reported by the provider.

    Passed through to status verbatim; nothing in the reconcile core
    branches on them.
    """

    CREATING = "Creating"
    DELETING = "Deleting"
    DISABLED = "Disabled"
    FAILED = "Failed"
    LINKING = "Linking"
    PROVISIONING = "Provisioning"
    RECOVERING_SCALE_FAILURE = "RecoveringScaleFailure"
    SCALING = "Scaling"
    SUCCEEDED = "Succeeded"
    UNLINKING = "Unlinking"
    UNPROVISIONING = "Unprovisioning"
    UPDATING = "Updating"


@dataclass
class SKU:
    """Pricing tier, family and size of a cache.

    ``name`` and ``family`` are kept as plain strings so unknown provider
    values survive a round trip.
    """

    name: str
    family: str
    capacity: int


@dataclass
class RedisParameters:
    """User-declared configuration of a cache (the desired spec).

    ``subnet_id``, ``static_ip``, ``location`` and ``zones`` can only be set
    at creation time.
    """

    location: str
    sku: SKU
    zones: list[str] | None = None
    tags: dict[str, str] | None = None
    subnet_id: str | None = None
    static_ip: str | None = None
    enable_non_ssl_port: bool | None = None
    redis_configuration: dict[str, str] | None = None
    tenant_settings: dict[str, str] | None = None
    shard_count: int | None = None
    minimum_tls_version: str | None = None


@dataclass(frozen=True)
class LinkedServer:
    """Reference to a geo-replication linked server."""

    id: str | None = None


@dataclass(frozen=True)
class RedisProperties:
    """Provider-side properties of a live cache. Every field may be absent."""

    sku: SKU | None = None
    subnet_id: str | None = None
    static_ip: str | None = None
    enable_non_ssl_port: bool | None = None
    redis_configuration: dict[str, str] | None = None
    tenant_settings: dict[str, str] | None = None
    shard_count: int | None = None
    minimum_tls_version: str | None = None

    # Read-only, assigned by the provider
    redis_version: str | None = None
    provisioning_state: str | None = None
    host_name: str | None = None
    port: int | None = None
    ssl_port: int | None = None
    linked_servers: list[LinkedServer] | None = None


@dataclass(frozen=True)
class RedisResource:
    """The provider's live representation of a cache (the observed state).

    Re-fetched every reconcile cycle and never persisted.
    """

    location: str | None = None
    zones: list[str] | None = None
    tags: dict[str, str] | None = None
    properties: RedisProperties | None = None


@dataclass(frozen=True)
class RedisObservation:
    """Read-only status projection of a :class:`RedisResource`.

    Absent provider values are reported as zero values.
    """

    redis_version: str = ""
    provisioning_state: str = ""
    host_name: str = ""
    port: int = 0
    ssl_port: int = 0
    linked_servers: list[str] = field(default_factory=list)
    redis_configuration: dict[str, str] = field(default_factory=dict)
    enable_non_ssl_port: bool = False
    tenant_settings: dict[str, str] = field(default_factory=dict)
    shard_count: int = 0
    minimum_tls_version: str = ""


@dataclass(frozen=True)
class CreateParameters:
    """Create-request payload: every creatable field, absent stays absent."""

    location: str
    sku: SKU
    zones: list[str] | None = None
    tags: dict[str, str] | None = None
    subnet_id: str | None = None
    static_ip: str | None = None
    enable_non_ssl_port: bool | None = None
    redis_configuration: dict[str, str] | None = None
    tenant_settings: dict[str, str] | None = None
    shard_count: int | None = None
    minimum_tls_version: str | None = None


@dataclass(frozen=True)
class UpdateParameters:
    """Update-request payload.

    Carries only the fields that are mutable after creation; there is no
    attribute for any create-only field.
    """

    sku: SKU
    tags: dict[str, str] | None = None
    enable_non_ssl_port: bool | None = None
    redis_configuration: dict[str, str] | None = None
    tenant_settings: dict[str, str] | None = None
    shard_count: int | None = None
    minimum_tls_version: str | None = None

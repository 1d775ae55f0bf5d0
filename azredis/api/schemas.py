"""Pydantic models for the documents that cross the reconcile boundary.

Inbound:
    RedisManifest     -- the declarative resource (``spec.forProvider``),
                         camelCase keys as in the CRD.
    ProviderResource  -- the provider's resource JSON (ARM shape, with the
                         mutable and read-only fields under ``properties``).

Outbound:
    create_request_document / update_request_document -- ARM-shaped request
        bodies with absent fields omitted.
    observation_document -- camelCase status dict.

All models use Pydantic v2 syntax.  Both python field names and aliases are
accepted on input; output always uses the aliases.
"""

from __future__ import annotations

import dataclasses

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from azredis.errors import ManifestError
from azredis.models.resources import (
    SKU,
    CreateParameters,
    LinkedServer,
    ProvisioningState,
    RedisObservation,
    RedisParameters,
    RedisProperties,
    RedisResource,
    SkuFamily,
    SkuName,
    TLSVersion,
    UpdateParameters,
)


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _summarize(exc: ValidationError) -> str:
    """Collapse a ValidationError into one line: ``loc: msg; loc: msg``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class SKUSchema(_Schema):
    """Pricing tier of a cache."""

    name: str = Field(..., min_length=1, examples=[n.value for n in SkuName])
    family: str = Field(..., min_length=1, examples=[f.value for f in SkuFamily])
    capacity: int = Field(..., ge=0, examples=[1])

    @classmethod
    def from_sku(cls, sku: SKU) -> SKUSchema:
        return cls(name=sku.name, family=sku.family, capacity=sku.capacity)

    def to_sku(self) -> SKU:
        return SKU(name=self.name, family=self.family, capacity=self.capacity)


# ---------------------------------------------------------------------------
# Declarative manifest
# ---------------------------------------------------------------------------


class ForProviderSchema(_Schema):
    """``spec.forProvider`` of a Redis manifest."""

    location: str = Field(..., min_length=1, examples=["westeurope"])
    sku: SKUSchema
    zones: list[str] | None = None
    tags: dict[str, str] | None = None
    subnet_id: str | None = Field(default=None, alias="subnetId")
    static_ip: str | None = Field(default=None, alias="staticIp")
    enable_non_ssl_port: bool | None = Field(default=None, alias="enableNonSslPort")
    redis_configuration: dict[str, str] | None = Field(default=None, alias="redisConfiguration")
    tenant_settings: dict[str, str] | None = Field(default=None, alias="tenantSettings")
    shard_count: int | None = Field(default=None, ge=0, alias="shardCount")
    minimum_tls_version: str | None = Field(
        default=None, alias="minimumTlsVersion", examples=[v.value for v in TLSVersion]
    )

    def to_parameters(self) -> RedisParameters:
        return RedisParameters(
            location=self.location,
            sku=self.sku.to_sku(),
            zones=list(self.zones) if self.zones is not None else None,
            tags=dict(self.tags) if self.tags is not None else None,
            subnet_id=self.subnet_id,
            static_ip=self.static_ip,
            enable_non_ssl_port=self.enable_non_ssl_port,
            redis_configuration=dict(self.redis_configuration) if self.redis_configuration is not None else None,
            tenant_settings=dict(self.tenant_settings) if self.tenant_settings is not None else None,
            shard_count=self.shard_count,
            minimum_tls_version=self.minimum_tls_version,
        )


class ManifestMetadata(_Schema):
    name: str | None = None


class ManifestSpec(_Schema):
    for_provider: ForProviderSchema = Field(..., alias="forProvider")


class RedisManifest(_Schema):
    """A declarative Redis resource.

    Only ``spec.forProvider`` feeds reconciliation; ``metadata.name`` labels
    log output.
    """

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ManifestMetadata | None = None
    spec: ManifestSpec

    @classmethod
    def from_document(cls, document: object) -> RedisManifest:
        """Validate a parsed YAML/JSON document.

        Raises:
            ManifestError: the document does not match the schema.
        """
        try:
            return cls.model_validate(document)
        except ValidationError as exc:
            raise ManifestError("manifest", _summarize(exc)) from exc

    def to_parameters(self) -> RedisParameters:
        return self.spec.for_provider.to_parameters()


# ---------------------------------------------------------------------------
# Provider resource
# ---------------------------------------------------------------------------


class LinkedServerSchema(_Schema):
    id: str | None = None


class ProviderProperties(_Schema):
    """``properties`` of a provider resource or request body."""

    sku: SKUSchema | None = None
    subnet_id: str | None = Field(default=None, alias="subnetId")
    static_ip: str | None = Field(default=None, alias="staticIP")
    enable_non_ssl_port: bool | None = Field(default=None, alias="enableNonSslPort")
    redis_configuration: dict[str, str] | None = Field(default=None, alias="redisConfiguration")
    tenant_settings: dict[str, str] | None = Field(default=None, alias="tenantSettings")
    shard_count: int | None = Field(default=None, alias="shardCount")
    minimum_tls_version: str | None = Field(
        default=None, alias="minimumTlsVersion", examples=[v.value for v in TLSVersion]
    )
    redis_version: str | None = Field(default=None, alias="redisVersion")
    provisioning_state: str | None = Field(
        default=None, alias="provisioningState", examples=[s.value for s in ProvisioningState]
    )
    host_name: str | None = Field(default=None, alias="hostName")
    port: int | None = None
    ssl_port: int | None = Field(default=None, alias="sslPort")
    linked_servers: list[LinkedServerSchema] | None = Field(default=None, alias="linkedServers")

    def to_properties(self) -> RedisProperties:
        return RedisProperties(
            sku=self.sku.to_sku() if self.sku is not None else None,
            subnet_id=self.subnet_id,
            static_ip=self.static_ip,
            enable_non_ssl_port=self.enable_non_ssl_port,
            redis_configuration=self.redis_configuration,
            tenant_settings=self.tenant_settings,
            shard_count=self.shard_count,
            minimum_tls_version=self.minimum_tls_version,
            redis_version=self.redis_version,
            provisioning_state=self.provisioning_state,
            host_name=self.host_name,
            port=self.port,
            ssl_port=self.ssl_port,
            linked_servers=(
                [LinkedServer(id=s.id) for s in self.linked_servers] if self.linked_servers is not None else None
            ),
        )


class ProviderResource(_Schema):
    """The provider's JSON representation of a cache."""

    location: str | None = None
    zones: list[str] | None = None
    tags: dict[str, str] | None = None
    properties: ProviderProperties | None = None

    @classmethod
    def from_document(cls, document: object) -> ProviderResource:
        """Validate a parsed provider response.

        Raises:
            ManifestError: the document does not match the schema.
        """
        try:
            return cls.model_validate(document)
        except ValidationError as exc:
            raise ManifestError("provider resource", _summarize(exc)) from exc

    def to_resource(self) -> RedisResource:
        return RedisResource(
            location=self.location,
            zones=self.zones,
            tags=self.tags,
            properties=self.properties.to_properties() if self.properties is not None else None,
        )


# ---------------------------------------------------------------------------
# Outbound documents
# ---------------------------------------------------------------------------


def create_request_document(request: CreateParameters) -> dict[str, object]:
    """Serialise a create request to the provider's request-body shape."""
    body = ProviderResource(
        location=request.location,
        zones=request.zones,
        tags=request.tags,
        properties=ProviderProperties(
            sku=SKUSchema.from_sku(request.sku) if request.sku is not None else None,
            subnet_id=request.subnet_id,
            static_ip=request.static_ip,
            enable_non_ssl_port=request.enable_non_ssl_port,
            redis_configuration=request.redis_configuration,
            tenant_settings=request.tenant_settings,
            shard_count=request.shard_count,
            minimum_tls_version=request.minimum_tls_version,
        ),
    )
    return body.model_dump(by_alias=True, exclude_none=True)


def update_request_document(request: UpdateParameters) -> dict[str, object]:
    """Serialise an update request to the provider's request-body shape."""
    body = ProviderResource(
        tags=request.tags,
        properties=ProviderProperties(
            sku=SKUSchema.from_sku(request.sku) if request.sku is not None else None,
            enable_non_ssl_port=request.enable_non_ssl_port,
            redis_configuration=request.redis_configuration,
            tenant_settings=request.tenant_settings,
            shard_count=request.shard_count,
            minimum_tls_version=request.minimum_tls_version,
        ),
    )
    return body.model_dump(by_alias=True, exclude_none=True)


class ObservationSchema(_Schema):
    """Serialised RedisObservation for status reporting."""

    redis_version: str = Field(alias="redisVersion")
    provisioning_state: str = Field(alias="provisioningState")
    host_name: str = Field(alias="hostName")
    port: int
    ssl_port: int = Field(alias="sslPort")
    linked_servers: list[str] = Field(alias="linkedServers")
    redis_configuration: dict[str, str] = Field(alias="redisConfiguration")
    enable_non_ssl_port: bool = Field(alias="enableNonSslPort")
    tenant_settings: dict[str, str] = Field(alias="tenantSettings")
    shard_count: int = Field(alias="shardCount")
    minimum_tls_version: str = Field(alias="minimumTlsVersion")


def observation_document(observation: RedisObservation) -> dict[str, object]:
    """Serialise an observation to the camelCase status shape."""
    return ObservationSchema(**dataclasses.asdict(observation)).model_dump(by_alias=True)

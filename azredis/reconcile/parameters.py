"""Create and update request builders."""

from __future__ import annotations

from azredis.models.resources import CreateParameters, RedisParameters, UpdateParameters
from azredis.reconcile.fields import create_fields, project, require, update_fields


def new_create_parameters(spec: RedisParameters) -> CreateParameters:
    """Build the create request for *spec*.

    Every creatable field is carried over, including the create-only ones.
    Absent optional fields stay absent so the provider applies its own
    defaults.  Collections are deep-copied; mutating the request never
    touches the spec.
    """
    require(spec, RedisParameters, "spec")
    return CreateParameters(**project(spec, create_fields()))  # type: ignore[arg-type]


def new_update_parameters(spec: RedisParameters) -> UpdateParameters:
    """Build the update request for *spec*.

    Only fields that stay mutable after creation are carried over.
    ``location``, ``zones``, ``subnet_id`` and ``static_ip`` are dropped no
    matter what the spec says.
    """
    require(spec, RedisParameters, "spec")
    return UpdateParameters(**project(spec, update_fields()))  # type: ignore[arg-type]

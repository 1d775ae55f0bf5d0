"""Exception hierarchy for azredis."""

from __future__ import annotations


class ReconcileError(Exception):
    """Base class for every error raised by azredis."""


class InvalidInputError(ReconcileError, TypeError):
    """A reconcile function received ``None`` or an object of the wrong type."""

    def __init__(self, argument: str, expected: type, got: object) -> None:
        super().__init__(f"{argument} must be {expected.__name__}, got {type(got).__name__}")
        self.argument = argument
        self.expected = expected


class CreateOnlyFieldError(ReconcileError):
    """A field that is immutable after creation was marked as updatable."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Field '{field_name}' is create-only and cannot be part of an update request")
        self.field_name = field_name


class ManifestError(ReconcileError, ValueError):
    """An inbound manifest or provider document failed schema validation."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Invalid {source}: {detail}")
        self.source = source
        self.detail = detail

"""Infrastructure errors — payload decoding and storage I/O failures."""

from __future__ import annotations

from typing import Any

from mp_rbac.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a registry rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"
    context_fields = ("payload_type",)

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class StorageError(InfrastructureError):
    """A registry store could not read, write or delete a key."""

    default_code = "storage_error"
    context_fields = ("backend", "key")

    def __init__(
        self,
        message: str,
        *,
        backend: str | None = None,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.backend = backend
        self.key = key


__all__ = [
    "InfrastructureError",
    "SerializationError",
    "StorageError",
]

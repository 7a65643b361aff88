"""Domain errors — registry rule violations."""

from __future__ import annotations

from typing import Any

from mp_rbac.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a registry rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """A value does not meet its format rules (for example a storage key)."""

    default_code = "validation_error"


class NotFoundError(DomainError):
    """The entity targeted by an update does not exist."""

    default_code = "not_found"
    context_fields = ("resource", "identifier")

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


class DuplicateIdError(ConflictError):
    """An entity with the same id is already registered.

    Callers must pick a different id or go through the update path.
    """

    default_code = "duplicate_id"
    context_fields = ("resource", "identifier")

    def __init__(self, resource: str, identifier: str, **kwargs: Any) -> None:
        super().__init__(f"{resource} '{identifier}' already exists", **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "ConflictError",
    "DomainError",
    "DuplicateIdError",
    "NotFoundError",
    "ValidationError",
]

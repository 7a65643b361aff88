"""Kernel – framework-agnostic RBAC building blocks."""

from mp_rbac.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    DomainError,
    DuplicateIdError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
    SerializationError,
    StorageError,
    UnauthorizedError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "DomainError",
    "DuplicateIdError",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "SerializationError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",
]

"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    │       └── DuplicateIdError
    ├── ApplicationError     (application.py)
    │   ├── UnauthorizedError
    │   └── ForbiddenError
    └── InfrastructureError  (infrastructure.py)
        ├── SerializationError
        └── StorageError
"""

from mp_rbac.kernel.errors.application import (
    ApplicationError,
    ForbiddenError,
    UnauthorizedError,
)
from mp_rbac.kernel.errors.base import BaseError
from mp_rbac.kernel.errors.domain import (
    ConflictError,
    DomainError,
    DuplicateIdError,
    NotFoundError,
    ValidationError,
)
from mp_rbac.kernel.errors.infrastructure import (
    InfrastructureError,
    SerializationError,
    StorageError,
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

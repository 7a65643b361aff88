"""Application-layer errors — raised by authorization guards."""

from __future__ import annotations

from typing import Any

from mp_rbac.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """No active principal is set on the registry."""

    default_code = "unauthorized"


class ForbiddenError(ApplicationError):
    """The active principal lacks the required permission or role."""

    default_code = "forbidden"
    context_fields = ("permission", "role")

    def __init__(
        self,
        message: str = "Access denied",
        *,
        permission: str | None = None,
        role: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.permission = permission
        self.role = role


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "UnauthorizedError",
]

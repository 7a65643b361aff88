"""Kernel security — authorization guards over a :class:`Registry`.

Key pieces:
* :class:`PermissionGuard` / :class:`RoleGuard` — evaluate one requirement
  against the registry's active principal.
* :class:`GuardResult` — outcome with a human-readable reason.
* :func:`require_permission` / :func:`require_role` — decorators for command
  or query handlers.
"""

from __future__ import annotations

import abc
import dataclasses
import functools
import inspect
from typing import Any, Callable, TypeVar

from mp_rbac.kernel.errors import ForbiddenError, UnauthorizedError
from mp_rbac.kernel.security.principal import Principal
from mp_rbac.kernel.security.registry import Registry
from mp_rbac.observability.logging import AuditLogger, AuditOutcome

F = TypeVar("F", bound=Callable[..., Any])


@dataclasses.dataclass(frozen=True)
class GuardResult:
    """Result of a guard evaluation."""

    allowed: bool
    kind: str
    target: str
    principal: Principal | None = None

    @property
    def reason(self) -> str | None:
        if self.allowed:
            return None
        if self.principal is None:
            return "no active principal"
        return f"principal {self.principal.id!r} lacks {self.kind} {self.target!r}"

    def __bool__(self) -> bool:
        return self.allowed


class _Guard(abc.ABC):
    kind: str = ""

    def __init__(self, registry: Registry, target: str) -> None:
        self._registry = registry
        self._target = target

    @property
    def target(self) -> str:
        return self._target

    @abc.abstractmethod
    def _check(self) -> bool: ...

    def evaluate(self) -> GuardResult:
        principal = self._registry.active_principal
        allowed = principal is not None and self._check()
        return GuardResult(allowed=allowed, kind=self.kind, target=self._target, principal=principal)

    def enforce(self, audit: AuditLogger | None = None) -> GuardResult:
        """Evaluate and raise on failure.

        Raises :class:`UnauthorizedError` when no principal is active and
        :class:`ForbiddenError` when the requirement is not met.  Every
        decision, allowed or not, is recorded on *audit* when given.
        """
        result = self.evaluate()
        if result.allowed:
            if audit is not None:
                audit.log_decision(result.principal, self._target, self.kind, AuditOutcome.ALLOWED)
            return result
        if result.principal is None:
            if audit is not None:
                audit.log_decision(None, self._target, self.kind, AuditOutcome.UNAUTHENTICATED)
            raise UnauthorizedError("No active principal on the registry")
        if audit is not None:
            audit.log_decision(result.principal, self._target, self.kind, AuditOutcome.DENIED)
        raise ForbiddenError(
            result.reason or "forbidden",
            **{self.kind: self._target},
        )


class PermissionGuard(_Guard):
    """Checks that the active principal resolves a permission.

    Example::

        guard = PermissionGuard(registry, "orders:cancel")
        if not guard.evaluate():
            ...
    """

    kind = "permission"

    def _check(self) -> bool:
        return self._registry.has_permission(self._target)


class RoleGuard(_Guard):
    """Checks that the active principal references a role id."""

    kind = "role"

    def _check(self) -> bool:
        return self._registry.has_role(self._target)


def _guarded(guard: _Guard, audit: AuditLogger | None) -> Callable[[F], F]:
    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                guard.enforce(audit)
                return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            guard.enforce(audit)
            return fn(*args, **kwargs)

        return sync_wrapper  # type: ignore[return-value]

    return decorator


def require_permission(
    registry: Registry,
    permission_id: str,
    *,
    audit: AuditLogger | None = None,
) -> Callable[[F], F]:
    """Decorator that enforces *permission_id* on every call.

    The check runs at call time, so changes to the registry after decoration
    are honoured.  Works on both async and sync callables.

    Example::

        @require_permission(registry, "orders:cancel")
        async def cancel_order(cmd: CancelOrderCommand) -> None:
            ...
    """
    return _guarded(PermissionGuard(registry, permission_id), audit)


def require_role(
    registry: Registry,
    role_id: str,
    *,
    audit: AuditLogger | None = None,
) -> Callable[[F], F]:
    """Decorator that requires the active principal to reference *role_id*."""
    return _guarded(RoleGuard(registry, role_id), audit)


__all__ = [
    "GuardResult",
    "PermissionGuard",
    "RoleGuard",
    "require_permission",
    "require_role",
]

"""Unit tests for authorization guards and decorators."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from mp_rbac.kernel.errors import ForbiddenError, UnauthorizedError
from mp_rbac.kernel.security import (
    PermissionGuard,
    Principal,
    Registry,
    Role,
    RoleGuard,
    require_permission,
    require_role,
)
from mp_rbac.kernel.security.guard import _Guard
from mp_rbac.observability.logging import AuditLogger


class CaptureLogger:
    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []

    def warning(self, event: Any, **kwargs: Any) -> None:
        self.entries.append({"event": event, **kwargs})


@pytest.fixture
def registry() -> Registry:
    reg = Registry()
    reg.add_role(Role("editor", "Editor", permission_ids={"edit"}))
    return reg


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


class TestPermissionGuard:
    def test_allowed(self, registry: Registry) -> None:
        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        result = PermissionGuard(registry, "edit").evaluate()
        assert result.allowed is True
        assert bool(result) is True
        assert result.reason is None

    def test_denied_reason(self, registry: Registry) -> None:
        registry.set_active_principal(Principal("u", "U"))
        result = PermissionGuard(registry, "edit").evaluate()
        assert not result
        assert result.reason == "principal 'u' lacks permission 'edit'"

    def test_no_principal_reason(self, registry: Registry) -> None:
        result = PermissionGuard(registry, "edit").evaluate()
        assert result.principal is None
        assert result.reason == "no active principal"

    def test_enforce_raises_unauthorized(self, registry: Registry) -> None:
        with pytest.raises(UnauthorizedError):
            PermissionGuard(registry, "edit").enforce()

    def test_enforce_raises_forbidden_with_permission(self, registry: Registry) -> None:
        registry.set_active_principal(Principal("u", "U"))
        with pytest.raises(ForbiddenError) as exc_info:
            PermissionGuard(registry, "edit").enforce()
        assert exc_info.value.permission == "edit"

    def test_enforce_audits_denial(self, registry: Registry) -> None:
        capture = CaptureLogger()
        registry.set_active_principal(Principal("u", "U"))
        with pytest.raises(ForbiddenError):
            PermissionGuard(registry, "edit").enforce(AuditLogger(service="svc", logger=capture))
        entry = capture.entries[0]
        assert entry["event"] == "audit.authorization"
        assert entry["principal_id"] == "u"
        assert entry["target"] == "edit"
        assert entry["outcome"] == "denied"

    def test_enforce_audits_missing_principal(self, registry: Registry) -> None:
        capture = CaptureLogger()
        with pytest.raises(UnauthorizedError):
            PermissionGuard(registry, "edit").enforce(AuditLogger(logger=capture))
        assert capture.entries[0]["outcome"] == "unauthenticated"
        assert capture.entries[0]["principal_id"] is None

    def test_enforce_audits_allowed(self, registry: Registry) -> None:
        capture = CaptureLogger()
        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        result = PermissionGuard(registry, "edit").enforce(AuditLogger(logger=capture))
        assert result.allowed is True
        assert [e["outcome"] for e in capture.entries] == ["allowed"]
        assert capture.entries[0]["principal_id"] == "u"

    def test_decorator_audits_each_call(self, registry: Registry) -> None:
        capture = CaptureLogger()

        @require_permission(registry, "edit", audit=AuditLogger(logger=capture))
        def handler() -> str:
            return "ok"

        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        handler()
        registry.set_active_principal(Principal("v", "V"))
        with pytest.raises(ForbiddenError):
            handler()
        assert [e["outcome"] for e in capture.entries] == ["allowed", "denied"]


class TestGuardBase:
    def test_base_guard_is_abstract(self, registry: Registry) -> None:
        with pytest.raises(TypeError):
            _Guard(registry, "edit")  # type: ignore[abstract]


class TestRoleGuard:
    def test_role_reference_is_enough(self, registry: Registry) -> None:
        registry.set_active_principal(Principal("u", "U", role_ids={"unregistered"}))
        assert RoleGuard(registry, "unregistered").evaluate().allowed is True

    def test_forbidden_carries_role(self, registry: Registry) -> None:
        registry.set_active_principal(Principal("u", "U"))
        with pytest.raises(ForbiddenError) as exc_info:
            RoleGuard(registry, "admin").enforce()
        assert exc_info.value.role == "admin"
        assert exc_info.value.permission is None


# ---------------------------------------------------------------------------
# Decorators
# ---------------------------------------------------------------------------


class TestRequirePermission:
    def test_sync_allowed(self, registry: Registry) -> None:
        @require_permission(registry, "edit")
        def handler(x: int) -> int:
            return x * 2

        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        assert handler(21) == 42

    def test_sync_forbidden(self, registry: Registry) -> None:
        calls: list[int] = []

        @require_permission(registry, "edit")
        def handler() -> None:
            calls.append(1)

        registry.set_active_principal(Principal("u", "U"))
        with pytest.raises(ForbiddenError):
            handler()
        assert calls == []

    def test_checked_at_call_time(self, registry: Registry) -> None:
        @require_permission(registry, "edit")
        def handler() -> str:
            return "ok"

        with pytest.raises(UnauthorizedError):
            handler()
        registry.set_active_principal(Principal("u", "U", direct_permission_ids={"edit"}))
        assert handler() == "ok"

    def test_async_allowed(self, registry: Registry) -> None:
        @require_permission(registry, "edit")
        async def handler() -> str:
            return "done"

        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        assert asyncio.run(handler()) == "done"

    def test_async_forbidden(self, registry: Registry) -> None:
        @require_permission(registry, "edit")
        async def handler() -> str:
            return "done"

        registry.set_active_principal(Principal("u", "U"))
        with pytest.raises(ForbiddenError):
            asyncio.run(handler())

    def test_preserves_metadata(self, registry: Registry) -> None:
        @require_permission(registry, "edit")
        def my_handler() -> None:
            """Docstring."""

        assert my_handler.__name__ == "my_handler"
        assert my_handler.__doc__ == "Docstring."


class TestRequireRole:
    def test_allowed_and_denied(self, registry: Registry) -> None:
        @require_role(registry, "editor")
        def handler() -> str:
            return "ok"

        registry.set_active_principal(Principal("u", "U", role_ids={"editor"}))
        assert handler() == "ok"
        registry.set_active_principal(Principal("v", "V"))
        with pytest.raises(ForbiddenError):
            handler()

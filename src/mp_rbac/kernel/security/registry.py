"""Kernel security – Registry: the permission/role graph and its resolution.

The registry owns every :class:`Permission` and :class:`Role` by id and holds
a reference to at most one active :class:`Principal`.  Authorization queries
resolve against that principal:

1. a permission granted directly to the principal, or
2. a permission carried by any role the principal references that is
   currently registered.  Role ids the registry does not know contribute
   nothing.

Removing a permission retracts it from every registered role.  Direct grants
on the principal are left untouched; hosts that want them retracted as well
must revoke them explicitly.

The registry does no locking.  Multi-threaded hosts should guard the whole
instance with one lock, since cascading removals touch several roles.

Example::

    registry = Registry()
    registry.add_permission(Permission("view", "View"))
    registry.add_role(Role("viewer", "Viewer", permission_ids={"view"}))
    registry.set_active_principal(Principal("u1", "Ada", role_ids={"viewer"}))
    assert registry.has_permission("view")
"""
from __future__ import annotations

from typing import Callable, Iterable

from mp_rbac.kernel.errors import DuplicateIdError, NotFoundError, SerializationError
from mp_rbac.kernel.security.codec import decode_registry, encode_registry
from mp_rbac.kernel.security.permission import Permission
from mp_rbac.kernel.security.principal import Principal
from mp_rbac.kernel.security.role import Role
from mp_rbac.observability.logging import get_logger

_log = get_logger(__name__)

RegistryListener = Callable[[str, "Registry"], None]


class Registry:
    """In-process RBAC registry.

    Construct one per application and pass it to every consumer.
    """

    def __init__(self) -> None:
        self._permissions: dict[str, Permission] = {}
        self._roles: dict[str, Role] = {}
        self._active_principal: Principal | None = None
        self._listeners: list[RegistryListener] = []

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: RegistryListener) -> None:
        """Call ``listener(event, registry)`` after every successful mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RegistryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def add_permission(self, permission: Permission) -> Permission:
        """Register *permission*.

        Raises :class:`DuplicateIdError` if the id is already registered; the
        existing permission is left unchanged.
        """
        if permission.id in self._permissions:
            raise DuplicateIdError("Permission", permission.id)
        self._permissions[permission.id] = permission
        _log.debug("rbac.permission_added", permission_id=permission.id)
        self._notify("permission_added")
        return permission

    def get_permission(self, permission_id: str) -> Permission | None:
        return self._permissions.get(permission_id)

    def remove_permission(self, permission_id: str) -> bool:
        """Remove a permission and retract it from every registered role."""
        if self._permissions.pop(permission_id, None) is None:
            return False
        retracted = [role.id for role in self._roles.values() if role.remove_permission(permission_id)]
        _log.debug(
            "rbac.permission_removed",
            permission_id=permission_id,
            retracted_from=retracted,
        )
        self._notify("permission_removed")
        return True

    def list_permissions(self) -> list[Permission]:
        return list(self._permissions.values())

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def add_role(self, role: Role) -> Role:
        """Register *role*; raises :class:`DuplicateIdError` on an existing id."""
        if role.id in self._roles:
            raise DuplicateIdError("Role", role.id)
        self._roles[role.id] = role
        _log.debug("rbac.role_added", role_id=role.id)
        self._notify("role_added")
        return role

    def get_role(self, role_id: str) -> Role | None:
        return self._roles.get(role_id)

    def update_role(self, role: Role) -> Role:
        """Replace the stored role with the same id wholesale.

        Raises :class:`NotFoundError` if no role with that id is registered.
        """
        if role.id not in self._roles:
            raise NotFoundError("Role", role.id)
        self._roles[role.id] = role
        _log.debug("rbac.role_updated", role_id=role.id)
        self._notify("role_updated")
        return role

    def remove_role(self, role_id: str) -> bool:
        """Delete a role.  Principals still referencing it are not touched."""
        if self._roles.pop(role_id, None) is None:
            return False
        _log.debug("rbac.role_removed", role_id=role_id)
        self._notify("role_removed")
        return True

    def list_roles(self) -> list[Role]:
        return list(self._roles.values())

    # ------------------------------------------------------------------
    # Active principal
    # ------------------------------------------------------------------

    @property
    def active_principal(self) -> Principal | None:
        return self._active_principal

    def set_active_principal(self, principal: Principal) -> None:
        self._active_principal = principal
        _log.debug("rbac.principal_set", principal_id=principal.id)
        self._notify("principal_set")

    def get_active_principal(self) -> Principal | None:
        return self._active_principal

    def clear_active_principal(self) -> None:
        self._active_principal = None
        _log.debug("rbac.principal_cleared")
        self._notify("principal_cleared")

    # ------------------------------------------------------------------
    # Authorization queries
    # ------------------------------------------------------------------

    def has_permission(self, permission_id: str) -> bool:
        principal = self._active_principal
        if principal is None:
            return False
        if principal.has_direct_permission(permission_id):
            return True
        for role_id in principal.role_ids:
            role = self._roles.get(role_id)
            if role is not None and role.has_permission(permission_id):
                return True
        return False

    def has_all_permissions(self, permission_ids: Iterable[str]) -> bool:
        """True when every id resolves; an empty collection is vacuously true."""
        return all(self.has_permission(p) for p in permission_ids)

    def has_any_permission(self, permission_ids: Iterable[str]) -> bool:
        return any(self.has_permission(p) for p in permission_ids)

    def has_role(self, role_id: str) -> bool:
        """Whether the active principal references *role_id*.

        Registry membership of the role is not checked.
        """
        principal = self._active_principal
        return principal is not None and principal.has_role(role_id)

    def has_all_roles(self, role_ids: Iterable[str]) -> bool:
        return all(self.has_role(r) for r in role_ids)

    def has_any_role(self, role_ids: Iterable[str]) -> bool:
        return any(self.has_role(r) for r in role_ids)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        """Encode permissions and roles as JSON text.  The principal is excluded."""
        return encode_registry(self._permissions.values(), self._roles.values())

    def deserialize_into(self, text: str) -> bool:
        """Replace permissions and roles with the content of *text*.

        The whole document is decoded and validated first.  On any error the
        registry is left exactly as it was and ``False`` is returned.
        """
        try:
            permissions, roles = decode_registry(text)
        except SerializationError as exc:
            _log.warning("rbac.import_rejected", error=exc.message)
            return False
        self._permissions = permissions
        self._roles = roles
        _log.debug(
            "rbac.registry_imported",
            permissions=len(permissions),
            roles=len(roles),
        )
        self._notify("registry_imported")
        return True

    def __repr__(self) -> str:
        principal = self._active_principal.id if self._active_principal else None
        return (
            f"Registry(permissions={len(self._permissions)}, "
            f"roles={len(self._roles)}, active_principal={principal!r})"
        )


__all__ = ["Registry", "RegistryListener"]

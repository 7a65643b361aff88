"""Kernel security – Principal (the acting user)."""
from __future__ import annotations

from typing import Any, Iterable

from mp_rbac.kernel.security._payload import require_mapping, require_str, str_list


class Principal:
    """Authenticated identity holding role assignments and direct grants.

    Identity is assumed already established; the registry only evaluates
    what this principal may do.
    """

    __slots__ = ("_id", "_name", "_role_ids", "_direct_permission_ids")

    def __init__(
        self,
        id: str,  # noqa: A002
        name: str,
        role_ids: Iterable[str] = (),
        direct_permission_ids: Iterable[str] = (),
    ) -> None:
        self._id = id
        self._name = name
        self._role_ids: set[str] = set(role_ids)
        self._direct_permission_ids: set[str] = set(direct_permission_ids)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def role_ids(self) -> frozenset[str]:
        return frozenset(self._role_ids)

    @property
    def direct_permission_ids(self) -> frozenset[str]:
        return frozenset(self._direct_permission_ids)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def assign_role(self, role_id: str) -> bool:
        if role_id in self._role_ids:
            return False
        self._role_ids.add(role_id)
        return True

    def revoke_role(self, role_id: str) -> bool:
        if role_id not in self._role_ids:
            return False
        self._role_ids.discard(role_id)
        return True

    def has_role(self, role_id: str) -> bool:
        return role_id in self._role_ids

    def clear_roles(self) -> None:
        self._role_ids.clear()

    # ------------------------------------------------------------------
    # Direct permissions
    # ------------------------------------------------------------------

    def grant_direct_permission(self, permission_id: str) -> bool:
        if permission_id in self._direct_permission_ids:
            return False
        self._direct_permission_ids.add(permission_id)
        return True

    def revoke_direct_permission(self, permission_id: str) -> bool:
        if permission_id not in self._direct_permission_ids:
            return False
        self._direct_permission_ids.discard(permission_id)
        return True

    def has_direct_permission(self, permission_id: str) -> bool:
        return permission_id in self._direct_permission_ids

    def clear_direct_permissions(self) -> None:
        self._direct_permission_ids.clear()

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "name": self._name,
            "roleIds": sorted(self._role_ids),
            "directPermissionIds": sorted(self._direct_permission_ids),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Principal":
        payload = require_mapping(data, "principal")
        return cls(
            id=require_str(payload, "id", "principal"),
            name=require_str(payload, "name", "principal"),
            role_ids=str_list(payload, "roleIds", "principal"),
            direct_permission_ids=str_list(payload, "directPermissionIds", "principal"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Principal):
            return NotImplemented
        return other._id == self._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Principal(id={self._id!r}, name={self._name!r})"


__all__ = ["Principal"]

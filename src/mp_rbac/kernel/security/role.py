"""Kernel security – Role."""
from __future__ import annotations

from typing import Any, Iterable

from mp_rbac.kernel.security._payload import (
    optional_str,
    require_mapping,
    require_str,
    str_list,
)


class Role:
    """Named bundle of permission ids, assignable to principals.

    The role does not check that its permission ids exist; keeping them in
    line with the registered permissions is the job of
    :class:`~mp_rbac.kernel.security.registry.Registry`.

    Example::

        editor = Role(
            id="editor",
            name="Editor",
            permission_ids={"view_posts", "edit_posts"},
        )
        editor.add_permission("create_posts")
    """

    __slots__ = ("_id", "_name", "_description", "_permission_ids")

    def __init__(
        self,
        id: str,  # noqa: A002
        name: str,
        description: str | None = None,
        permission_ids: Iterable[str] = (),
    ) -> None:
        self._id = id
        self._name = name
        self._description = description
        self._permission_ids: set[str] = set(permission_ids)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def permission_ids(self) -> frozenset[str]:
        """Snapshot of the granted permission ids."""
        return frozenset(self._permission_ids)

    def add_permission(self, permission_id: str) -> bool:
        """Grant *permission_id*; return ``False`` if it was already granted."""
        if permission_id in self._permission_ids:
            return False
        self._permission_ids.add(permission_id)
        return True

    def remove_permission(self, permission_id: str) -> bool:
        """Retract *permission_id*; return ``False`` if it was not granted."""
        if permission_id not in self._permission_ids:
            return False
        self._permission_ids.discard(permission_id)
        return True

    def has_permission(self, permission_id: str) -> bool:
        return permission_id in self._permission_ids

    def clear_permissions(self) -> None:
        self._permission_ids.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "permissionIds": sorted(self._permission_ids),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Role":
        payload = require_mapping(data, "role")
        return cls(
            id=require_str(payload, "id", "role"),
            name=require_str(payload, "name", "role"),
            description=optional_str(payload, "description", "role"),
            permission_ids=str_list(payload, "permissionIds", "role"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return other._id == self._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Role(id={self._id!r}, name={self._name!r})"


__all__ = ["Role"]

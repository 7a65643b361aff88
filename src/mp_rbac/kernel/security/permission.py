"""Kernel security – Permission."""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_rbac.kernel.security._payload import optional_str, require_mapping, require_str


@dataclasses.dataclass(frozen=True)
class Permission:
    """Atomic capability identified by a unique ``id`` (e.g. ``'edit_posts'``).

    Equality and hashing use ``id`` only: two permissions with the same id and
    different names are the same entity.
    """

    id: str
    name: str = dataclasses.field(compare=False)
    description: str | None = dataclasses.field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description}

    @classmethod
    def from_dict(cls, data: Any) -> "Permission":
        """Build a permission from its serialised form.

        Raises :class:`~mp_rbac.kernel.errors.SerializationError` when a member
        is missing or has the wrong type.
        """
        payload = require_mapping(data, "permission")
        return cls(
            id=require_str(payload, "id", "permission"),
            name=require_str(payload, "name", "permission"),
            description=optional_str(payload, "description", "permission"),
        )

    def __str__(self) -> str:
        return self.id


__all__ = ["Permission"]

"""Kernel security – JSON text codec for registry and principal state.

Registry document::

    {
      "permissions": {"<id>": {"id": ..., "name": ..., "description": ...}},
      "roles": {"<id>": {"id": ..., "name": ..., "description": ...,
                         "permissionIds": [...]}}
    }

Principal document::

    {"id": ..., "name": ..., "roleIds": [...], "directPermissionIds": [...]}

Decoding validates the whole document before returning anything, so callers
can apply the result atomically.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from mp_rbac.kernel.errors import SerializationError
from mp_rbac.kernel.security._payload import require_mapping
from mp_rbac.kernel.security.permission import Permission
from mp_rbac.kernel.security.principal import Principal
from mp_rbac.kernel.security.role import Role


def _loads(text: str, payload_type: str) -> Any:
    if not isinstance(text, (str, bytes, bytearray)):
        raise SerializationError(
            f"{payload_type} document must be text, got {type(text).__name__}",
            payload_type=payload_type,
        )
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise SerializationError(
            f"{payload_type} document is not valid JSON",
            payload_type=payload_type,
            cause=exc,
        ) from exc


def _section(document: Any, member: str) -> dict[str, Any]:
    # An absent (or null) section decodes as empty.
    value = document.get(member)
    if value is None:
        return {}
    return dict(require_mapping(value, member))


def encode_registry(permissions: Iterable[Permission], roles: Iterable[Role]) -> str:
    """Encode permissions and roles, keyed by id, in iteration order."""
    document = {
        "permissions": {p.id: p.to_dict() for p in permissions},
        "roles": {r.id: r.to_dict() for r in roles},
    }
    return json.dumps(document, ensure_ascii=False)


def decode_registry(text: str) -> tuple[dict[str, Permission], dict[str, Role]]:
    """Decode a registry document into ``(permissions, roles)`` mappings.

    Raises :class:`SerializationError` on malformed JSON, wrong member types,
    or a mapping key that differs from the ``id`` of its entry.
    """
    document = require_mapping(_loads(text, "registry"), "registry")

    permissions: dict[str, Permission] = {}
    for key, raw in _section(document, "permissions").items():
        permission = Permission.from_dict(raw)
        if permission.id != key:
            raise SerializationError(
                f"permission key '{key}' does not match id '{permission.id}'",
                payload_type="permission",
            )
        permissions[key] = permission

    roles: dict[str, Role] = {}
    for key, raw in _section(document, "roles").items():
        role = Role.from_dict(raw)
        if role.id != key:
            raise SerializationError(
                f"role key '{key}' does not match id '{role.id}'",
                payload_type="role",
            )
        roles[key] = role

    return permissions, roles


def encode_principal(principal: Principal) -> str:
    return json.dumps(principal.to_dict(), ensure_ascii=False)


def decode_principal(text: str) -> Principal:
    return Principal.from_dict(_loads(text, "principal"))


__all__ = [
    "decode_principal",
    "decode_registry",
    "encode_principal",
    "encode_registry",
]

"""Kernel security – Permission, Role, Principal, Registry, guards."""
from mp_rbac.kernel.security.permission import Permission
from mp_rbac.kernel.security.role import Role
from mp_rbac.kernel.security.principal import Principal
from mp_rbac.kernel.security.codec import (
    decode_principal,
    decode_registry,
    encode_principal,
    encode_registry,
)
from mp_rbac.kernel.security.registry import Registry, RegistryListener
from mp_rbac.kernel.security.guard import (
    GuardResult,
    PermissionGuard,
    RoleGuard,
    require_permission,
    require_role,
)

__all__ = [
    "GuardResult",
    "Permission",
    "PermissionGuard",
    "Principal",
    "Registry",
    "RegistryListener",
    "Role",
    "RoleGuard",
    "decode_principal",
    "decode_registry",
    "encode_principal",
    "encode_registry",
    "require_permission",
    "require_role",
]

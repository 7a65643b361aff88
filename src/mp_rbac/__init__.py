"""
mp_rbac – in-process role-based access control.

Import path convention::

    from mp_rbac.kernel.security import Permission, Principal, Registry, Role
    from mp_rbac.kernel.errors import DuplicateIdError
    from mp_rbac.application.persistence import RegistryPersistence
    from mp_rbac.adapters.redis import RedisRegistryStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

"""Persistence – stores and registry load/save/auto-save."""
from mp_rbac.application.persistence.store import FileRegistryStore, RegistryStore
from mp_rbac.application.persistence.persistence import RegistryPersistence
from mp_rbac.application.persistence.factory import (
    build_store,
    configure_logging,
    create_registry,
)

__all__ = [
    "FileRegistryStore",
    "RegistryPersistence",
    "RegistryStore",
    "build_store",
    "configure_logging",
    "create_registry",
]

"""Persistence – host wiring from :class:`RegistrySettings`."""
from __future__ import annotations

from mp_rbac.application.persistence.persistence import RegistryPersistence
from mp_rbac.application.persistence.store import FileRegistryStore, RegistryStore
from mp_rbac.config.settings import RegistrySettings
from mp_rbac.kernel.security import Registry
from mp_rbac.observability.logging import JsonLoggerFactory, get_logger

_log = get_logger(__name__)


def configure_logging(settings: RegistrySettings) -> None:
    """Apply ``settings.log_level`` and ``settings.json_logs`` to the root logger."""
    JsonLoggerFactory.configure(settings.log_level, json=settings.json_logs)


def build_store(settings: RegistrySettings) -> RegistryStore | None:
    """Return the store selected by ``settings.backend`` (``None`` for memory)."""
    if settings.backend == "file":
        return FileRegistryStore(settings.storage_dir)
    if settings.backend == "redis":
        from mp_rbac.adapters.redis import RedisRegistryStore

        return RedisRegistryStore(settings.redis_url)
    return None


def create_registry(
    settings: RegistrySettings,
    *,
    strict: bool = True,
    setup_logging: bool = True,
) -> tuple[Registry, RegistryPersistence | None]:
    """Build a registry, restore it from storage and wire auto-save.

    With ``strict=True`` a failed restore is raised to the caller; otherwise it
    is logged and the registry starts empty.  The ``memory`` backend returns
    no persistence at all.  Logging is configured from *settings* first unless
    ``setup_logging=False`` (for hosts that own their logging setup).
    """
    if setup_logging:
        configure_logging(settings)
    registry = Registry()
    store = build_store(settings)
    if store is None:
        return registry, None

    persistence = RegistryPersistence(
        store,
        key=settings.storage_key,
        persist_principal=settings.persist_principal,
    )
    result = persistence.load(registry)
    if result.is_err():
        if strict:
            result.unwrap()
        _log.warning(
            "rbac.restore_failed",
            backend=store.backend,
            key=settings.storage_key,
            error=result.error.message,
        )
    if settings.autosave:
        persistence.attach(registry)
    return registry, persistence


__all__ = ["build_store", "configure_logging", "create_registry"]

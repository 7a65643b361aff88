"""Persistence – RegistryPersistence.

Moves a :class:`~mp_rbac.kernel.security.Registry` in and out of a
:class:`~mp_rbac.application.persistence.store.RegistryStore` using only the
registry's ``serialize()`` / ``deserialize_into()`` contract, plus the
principal codec for the active principal.

Two keys are used per registry:

* ``<key>`` — the registry document (permissions and roles);
* ``<key>.principal`` — the active principal, deleted when none is set.
"""
from __future__ import annotations

from mp_rbac.application.persistence.store import RegistryStore
from mp_rbac.kernel.errors import SerializationError, StorageError
from mp_rbac.kernel.security import Registry, decode_principal, encode_principal
from mp_rbac.kernel.types import Err, Ok, Result
from mp_rbac.observability.logging import get_logger

_log = get_logger(__name__)


class RegistryPersistence:
    """Load, save and auto-save a registry through a :class:`RegistryStore`.

    Example::

        persistence = RegistryPersistence(FileRegistryStore(".rbac"))
        registry = Registry()
        persistence.load(registry).unwrap()
        persistence.attach(registry)      # save after every mutation

    Mutating the active :class:`~mp_rbac.kernel.security.Principal` in place
    (``assign_role`` and friends) does not notify the registry; call
    :meth:`save` afterwards or set the principal again.
    """

    def __init__(
        self,
        store: RegistryStore,
        *,
        key: str = "rbac",
        persist_principal: bool = True,
    ) -> None:
        self._store = store
        self._key = key
        self._persist_principal = persist_principal
        self._suspended = False
        self._last_error: StorageError | None = None

    @property
    def store(self) -> RegistryStore:
        return self._store

    @property
    def key(self) -> str:
        return self._key

    @property
    def principal_key(self) -> str:
        return f"{self._key}.principal"

    @property
    def last_error(self) -> StorageError | None:
        """Most recent auto-save failure, ``None`` after a successful save."""
        return self._last_error

    # ------------------------------------------------------------------
    # Explicit operations
    # ------------------------------------------------------------------

    def save(self, registry: Registry) -> Result[None, StorageError]:
        result = self._store.write(self._key, registry.serialize())
        if result.is_err():
            return result
        if self._persist_principal:
            principal = registry.active_principal
            if principal is None:
                result = self._store.delete(self.principal_key)
            else:
                result = self._store.write(self.principal_key, encode_principal(principal))
        return result

    def load(self, registry: Registry) -> Result[bool, StorageError | SerializationError]:
        """Restore *registry* from the store.

        Returns ``Ok(False)`` when nothing is stored, ``Ok(True)`` after a
        restore, and ``Err`` when the store fails or holds a document the
        registry rejects.  A rejected document leaves the registry unchanged.
        """
        read = self._store.read(self._key)
        if read.is_err():
            return read
        text = read.unwrap()

        principal_text: str | None = None
        if self._persist_principal:
            principal_read = self._store.read(self.principal_key)
            if principal_read.is_err():
                return principal_read
            principal_text = principal_read.unwrap()

        if text is None and principal_text is None:
            return Ok(False)

        principal = None
        if principal_text is not None:
            try:
                principal = decode_principal(principal_text)
            except SerializationError as exc:
                return Err(exc)

        self._suspended = True
        try:
            if text is not None and not registry.deserialize_into(text):
                return Err(
                    SerializationError(
                        f"stored registry document '{self._key}' was rejected",
                        payload_type="registry",
                    )
                )
            if principal is not None:
                registry.set_active_principal(principal)
        finally:
            self._suspended = False

        _log.info(
            "rbac.registry_loaded",
            key=self._key,
            backend=self._store.backend,
            permissions=len(registry.list_permissions()),
            roles=len(registry.list_roles()),
            principal_id=principal.id if principal is not None else None,
        )
        return Ok(True)

    def clear(self) -> Result[None, StorageError]:
        """Delete everything this persistence wrote to the store."""
        result = self._store.delete(self._key)
        if result.is_err():
            return result
        return self._store.delete(self.principal_key)

    # ------------------------------------------------------------------
    # Auto-save
    # ------------------------------------------------------------------

    def attach(self, registry: Registry) -> None:
        """Save *registry* after every mutation it reports."""
        registry.subscribe(self._on_change)

    def detach(self, registry: Registry) -> None:
        registry.unsubscribe(self._on_change)

    def _on_change(self, event: str, registry: Registry) -> None:
        if self._suspended:
            return
        result = self.save(registry)
        if result.is_err():
            self._last_error = result.error
            _log.error(
                "rbac.autosave_failed",
                trigger=event,
                key=self._key,
                backend=self._store.backend,
                error=result.error.message,
            )
        else:
            self._last_error = None


__all__ = ["RegistryPersistence"]

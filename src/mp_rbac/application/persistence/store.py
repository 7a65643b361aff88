"""Persistence – RegistryStore port and the file-system store.

Stores move opaque text between the registry and a storage medium.  Every
operation returns a :class:`~mp_rbac.kernel.types.Result`; invalid keys and I/O
failures come back as ``Err(StorageError)`` instead of being raised.
"""
from __future__ import annotations

import abc
import os
import tempfile
from pathlib import Path

from mp_rbac.kernel.errors import StorageError, ValidationError
from mp_rbac.kernel.types import Err, Ok, Result, StorageKey


class RegistryStore(abc.ABC):
    """Port: key/text storage used by
    :class:`~mp_rbac.application.persistence.RegistryPersistence`.

    Concrete implementations: :class:`FileRegistryStore`,
    :class:`~mp_rbac.adapters.redis.RedisRegistryStore` and
    :class:`~mp_rbac.testing.fakes.InMemoryRegistryStore`.
    """

    backend: str = "abstract"

    @abc.abstractmethod
    def read(self, key: str) -> Result[str | None, StorageError]:
        """Return the stored text, ``Ok(None)`` when *key* is absent."""

    @abc.abstractmethod
    def write(self, key: str, text: str) -> Result[None, StorageError]: ...

    @abc.abstractmethod
    def delete(self, key: str) -> Result[None, StorageError]:
        """Remove *key*; deleting an absent key succeeds."""


class FileRegistryStore(RegistryStore):
    """Stores each key as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory and are moved into
    place with :func:`os.replace`, so readers never observe a partial file.
    """

    backend = "file"

    def __init__(self, directory: str | os.PathLike[str], *, encoding: str = "utf-8") -> None:
        self._directory = Path(directory)
        self._encoding = encoding

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Raises :class:`ValidationError` when *key* is not a valid :class:`StorageKey`."""
        return self._directory / f"{StorageKey(key)}.json"

    def _error(self, action: str, key: str, exc: Exception) -> Err[StorageError]:
        return Err(
            StorageError(
                f"could not {action} '{key}' in {self._directory}",
                backend=self.backend,
                key=key,
                cause=exc,
            )
        )

    def read(self, key: str) -> Result[str | None, StorageError]:
        try:
            path = self.path_for(key)
        except ValidationError as exc:
            return self._error("read", key, exc)
        try:
            return Ok(path.read_text(encoding=self._encoding))
        except FileNotFoundError:
            return Ok(None)
        except OSError as exc:
            return self._error("read", key, exc)

    def write(self, key: str, text: str) -> Result[None, StorageError]:
        try:
            path = self.path_for(key)
        except ValidationError as exc:
            return self._error("write", key, exc)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding=self._encoding) as fh:
                    fh.write(text)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            return self._error("write", key, exc)
        return Ok(None)

    def delete(self, key: str) -> Result[None, StorageError]:
        try:
            path = self.path_for(key)
        except ValidationError as exc:
            return self._error("delete", key, exc)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            return self._error("delete", key, exc)
        return Ok(None)


__all__ = ["FileRegistryStore", "RegistryStore"]

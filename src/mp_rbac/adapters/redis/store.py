"""Redis adapter – RedisRegistryStore."""
from __future__ import annotations

from typing import Any

from mp_rbac.application.persistence.store import RegistryStore
from mp_rbac.kernel.errors import StorageError
from mp_rbac.kernel.types import Err, Ok, Result


def _require_redis() -> Any:
    try:
        import redis
        return redis
    except ImportError as exc:
        raise ImportError("Install 'mp-rbac[redis]' to use the Redis adapter") from exc


class RedisRegistryStore(RegistryStore):
    """:class:`RegistryStore` backed by plain Redis string keys.

    Keys are stored as ``<namespace>:<key>``.  Redis errors are returned as
    ``Err(StorageError)``.
    """

    backend = "redis"

    def __init__(self, url: str, *, namespace: str = "mp_rbac", **kwargs: Any) -> None:
        redis = _require_redis()
        self._client = redis.Redis.from_url(url, decode_responses=True, **kwargs)
        self._namespace = namespace
        self._errors: tuple[type[BaseException], ...] = (redis.RedisError,)

    def _k(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _error(self, action: str, key: str, exc: BaseException) -> Err[StorageError]:
        return Err(
            StorageError(
                f"could not {action} '{self._k(key)}' in Redis",
                backend=self.backend,
                key=key,
                cause=exc,
            )
        )

    def read(self, key: str) -> Result[str | None, StorageError]:
        try:
            value = self._client.get(self._k(key))
        except self._errors as exc:
            return self._error("read", key, exc)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return Ok(value)

    def write(self, key: str, text: str) -> Result[None, StorageError]:
        try:
            self._client.set(self._k(key), text)
        except self._errors as exc:
            return self._error("write", key, exc)
        return Ok(None)

    def delete(self, key: str) -> Result[None, StorageError]:
        try:
            self._client.delete(self._k(key))
        except self._errors as exc:
            return self._error("delete", key, exc)
        return Ok(None)

    def close(self) -> None:
        self._client.close()


__all__ = ["RedisRegistryStore"]

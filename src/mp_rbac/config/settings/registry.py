"""Config settings – RegistrySettings."""
import dataclasses
from typing import ClassVar

from mp_rbac.config.settings.base import Settings
from mp_rbac.config.validation import InvalidSettingValueError
from mp_rbac.kernel.types import StorageKey

BACKENDS = ("memory", "file", "redis")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass
class RegistrySettings(Settings):
    """Host wiring for a registry and its persistence collaborator.

    Read from ``RBAC_*`` environment variables by
    :class:`~mp_rbac.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "RBAC"

    backend: str = "memory"
    storage_dir: str = ".rbac"
    redis_url: str = "redis://localhost:6379/0"
    storage_key: str = "rbac"
    autosave: bool = True
    persist_principal: bool = True
    log_level: str = "INFO"
    json_logs: bool = False

    def _validate(self) -> None:
        self.backend = self.backend.lower()
        if self.backend not in BACKENDS:
            raise InvalidSettingValueError(
                "backend", self.backend, f"expected one of {', '.join(BACKENDS)}"
            )
        if not StorageKey.is_valid(self.storage_key):
            raise InvalidSettingValueError(
                "storage_key",
                self.storage_key,
                "use letters, digits, '_', '.', ':' or '-' and do not start with '.'",
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {', '.join(LOG_LEVELS)}"
            )


__all__ = ["BACKENDS", "RegistrySettings"]

"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, TypeVar

from dotenv import load_dotenv

from mp_rbac.config.settings.base import Settings
from mp_rbac.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Field ``storage_dir`` of a class with ``_prefix = "RBAC"`` is read from
    ``RBAC_STORAGE_DIR``.
    """

    def load(self, settings_class: type[T]) -> T:
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = os.environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(field.name, env_var=env_key)
                continue

            kwargs[field.name] = self._coerce(field.name, env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError as exc:
            if exc.setting_name and exc.env_var is None:
                exc.env_var = f"{prefix}_{exc.setting_name}".upper().lstrip("_")
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, name: str, env_key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            lowered = value.strip().lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
            raise InvalidSettingValueError(name, value, "expected a boolean", env_var=env_key)
        if type_hint is int or type_hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(
                    name, value, "expected an integer", env_var=env_key
                ) from exc
        return value


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file then fall back to ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]

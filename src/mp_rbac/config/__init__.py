"""Config – settings loading and validation."""
from mp_rbac.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    RegistrySettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from mp_rbac.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RegistrySettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]

"""Config settings – 12-factor env-based configuration."""
from mp_rbac.config.settings.base import Settings
from mp_rbac.config.settings.factory import SettingsFactory
from mp_rbac.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_rbac.config.settings.registry import RegistrySettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "RegistrySettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]

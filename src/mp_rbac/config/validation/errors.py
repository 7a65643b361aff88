"""Config validation errors.

Each error names the settings field it concerns and, when the value came from
the environment, the variable it was read from, so ``to_dict()`` tells an
operator exactly which ``RBAC_*`` entry to fix.
"""
from __future__ import annotations

from typing import Any

from mp_rbac.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or constructed."""

    default_code = "config_error"
    context_fields = ("setting_name", "env_var")

    def __init__(
        self,
        message: str,
        *,
        setting_name: str | None = None,
        env_var: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.setting_name = setting_name
        self.env_var = env_var


class MissingRequiredSettingError(ConfigError):
    """A field without a default received no value from any source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        where = f" (set {env_var})" if env_var else ""
        super().__init__(
            f"Required setting '{setting_name}' is missing{where}",
            setting_name=setting_name,
            env_var=env_var,
        )


class InvalidSettingValueError(ConfigError):
    """A setting is present but its value is rejected."""

    default_code = "invalid_setting_value"
    context_fields = ("setting_name", "env_var", "reason")

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        env_var: str | None = None,
    ) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            setting_name=setting_name,
            env_var=env_var,
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]

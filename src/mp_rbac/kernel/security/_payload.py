"""Shape checks shared by the ``from_dict`` constructors."""
from __future__ import annotations

from typing import Any, Mapping

from mp_rbac.kernel.errors import SerializationError


def require_mapping(data: Any, payload_type: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SerializationError(
            f"{payload_type} payload must be an object, got {type(data).__name__}",
            payload_type=payload_type,
        )
    return data


def require_str(data: Mapping[str, Any], key: str, payload_type: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise SerializationError(
            f"{payload_type}.{key} must be a string",
            payload_type=payload_type,
        )
    return value


def optional_str(data: Mapping[str, Any], key: str, payload_type: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SerializationError(
            f"{payload_type}.{key} must be a string or null",
            payload_type=payload_type,
        )
    return value


def str_list(data: Mapping[str, Any], key: str, payload_type: str) -> list[str]:
    """Return ``data[key]`` as a list of strings; an absent member is empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SerializationError(
            f"{payload_type}.{key} must be a list of strings",
            payload_type=payload_type,
        )
    return value

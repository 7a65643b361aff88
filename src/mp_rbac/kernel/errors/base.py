"""Root error class for the mp-rbac error hierarchy.

Subclasses list the attributes that identify what went wrong (an id, a
storage key, a setting name) in ``context_fields``; those values are folded
into the ``detail`` payload so a logged error always names its subject.
"""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context merged over the ``context_fields`` values.
        cause: Lower-level exception this error wraps.
    """

    default_code: ClassVar[str] = "base_error"
    context_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def context(self) -> dict[str, Any]:
        """Non-``None`` ``context_fields`` values, then explicit ``detail``."""
        values = {
            name: getattr(self, name)
            for name in self.context_fields
            if getattr(self, name, None) is not None
        }
        values.update(self.detail)
        return values

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured log events."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.context(),
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]

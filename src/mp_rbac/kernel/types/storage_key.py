"""Storage key value object."""

from __future__ import annotations

import dataclasses
import re
from typing import Final

from mp_rbac.kernel.errors.domain import ValidationError

_KEY_PATTERN: Final = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.:-]*$")


@dataclasses.dataclass(frozen=True, slots=True)
class StorageKey:
    """Name under which a store keeps one document.

    Letters, digits and ``_ . : -``, not starting with a dot and never
    containing ``..``, so the key is safe both as a file name and as a
    Redis key suffix.
    """

    value: str

    def __post_init__(self) -> None:
        if not _KEY_PATTERN.match(self.value) or ".." in self.value:
            raise ValidationError(
                f"Invalid storage key (letters, digits, '_', '.', ':', '-'): {self.value!r}"
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def is_valid(cls, value: str) -> bool:
        try:
            cls(value)
        except ValidationError:
            return False
        return True


__all__ = ["StorageKey"]

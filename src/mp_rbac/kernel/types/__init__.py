"""Kernel types – Result, StorageKey."""
from mp_rbac.kernel.types.result import Err, Ok, Result
from mp_rbac.kernel.types.storage_key import StorageKey

__all__ = ["Err", "Ok", "Result", "StorageKey"]

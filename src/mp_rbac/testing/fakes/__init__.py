"""Testing fakes – in-memory doubles for persistence ports."""
from mp_rbac.testing.fakes.store import InMemoryRegistryStore

__all__ = ["InMemoryRegistryStore"]

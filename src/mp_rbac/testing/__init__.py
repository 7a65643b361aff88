"""Testing support – fakes and property-based generators."""

from mp_rbac.testing.fakes import InMemoryRegistryStore
from mp_rbac.testing.generators import (
    id_strategy,
    permission_strategy,
    registry_state_strategy,
    role_strategy,
)

__all__ = [
    "InMemoryRegistryStore",
    "id_strategy",
    "permission_strategy",
    "registry_state_strategy",
    "role_strategy",
]

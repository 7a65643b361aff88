"""Testing generators – property-based strategies."""
from mp_rbac.testing.generators.strategies import (
    id_strategy,
    permission_strategy,
    registry_state_strategy,
    role_strategy,
)

__all__ = [
    "id_strategy",
    "permission_strategy",
    "registry_state_strategy",
    "role_strategy",
]

"""Redis adapter – registry store."""
from mp_rbac.adapters.redis.store import RedisRegistryStore

__all__ = ["RedisRegistryStore"]

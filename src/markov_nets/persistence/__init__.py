"""Persistence adapter exports."""

from .base import DistributionStore, PersistenceAdapter
from .memory import MemoryPersistenceAdapter
from .redis import RedisPersistenceAdapter
from .sqlite import SQLitePersistenceAdapter

__all__ = [
    "DistributionStore",
    "PersistenceAdapter",
    "MemoryPersistenceAdapter",
    "RedisPersistenceAdapter",
    "SQLitePersistenceAdapter",
]

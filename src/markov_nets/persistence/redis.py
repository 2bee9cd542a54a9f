"""Redis-backed persistence adapter."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

try:
    import redis
except ImportError:  # pragma: no cover - optional dependency
    redis = None

from ..chain import ItemSequence
from ..types import WeightedItem
from .base import (
    DistributionStore,
    PersistenceAdapter,
    decode_context,
    decode_entries,
    encode_context,
    encode_entries,
)


class RedisPersistenceAdapter(PersistenceAdapter):
    """Persistence adapter backed by Redis."""

    def __init__(self, dsn: str = "redis://localhost:6379/0", *, namespace: str = "markov_nets") -> None:
        if redis is None:
            raise RuntimeError("redis-py is required for RedisPersistenceAdapter")
        self._redis = redis.Redis.from_url(dsn)
        self._ns = namespace
        self._distributions = RedisDistributionStore(self._redis, namespace)

    def distributions(self) -> DistributionStore:
        return self._distributions


class RedisDistributionStore(DistributionStore):
    def __init__(self, client: "redis.Redis", namespace: str) -> None:
        self._client = client
        self._key = f"{namespace}:distributions"

    def get(self, context: ItemSequence) -> Optional[list[WeightedItem]]:
        value = self._client.hget(self._key, encode_context(context))
        if not value:
            return None
        return decode_entries(value)

    def set(self, context: ItemSequence, entries: Sequence[WeightedItem]) -> None:
        self._client.hset(self._key, encode_context(context), encode_entries(entries))

    def delete(self, context: ItemSequence) -> None:
        self._client.hdel(self._key, encode_context(context))

    def keys(self) -> Iterable[ItemSequence]:
        return [decode_context(token) for token in self._client.hkeys(self._key)]

    def clear(self) -> None:
        self._client.delete(self._key)


__all__ = ["RedisPersistenceAdapter", "RedisDistributionStore"]

"""In-memory persistence backend for generator distributions."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from ..chain import ItemSequence
from ..types import WeightedItem
from .base import DistributionStore, PersistenceAdapter


class MemoryDistributionStore(DistributionStore):
    def __init__(self) -> None:
        self._store: Dict[ItemSequence, list[WeightedItem]] = {}

    def get(self, context: ItemSequence) -> Optional[list[WeightedItem]]:
        entries = self._store.get(context)
        if entries is None:
            return None
        return [entry.model_copy() for entry in entries]

    def set(self, context: ItemSequence, entries: Sequence[WeightedItem]) -> None:
        self._store[context] = [entry.model_copy() for entry in entries]

    def delete(self, context: ItemSequence) -> None:
        self._store.pop(context, None)

    def keys(self) -> Iterable[ItemSequence]:
        return list(self._store)


class MemoryPersistenceAdapter(PersistenceAdapter):
    def __init__(self) -> None:
        self._distributions = MemoryDistributionStore()

    def distributions(self) -> DistributionStore:
        return self._distributions


__all__ = ["MemoryDistributionStore", "MemoryPersistenceAdapter"]

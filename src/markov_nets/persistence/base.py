"""Persistence interfaces for storing generator distributions."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Protocol, Sequence

from ..chain import ItemSequence
from ..types import WeightedItem


class DistributionStore(Protocol):
    """Protocol for storing the weighted entries of each context."""

    def get(self, context: ItemSequence) -> Optional[list[WeightedItem]]:
        ...

    def set(self, context: ItemSequence, entries: Sequence[WeightedItem]) -> None:
        ...

    def delete(self, context: ItemSequence) -> None:
        ...

    def keys(self) -> Iterable[ItemSequence]:
        ...


class PersistenceAdapter(ABC):
    """Base class that returns store implementations."""

    @abstractmethod
    def distributions(self) -> DistributionStore:
        raise NotImplementedError


def encode_context(context: ItemSequence) -> str:
    return json.dumps(context.to_list(), separators=(",", ":"))


def decode_context(token: str | bytes) -> ItemSequence:
    return ItemSequence(json.loads(token))


def encode_entries(entries: Sequence[WeightedItem]) -> str:
    return json.dumps([[entry.item, entry.weight] for entry in entries])


def decode_entries(payload: str | bytes) -> list[WeightedItem]:
    return [WeightedItem(item=item, weight=weight) for item, weight in json.loads(payload)]

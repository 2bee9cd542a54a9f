"""Keyed storage of probability lists for Markov-chain style generation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, Iterator, Optional, TypeVar

from .chain import ItemSequence
from .config import GeneratorConfig, PersistenceBackend
from .constants import (
    EVENT_DISCARD,
    EVENT_DRAW,
    EVENT_TRANSITION_REMOVED,
    EVENT_TRANSITIONS_ADDED,
)
from .persistence import (
    MemoryPersistenceAdapter,
    PersistenceAdapter,
    RedisPersistenceAdapter,
    SQLitePersistenceAdapter,
)
from .probability_list import PairLike, ProbabilityList
from .telemetry import TelemetryPublisher
from .types import GeneratorEvent, RandomSource

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class MarkovGenerator(Generic[T]):
    """Maps the preceding items of a chain to the distribution of the next one."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        *,
        persistence: Optional[PersistenceAdapter] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.persistence = persistence or self._create_persistence_adapter()
        self._store = self.persistence.distributions()
        self._telemetry = telemetry
        self._distributions: Dict[ItemSequence, ProbabilityList[T]] = {}
        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Reload every distribution held by the persistence store."""

        loaded: Dict[ItemSequence, ProbabilityList[T]] = {}
        for context in self._store.keys():
            entries = self._store.get(context)
            if entries is None:
                continue
            loaded[context] = ProbabilityList(weighted=entries)
        self._distributions = loaded
        LOGGER.debug("Loaded %d distribution(s) from %s", len(loaded), type(self.persistence).__name__)

    def key_for(self, context: Iterable[T]) -> ItemSequence:
        """Normalize ``context`` to the last ``config.order`` items."""

        sequence = context if isinstance(context, ItemSequence) else ItemSequence(context)
        order = self.config.order
        if len(sequence) < order:
            raise ValueError(f"context needs at least {order} items, got {len(sequence)}")
        return sequence.last(order)

    def distribution(self, context: Iterable[T]) -> Optional[ProbabilityList[T]]:
        return self._distributions.get(self.key_for(context))

    def set_distribution(self, context: Iterable[T], distribution: ProbabilityList[T]) -> None:
        key = self.key_for(context)
        self._distributions[key] = distribution
        self._persist(key)

    def discard(self, context: Iterable[T]) -> None:
        key = self.key_for(context)
        if self._distributions.pop(key, None) is None:
            return
        self._store.delete(key)
        self._emit_telemetry(EVENT_DISCARD, context=key)

    def add_transitions(self, context: Iterable[T], items: Iterable[T]) -> None:
        """Add ``items`` as equally likely successors of ``context``."""

        if items is None:
            raise ValueError("items must not be None")
        new_items = list(items)
        key = self.key_for(context)
        distribution = self._distributions.get(key)
        if distribution is None:
            distribution = ProbabilityList()
        distribution.add_items(new_items)
        self._distributions[key] = distribution
        self._persist(key)
        self._emit_telemetry(
            EVENT_TRANSITIONS_ADDED,
            context=key,
            payload={"count": len(new_items), "weighted": False},
        )

    def add_weighted_transitions(
        self, context: Iterable[T], pairs: Iterable[Optional[PairLike]]
    ) -> None:
        """Add successors of ``context`` with explicit weights."""

        if pairs is None:
            raise ValueError("pairs must not be None")
        new_pairs = list(pairs)
        key = self.key_for(context)
        distribution = self._distributions.get(key)
        if distribution is None:
            distribution = ProbabilityList()
        distribution.add_weighted(new_pairs)
        self._distributions[key] = distribution
        self._persist(key)
        self._emit_telemetry(
            EVENT_TRANSITIONS_ADDED,
            context=key,
            payload={"count": sum(1 for pair in new_pairs if pair is not None), "weighted": True},
        )

    def remove_transition(self, context: Iterable[T], item: T) -> None:
        """Remove ``item`` after ``context``; an emptied context is discarded."""

        key = self.key_for(context)
        distribution = self._distributions.get(key)
        if distribution is None or item not in distribution:
            return
        distribution.remove(item)
        self._emit_telemetry(EVENT_TRANSITION_REMOVED, context=key, payload={"item": item})
        if len(distribution) == 0:
            self.discard(key)
            return
        self._persist(key)

    def next_item(self, context: Iterable[T], random_source: RandomSource) -> T:
        """Draw the successor of ``context`` from its distribution."""

        key = self.key_for(context)
        distribution = self._distributions.get(key)
        if distribution is None:
            raise KeyError(key)
        item = distribution.get_random_item(random_source)
        self._emit_telemetry(EVENT_DRAW, context=key, payload={"item": item})
        return item

    def save(self, context: Optional[Iterable[T]] = None) -> None:
        """Write one distribution, or all of them, to the persistence store."""

        if context is not None:
            self._persist(self.key_for(context))
            return
        for key in self._distributions:
            self._persist(key)

    def contexts(self) -> list[ItemSequence]:
        return list(self._distributions)

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    def __getitem__(self, context: Iterable[T]) -> ProbabilityList[T]:
        key = self.key_for(context)
        try:
            return self._distributions[key]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, context: object) -> bool:
        try:
            key = self.key_for(context)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False
        return key in self._distributions

    def __len__(self) -> int:
        return len(self._distributions)

    def __iter__(self) -> Iterator[ItemSequence]:
        return iter(list(self._distributions))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _persist(self, key: ItemSequence) -> None:
        distribution = self._distributions.get(key)
        if distribution is None:
            return
        self._store.set(key, distribution.snapshot())

    def _create_persistence_adapter(self) -> PersistenceAdapter:
        persistence_cfg = self.config.persistence
        if persistence_cfg.backend is PersistenceBackend.MEMORY:
            return MemoryPersistenceAdapter()
        if persistence_cfg.backend is PersistenceBackend.SQLITE:
            dsn = persistence_cfg.dsn or ":memory:"
            return SQLitePersistenceAdapter(dsn, namespace=persistence_cfg.namespace)
        if persistence_cfg.backend is PersistenceBackend.REDIS:
            dsn = persistence_cfg.dsn or "redis://localhost:6379/0"
            return RedisPersistenceAdapter(dsn, namespace=persistence_cfg.namespace)
        raise NotImplementedError(f"Unsupported persistence backend: {persistence_cfg.backend}")

    def _emit_telemetry(
        self,
        event: str,
        *,
        context: Optional[ItemSequence] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        if self._telemetry is None or not self.config.telemetry.enabled:
            return
        self._telemetry.emit(
            GeneratorEvent(
                event=event,
                context=context.to_list() if context is not None else None,
                payload=payload or {},
            )
        )


__all__ = ["MarkovGenerator"]

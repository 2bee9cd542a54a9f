"""Fixed-point weighted selection over a dynamic set of items.

Every item in a :class:`ProbabilityList` owns an integer share of
``MAX_PROBABILITY``. Equal-weight insertion carves room for new items out of
the existing entries proportionally, and removal spreads the freed mass evenly
over what remains. All arithmetic is integer division, so totals drift by
rounding; the drift is reproducible and is never corrected behind the
caller's back.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar, Union

from .constants import MAX_PROBABILITY
from .types import ProbabilityMassError, RandomSource, WeightedItem

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

PairLike = Union[WeightedItem, tuple[Any, int]]

_MISSING: Any = object()


class ProbabilityList(Generic[T]):
    """List of candidate items tied to their probabilities."""

    MAX_PROBABILITY = MAX_PROBABILITY

    def __init__(
        self,
        items: Iterable[T] = _MISSING,
        *,
        weighted: Iterable[Optional[PairLike]] = _MISSING,
    ) -> None:
        self._entries: list[WeightedItem] = []
        if items is not _MISSING:
            self.add_items(items)
        if weighted is not _MISSING:
            self.add_weighted(weighted)

    @classmethod
    def of(cls, *items: T) -> "ProbabilityList[T]":
        """Build a list where every given item has the same probability."""

        return cls(items)

    @classmethod
    def of_weighted(cls, *pairs: Optional[PairLike]) -> "ProbabilityList[T]":
        """Build a list from explicit item/weight pairs."""

        return cls(weighted=pairs)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------
    def add_items(self, items: Iterable[T]) -> None:
        """Add items as if every entry afterwards had the same probability.

        Existing entries give up room proportionally to their own share. The
        shrink for each entry is ``required // (MAX_PROBABILITY // weight)``;
        both divisions truncate.
        """

        if items is None:
            raise ValueError("items must not be None")
        new_items = list(items)

        slots = len(new_items) + len(self._entries)
        if slots == 0:
            raise ZeroDivisionError("cannot spread probability mass over an empty list")

        item_weight = MAX_PROBABILITY // slots
        required_space = item_weight * len(new_items)
        # Every shrink is computed before any entry changes.
        shrinks = [
            required_space // (MAX_PROBABILITY // entry.weight) if entry.weight > 0 else 0
            for entry in self._entries
        ]
        for entry, shrink in zip(self._entries, shrinks):
            entry.weight -= shrink

        self._entries.extend(WeightedItem(item=item, weight=item_weight) for item in new_items)
        LOGGER.debug(
            "Added %d item(s) at weight %d; %d entries now hold %d",
            len(new_items),
            item_weight,
            len(self._entries),
            self.total_weight,
        )

    def add_weighted(self, pairs: Iterable[Optional[PairLike]]) -> None:
        """Append item/weight pairs verbatim.

        No rebalancing happens here: keeping the total at ``MAX_PROBABILITY``
        is up to the caller. ``None`` entries are skipped.
        """

        if pairs is None:
            raise ValueError("pairs must not be None")
        self._entries.extend(
            self._coerce_pair(pair) for pair in pairs if pair is not None
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def get_random_item(self, random_source: RandomSource) -> T:
        """Draw an item, each entry winning with ``weight / MAX_PROBABILITY``.

        ``random_source(low, high)`` must return an integer in ``[low, high)``.
        A value outside that range, or a walk that never passes it, raises
        :class:`ProbabilityMassError`.
        """

        random_value = random_source(0, MAX_PROBABILITY)
        if not 0 <= random_value < MAX_PROBABILITY:
            raise ProbabilityMassError(
                f"random value {random_value} is outside [0, {MAX_PROBABILITY})"
            )

        counter = 0
        for entry in self._entries:
            counter += entry.weight
            if counter > random_value:
                return entry.item

        raise ProbabilityMassError(
            f"random value {random_value} exceeds the stored probability mass {counter}"
        )

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------
    def remove(self, item: T) -> None:
        """Remove every occurrence of ``item`` and share out its probability."""

        kept = [entry for entry in self._entries if entry.item != item]
        removed = len(self._entries) - len(kept)
        if removed == 0:
            return

        freed = sum(entry.weight for entry in self._entries if entry.item == item)
        self._entries = kept
        self._redistribute(freed)

    def remove_weighted(self, pair: PairLike) -> None:
        """Remove entries matching both item and weight of ``pair``."""

        if pair is None:
            raise ValueError("pair must not be None")
        target = self._coerce_pair(pair)

        kept = [entry for entry in self._entries if entry != target]
        removed = len(self._entries) - len(kept)
        if removed == 0:
            return

        self._entries = kept
        self._redistribute(target.weight * removed)

    def _redistribute(self, freed: int) -> None:
        if not self._entries:
            LOGGER.debug("List emptied; %d freed probability left unassigned", freed)
            return
        per_entry = freed // len(self._entries)
        for entry in self._entries:
            entry.weight += per_entry

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def total_weight(self) -> int:
        return sum(entry.weight for entry in self._entries)

    def weight_of(self, item: T) -> int:
        """Combined weight of every entry holding ``item`` (0 when absent)."""

        return sum(entry.weight for entry in self._entries if entry.item == item)

    def snapshot(self) -> list[WeightedItem]:
        """Copies of the entries in storage order."""

        return [entry.model_copy() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return (entry.item for entry in list(self._entries))

    def __contains__(self, item: object) -> bool:
        return any(entry.item == item for entry in self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{entry.item!r}: {entry.weight}" for entry in self._entries)
        return f"ProbabilityList({{{inner}}})"

    @staticmethod
    def _coerce_pair(pair: PairLike) -> WeightedItem:
        if isinstance(pair, WeightedItem):
            return pair.model_copy()
        item, weight = pair
        return WeightedItem(item=item, weight=weight)


__all__ = ["ProbabilityList", "PairLike"]

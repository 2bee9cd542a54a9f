"""Common data types used across the markov_nets package."""

from __future__ import annotations

import time
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field


class WeightedItem(BaseModel):
    """An item paired with its integer share of the total probability mass."""

    item: Any = Field(..., description="The opaque, value-comparable item.")
    weight: int = Field(
        ...,
        description="Share of MAX_PROBABILITY assigned to the item.",
    )

    @classmethod
    def of(cls, item: Any, weight: int) -> "WeightedItem":
        """Positional shorthand for ``WeightedItem(item=..., weight=...)``."""

        return cls(item=item, weight=weight)

    def as_tuple(self) -> tuple[Any, int]:
        return self.item, self.weight


class RandomSource(Protocol):
    """Returns an integer drawn uniformly from ``[low, high)``."""

    def __call__(self, low: int, high: int) -> int:  # pragma: no cover - protocol definition
        ...


class GeneratorEvent(BaseModel):
    """Telemetry payload emitted by the generator."""

    event: str
    context: Optional[list[Any]] = None
    payload: dict[str, object] = Field(default_factory=dict)
    timestamp: float = Field(default_factory=time.time)


class ProbabilityMassError(RuntimeError):
    """Raised when a draw walks every entry without reaching the drawn value."""


__all__ = [
    "GeneratorEvent",
    "ProbabilityMassError",
    "RandomSource",
    "WeightedItem",
]

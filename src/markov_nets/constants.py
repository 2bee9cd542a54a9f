"""Shared constants for probability lists and item chains."""

from __future__ import annotations

# The value treated as a 100% chance. Weights are integer shares of this mass.
MAX_PROBABILITY = 1_000_000

# Multiplier used when folding element hashes into an ItemSequence hash.
SEQUENCE_HASH_MULTIPLIER = 13

# Sequence hashes are kept within 64 bits.
SEQUENCE_HASH_MASK = (1 << 64) - 1

# Number of preceding items used as a generator context by default.
DEFAULT_ORDER = 2

# Telemetry event names published by the generator.
EVENT_TRANSITIONS_ADDED = "generator.transitions_added"
EVENT_TRANSITION_REMOVED = "generator.transition_removed"
EVENT_DISCARD = "generator.discard"
EVENT_DRAW = "generator.draw"
GENERATOR_EVENTS = frozenset(
    {EVENT_TRANSITIONS_ADDED, EVENT_TRANSITION_REMOVED, EVENT_DISCARD, EVENT_DRAW}
)


__all__ = [
    "DEFAULT_ORDER",
    "EVENT_DISCARD",
    "EVENT_DRAW",
    "EVENT_TRANSITIONS_ADDED",
    "EVENT_TRANSITION_REMOVED",
    "GENERATOR_EVENTS",
    "MAX_PROBABILITY",
    "SEQUENCE_HASH_MASK",
    "SEQUENCE_HASH_MULTIPLIER",
]

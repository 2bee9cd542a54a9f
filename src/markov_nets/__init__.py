"""Public package interface for markov_nets."""

from .chain import ItemSequence
from .config import GeneratorConfig, PersistenceBackend, PersistenceConfig, TelemetryConfig
from .constants import MAX_PROBABILITY
from .generator import MarkovGenerator
from .loader import load_generator
from .persistence import MemoryPersistenceAdapter, PersistenceAdapter
from .probability_list import ProbabilityList
from .telemetry import (
    DrawCounterSink,
    InMemoryTelemetrySink,
    LoggingTelemetrySink,
    TelemetryPublisher,
)
from .types import GeneratorEvent, ProbabilityMassError, RandomSource, WeightedItem
from .utils import constant_source, random_source, seeded_source

__all__ = [
    "MAX_PROBABILITY",
    "DrawCounterSink",
    "GeneratorConfig",
    "GeneratorEvent",
    "InMemoryTelemetrySink",
    "ItemSequence",
    "LoggingTelemetrySink",
    "MarkovGenerator",
    "MemoryPersistenceAdapter",
    "PersistenceAdapter",
    "PersistenceBackend",
    "PersistenceConfig",
    "ProbabilityList",
    "ProbabilityMassError",
    "RandomSource",
    "TelemetryConfig",
    "TelemetryPublisher",
    "WeightedItem",
    "constant_source",
    "load_generator",
    "random_source",
    "seeded_source",
]

"""Configuration models for markov_nets."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, PositiveInt, field_validator

from .constants import DEFAULT_ORDER, GENERATOR_EVENTS


class PersistenceBackend(str, Enum):
    """Supported backends for storing generator distributions."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    REDIS = "redis"


class PersistenceConfig(BaseModel):
    """Distribution persistence configuration."""

    backend: PersistenceBackend = PersistenceBackend.MEMORY
    dsn: Optional[str] = Field(
        default=None,
        description="SQLite path or Redis URL; ignored by the memory backend.",
    )
    namespace: str = Field(default="markov_nets")

    @field_validator("namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("namespace must be non-empty")
        return value


class TelemetryConfig(BaseModel):
    """Controls whether generator events are published."""

    enabled: bool = False
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Fraction of events forwarded to sinks.",
    )
    events: Optional[set[str]] = Field(
        default=None,
        description="Event names to publish; every generator event when unset.",
    )

    @field_validator("events")
    @classmethod
    def _known_events(cls, value: Optional[set[str]]) -> Optional[set[str]]:
        if value is None:
            return value
        unknown = value - GENERATOR_EVENTS
        if unknown:
            raise ValueError(f"unknown telemetry events: {sorted(unknown)}")
        return value


class GeneratorConfig(BaseModel):
    """Top-level configuration object for the generator."""

    order: PositiveInt = Field(
        default=DEFAULT_ORDER,
        description="Number of preceding items that form a lookup context.",
    )
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)


__all__ = [
    "GeneratorConfig",
    "PersistenceBackend",
    "PersistenceConfig",
    "TelemetryConfig",
]

"""Publishing of generator events to pluggable sinks."""

from __future__ import annotations

import logging
import random
from collections import Counter
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol

from .config import TelemetryConfig
from .constants import EVENT_DRAW
from .types import GeneratorEvent

LOGGER = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Sink that handles generator events."""

    def handle(self, event: GeneratorEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Route generator events to sinks.

    An event reaches a sink only when telemetry is enabled, the event name is
    allowed by ``config.events``, the sample draw passes, and the sink either
    subscribed to every event or to that event's name.
    """

    def __init__(
        self,
        config: TelemetryConfig,
        *,
        random_fn: Callable[[], float] = random.random,
    ) -> None:
        self.config = config
        self._random = random_fn
        self._sinks: list[tuple[TelemetrySink, Optional[frozenset[str]]]] = []

    def subscribe(self, sink: TelemetrySink, *, events: Optional[Iterable[str]] = None) -> None:
        self._sinks.append((sink, frozenset(events) if events is not None else None))

    def unsubscribe(self, sink: TelemetrySink) -> None:
        self._sinks = [entry for entry in self._sinks if entry[0] is not sink]

    @contextmanager
    def subscribed(
        self, sink: TelemetrySink, *, events: Optional[Iterable[str]] = None
    ) -> Iterator[TelemetrySink]:
        self.subscribe(sink, events=events)
        try:
            yield sink
        finally:
            self.unsubscribe(sink)

    def wants(self, event_name: str) -> bool:
        """Whether any event named ``event_name`` could be published."""

        if not self.config.enabled:
            return False
        return self.config.events is None or event_name in self.config.events

    def emit(self, event: GeneratorEvent) -> None:
        if not self.wants(event.event):
            return
        if self._random() > self.config.sample_rate:
            return
        for sink, names in list(self._sinks):
            if names is not None and event.event not in names:
                continue
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Telemetry sink %s failed", sink)


class LoggingTelemetrySink:
    """Logs one line per event with the module logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def handle(self, event: GeneratorEvent) -> None:
        LOGGER.log(
            self.level,
            "Telemetry event %s context=%s payload=%s",
            event.event,
            event.context,
            event.payload,
        )


class InMemoryTelemetrySink:
    """Collects events in memory for diagnostics or testing."""

    def __init__(self) -> None:
        self.events: list[GeneratorEvent] = []

    def handle(self, event: GeneratorEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.event for event in self.events]

    def for_context(self, context: Iterable[Any]) -> list[GeneratorEvent]:
        wanted = list(context)
        return [event for event in self.events if event.context == wanted]


class DrawCounterSink:
    """Tallies drawn items per context, e.g. to compare against stored weights."""

    def __init__(self) -> None:
        self._counts: dict[tuple[Any, ...], Counter] = {}

    def handle(self, event: GeneratorEvent) -> None:
        if event.event != EVENT_DRAW:
            return
        key = tuple(event.context or ())
        self._counts.setdefault(key, Counter())[event.payload.get("item")] += 1

    def counts(self, context: Iterable[Any]) -> Counter:
        return Counter(self._counts.get(tuple(context), Counter()))

    def total(self) -> int:
        return sum(sum(counter.values()) for counter in self._counts.values())


__all__ = [
    "DrawCounterSink",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "TelemetryPublisher",
    "TelemetrySink",
]

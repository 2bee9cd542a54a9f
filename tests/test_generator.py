import pytest

from markov_nets.chain import ItemSequence
from markov_nets.config import GeneratorConfig, PersistenceConfig, TelemetryConfig
from markov_nets.generator import MarkovGenerator
from markov_nets.persistence.memory import MemoryPersistenceAdapter
from markov_nets.persistence.sqlite import SQLitePersistenceAdapter
from markov_nets.probability_list import ProbabilityList
from markov_nets.telemetry import InMemoryTelemetrySink, TelemetryPublisher
from markov_nets.utils import constant_source


def _generator(**config_kwargs) -> MarkovGenerator:
    return MarkovGenerator(GeneratorConfig(**config_kwargs))


def test_context_is_trimmed_to_order():
    generator = _generator(order=2)

    assert generator.key_for(["a", "b", "c"]) == ItemSequence.of("b", "c")
    assert generator.key_for(ItemSequence.of("x", "y")) == ItemSequence.of("x", "y")


def test_short_context_is_rejected():
    generator = _generator(order=3)

    with pytest.raises(ValueError):
        generator.key_for(["a", "b"])
    assert ["a", "b"] not in generator


def test_transitions_are_drawn_per_context():
    generator = _generator(order=1)
    generator.add_transitions(["a"], ["b", "c"])
    generator.add_transitions(["b"], ["a"])

    assert generator.next_item(["a"], constant_source(0)) == "b"
    assert generator.next_item(["a"], constant_source(500_000)) == "c"
    assert generator.next_item(["x", "b"], constant_source(999_999)) == "a"
    assert len(generator) == 2
    assert set(generator.contexts()) == {ItemSequence.of("a"), ItemSequence.of("b")}


def test_add_transitions_rebalances_existing_context():
    generator = _generator(order=1)
    generator.add_transitions(["a"], ["x", "y"])
    generator.add_transitions(["a"], ["z"])

    distribution = generator[["a"]]
    assert [distribution.weight_of(item) for item in ("x", "y", "z")] == [333_334, 333_334, 333_333]


def test_weighted_transitions_are_stored_verbatim():
    generator = _generator(order=1)
    generator.add_weighted_transitions(["a"], [("b", 900_000), None, ("c", 100_000)])

    assert generator[["a"]].weight_of("c") == 100_000
    assert generator.next_item(["a"], constant_source(900_000)) == "c"


def test_unknown_context_raises_key_error():
    generator = _generator(order=1)

    with pytest.raises(KeyError):
        generator.next_item(["nope"], constant_source(0))
    with pytest.raises(KeyError):
        generator[["nope"]]
    assert generator.distribution(["nope"]) is None


def test_removing_last_transition_discards_context():
    generator = _generator(order=1)
    generator.add_transitions(["a"], ["b", "c"])

    generator.remove_transition(["a"], "b")
    assert list(generator[["a"]]) == ["c"]
    assert generator[["a"]].weight_of("c") == 1_000_000

    generator.remove_transition(["a"], "c")
    assert ["a"] not in generator
    assert generator.persistence.distributions().get(ItemSequence.of("a")) is None


def test_set_distribution_and_discard():
    generator = _generator(order=1)
    generator.set_distribution(["a"], ProbabilityList.of("b"))

    assert ["a"] in generator
    generator.discard(["a"])
    generator.discard(["a"])
    assert len(generator) == 0


@pytest.mark.parametrize(
    "adapter_factory",
    [MemoryPersistenceAdapter, SQLitePersistenceAdapter],
)
def test_distributions_survive_restart(adapter_factory):
    adapter = adapter_factory()
    config = GeneratorConfig(order=1)

    first = MarkovGenerator(config, persistence=adapter)
    first.add_transitions(["a"], ["b", "c"])
    first.add_transitions(["a"], ["d"])

    second = MarkovGenerator(config, persistence=adapter)

    assert list(second[["a"]]) == ["b", "c", "d"]
    assert second[["a"]].snapshot() == first[["a"]].snapshot()


def test_save_persists_direct_mutations():
    adapter = MemoryPersistenceAdapter()
    generator = MarkovGenerator(GeneratorConfig(order=1), persistence=adapter)
    generator.add_transitions(["a"], ["b"])

    generator[["a"]].add_items(["c"])
    generator.save()

    restored = MarkovGenerator(GeneratorConfig(order=1), persistence=adapter)
    assert list(restored[["a"]]) == ["b", "c"]


def test_sqlite_backend_from_config(tmp_path):
    config = GeneratorConfig(
        order=1,
        persistence=PersistenceConfig(backend="sqlite", dsn=str(tmp_path / "chains.db")),
    )
    MarkovGenerator(config).add_transitions(["a"], ["b"])

    restored = MarkovGenerator(config)

    assert restored.next_item(["a"], constant_source(0)) == "b"


def test_generator_emits_telemetry():
    telemetry_cfg = TelemetryConfig(enabled=True, sample_rate=1.0)
    publisher = TelemetryPublisher(telemetry_cfg, random_fn=lambda: 0.0)
    sink = InMemoryTelemetrySink()
    publisher.subscribe(sink)
    generator = MarkovGenerator(GeneratorConfig(order=1, telemetry=telemetry_cfg))
    generator.attach_telemetry(publisher)

    generator.add_transitions(["a"], ["b"])
    generator.next_item(["a"], constant_source(0))
    generator.remove_transition(["a"], "b")

    assert sink.names() == [
        "generator.transitions_added",
        "generator.draw",
        "generator.transition_removed",
        "generator.discard",
    ]
    assert sink.events[1].context == ["a"]
    assert sink.events[1].payload == {"item": "b"}


def test_telemetry_disabled_in_config_emits_nothing():
    publisher = TelemetryPublisher(TelemetryConfig(enabled=True), random_fn=lambda: 0.0)
    sink = InMemoryTelemetrySink()
    publisher.subscribe(sink)
    generator = MarkovGenerator(GeneratorConfig(order=1), telemetry=publisher)

    generator.add_transitions(["a"], ["b"])

    assert sink.events == []

import pytest
from pydantic import ValidationError

from markov_nets.config import GeneratorConfig, PersistenceBackend, PersistenceConfig, TelemetryConfig


def test_defaults():
    config = GeneratorConfig()

    assert config.order == 2
    assert config.persistence.backend is PersistenceBackend.MEMORY
    assert config.telemetry.enabled is False


def test_order_must_be_positive():
    with pytest.raises(ValidationError):
        GeneratorConfig(order=0)


def test_namespace_is_stripped_and_required():
    assert PersistenceConfig(namespace="  chains ").namespace == "chains"
    with pytest.raises(ValidationError):
        PersistenceConfig(namespace="   ")


def test_sample_rate_bounds():
    with pytest.raises(ValidationError):
        TelemetryConfig(sample_rate=1.5)


def test_backend_accepts_string_values():
    assert PersistenceConfig(backend="redis").backend is PersistenceBackend.REDIS

import os

import pytest

from markov_nets.chain import ItemSequence
from markov_nets.persistence.redis import RedisPersistenceAdapter
from markov_nets.types import WeightedItem

pytestmark = pytest.mark.skipif(
    os.getenv("REDIS_URL") is None,
    reason="Requires REDIS_URL environment variable",
)


@pytest.fixture()
def adapter():
    url = os.getenv("REDIS_URL")
    adapter = RedisPersistenceAdapter(dsn=url, namespace="test_markov_nets")
    adapter.distributions().clear()
    yield adapter
    adapter.distributions().clear()


def test_redis_distribution_round_trip(adapter):
    store = adapter.distributions()
    context = ItemSequence.of("a", "b")
    entries = [WeightedItem.of("c", 500_000), WeightedItem.of("d", 500_000)]

    store.set(context, entries)

    assert store.get(context) == entries
    assert list(store.keys()) == [context]
    store.delete(context)
    assert store.get(context) is None

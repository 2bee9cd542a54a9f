import random

from markov_nets.utils import constant_source, random_source, seeded_source


def test_seeded_source_is_reproducible():
    first = seeded_source(42)
    second = seeded_source(42)

    assert [first(0, 1_000_000) for _ in range(5)] == [second(0, 1_000_000) for _ in range(5)]


def test_random_source_stays_in_range():
    source = random_source(random.Random(3))

    assert all(10 <= source(10, 20) < 20 for _ in range(100))


def test_module_level_source_stays_in_range():
    source = random_source()

    assert 0 <= source(0, 5) < 5


def test_constant_source_ignores_bounds():
    assert constant_source(7)(0, 3) == 7

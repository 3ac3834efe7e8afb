"""Shared fixtures and input factories for the sorting tests."""

import random

import pytest

from algorithms import REGISTRY


ALGO_KEYS = list(REGISTRY)


def random_inputs(count: int = 40, max_len: int = 30, seed: int = 1234):
    """Seeded mix of random arrays: ints with duplicates, floats, negatives."""
    rng = random.Random(seed)
    cases = []
    for k in range(count):
        n = rng.randint(0, max_len)
        flavour = k % 3
        if flavour == 0:
            cases.append([rng.randint(0, 9) for _ in range(n)])
        elif flavour == 1:
            cases.append([rng.uniform(-100, 100) for _ in range(n)])
        else:
            cases.append([rng.randint(-50, 50) for _ in range(n)])
    return cases


EDGE_INPUTS = [
    [],
    [7],
    [2, 1],
    [1, 2],
    [2, 2, 2],
    [5, 3, 8, 1],
    [9, 7, 5, 3, 1],
    [1, 2, 3, 4, 5, 6],
    [3, -1, 0, -1, 3, 2.5],
]


@pytest.fixture(params=ALGO_KEYS)
def algo_key(request):
    return request.param

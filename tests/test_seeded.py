from __future__ import annotations

import math

import numpy as np
import pytest

from diamondviz.errors import InvalidNumericInputError
from diamondviz.inclusions.seeded import seeded_random


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234.5, -99, 10**6])
def test_seeded_random_is_in_unit_interval(seed: float) -> None:
    values = [seeded_random(seed, idx) for idx in range(1, 50)]

    assert all(0.0 <= value < 1.0 for value in values)


def test_seeded_random_is_stateless() -> None:
    first = [seeded_random(42, idx) for idx in range(1, 12)]
    seeded_random(7, 3)
    second = [seeded_random(42, idx) for idx in range(1, 12)]

    assert first == second


def test_seeded_random_varies_with_index_and_seed() -> None:
    assert seeded_random(42, 1) != seeded_random(42, 2)
    assert seeded_random(42, 1) != seeded_random(43, 1)


def test_seeded_random_origin_is_zero() -> None:
    assert seeded_random(0, 0) == 0.0


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_seeded_random_rejects_non_finite(bad: float) -> None:
    with pytest.raises(InvalidNumericInputError):
        seeded_random(bad, 1)
    with pytest.raises(InvalidNumericInputError):
        seeded_random(1, bad)


@pytest.mark.parametrize("seed", [0, 42, 1234])
def test_seeded_random_spreads_evenly_over_indices(seed: float) -> None:
    draws = 20_000
    values = np.array([seeded_random(seed, idx) for idx in range(draws)])

    counts, _ = np.histogram(values, bins=10, range=(0.0, 1.0))

    expected = draws / 10
    assert counts.sum() == draws
    assert np.all(np.abs(counts - expected) <= 0.1 * expected)

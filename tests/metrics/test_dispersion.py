from __future__ import annotations

import math

import pytest

from similarity_trait.metrics.dispersion import PopulationStandardDeviation


def test_population_standard_deviation() -> None:
    numbers = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]

    deviation = PopulationStandardDeviation.similarity(numbers)

    assert deviation is not None
    assert 1.999 < deviation < 2.001


@pytest.mark.parametrize(
    "numbers",
    [[1.0], [1.0, 3.0], [0.5, 1.5, 9.0, -2.0], (10, 20, 30)],
)
def test_matches_definition(numbers) -> None:
    mean = sum(numbers) / len(numbers)
    expected = math.sqrt(sum((x - mean) ** 2 for x in numbers) / len(numbers))

    assert PopulationStandardDeviation.similarity(numbers) == pytest.approx(expected)


def test_empty_input_is_undefined() -> None:
    assert PopulationStandardDeviation.similarity([]) is None
    assert PopulationStandardDeviation.similarity(()) is None


def test_input_is_not_mutated() -> None:
    numbers = [9.0, 2.0, 5.0]

    PopulationStandardDeviation.similarity(numbers)

    assert numbers == [9.0, 2.0, 5.0]

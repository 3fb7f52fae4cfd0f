"""Tests for the Euclidean distance metric."""

import math

import numpy as np
import pytest

from rating_clustering import DimensionMismatch, distance


VECTORS = [
    [0.0],
    [1.0, 2.0],
    [-3.5, 0.0, 2.25],
    [4.8, 4.2, 4.5],
    [1.8, 2.2, 2.0],
]


def test_known_values():
    assert distance([0, 0], [3, 4]) == pytest.approx(5.0)
    assert distance([1, 1, 1], [2, 2, 2]) == pytest.approx(math.sqrt(3))


@pytest.mark.parametrize("a", VECTORS)
def test_distance_to_self_is_zero(a):
    assert distance(a, a) == 0.0


@pytest.mark.parametrize("a, b", [
    ([1.0, 2.0], [4.0, -2.0]),
    ([4.8, 4.2, 4.5], [1.8, 2.2, 2.0]),
    ([-3.5, 0.0, 2.25], [0.1, 0.2, 0.3]),
])
def test_symmetric_and_non_negative(a, b):
    d = distance(a, b)
    assert d >= 0.0
    assert d == distance(b, a)


def test_accepts_numpy_arrays():
    assert distance(np.array([1.0, 2.0]), (1.0, 5.0)) == pytest.approx(3.0)
    assert isinstance(distance(np.array([1.0]), np.array([2.0])), float)


def test_mismatched_lengths_raise():
    with pytest.raises(DimensionMismatch):
        distance([1.0, 2.0], [1.0, 2.0, 3.0])


def test_non_vector_input_raises():
    with pytest.raises(DimensionMismatch):
        distance([[1.0, 2.0]], [1.0, 2.0])


def test_dimension_mismatch_is_value_error():
    with pytest.raises(ValueError):
        distance([1.0], [1.0, 2.0])

# tests/conftest.py
"""
Shared fixtures for the universe_sets test suite.
"""

import pytest

from universe_sets import declare


def make_universe(tag, values, labels=None, seal=True):
    """Declare a registry holding *values*; return (registry, handles)."""
    reg = declare(tag)
    labels = labels or [None] * len(values)
    handles = [reg.register(v, label) for v, label in zip(values, labels)]
    if seal:
        reg.seal()
    return reg, handles


@pytest.fixture
def universe_factory():
    return make_universe


@pytest.fixture
def letters():
    """Sealed universe of "A", "B", "C" (handles 0, 1, 2)."""
    return make_universe("letters", ["A", "B", "C"])


@pytest.fixture
def digits():
    """Sealed universe of the ten decimal digits, labelled by name."""
    names = [
        "zero", "one", "two", "three", "four",
        "five", "six", "seven", "eight", "nine",
    ]
    return make_universe("digits", list(range(10)), names)


@pytest.fixture
def open_registry():
    return declare("open")

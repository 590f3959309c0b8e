"""Shared test fixtures for hexworld tests."""

import numpy as np
import pytest

from hexworld.config import WorldProfile


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def small_profile() -> WorldProfile:
    """20x16 world with a few continents and mountains."""
    return WorldProfile(
        width=20,
        height=16,
        seed=99,
        continents=2,
        min_distance=4,
        max_distance=12,
        size_variance=20,
        irregularity=2,
        water_percent=45,
        mountain_percent=10,
        tall_mountains=3,
    )


@pytest.fixture
def scenario_profile() -> WorldProfile:
    """10x10 single-continent world without mountains."""
    return WorldProfile(
        width=10,
        height=10,
        seed=42,
        continents=1,
        min_distance=1,
        max_distance=8,
        size_variance=0,
        water_percent=30,
        mountain_percent=0,
        tall_mountains=0,
    )


@pytest.fixture
def all_land() -> np.ndarray:
    """30x30 elevation grid that is entirely plains."""
    return np.zeros((30, 30), dtype=np.int8)


@pytest.fixture
def all_ocean() -> np.ndarray:
    """11x11 elevation grid that is entirely shallow ocean."""
    return np.full((11, 11), -1, dtype=np.int8)

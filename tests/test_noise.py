"""Tests for the coastline noise field."""

import dataclasses

import numpy as np
import pytest

from hexworld.noise import CoastNoise


class TestCoastNoise:
    """Tests for CoastNoise."""

    def test_fixed_parameters(self) -> None:
        """Coastline noise uses fixed fBm parameters."""
        noise = CoastNoise.for_seed(5)
        assert noise.octaves == 4
        assert noise.lacunarity == 2.0
        assert noise.gain == 0.5
        assert noise.frequency == pytest.approx(0.07)

    def test_values_in_range(self) -> None:
        """Values stay in [-1, 1] and [0, 1]."""
        noise = CoastNoise.for_seed(42)
        for y in range(0, 60, 3):
            for x in range(0, 60, 3):
                assert -1.0 <= noise.value(x, y) <= 1.0
                assert 0.0 <= noise.value01(x, y) <= 1.0

    def test_deterministic_with_same_seed(self) -> None:
        """Same seed produces identical values."""
        first = CoastNoise.for_seed(123)
        second = CoastNoise.for_seed(123)
        assert [first.value(x, 7) for x in range(20)] == [
            second.value(x, 7) for x in range(20)
        ]

    def test_different_seed_different_output(self) -> None:
        """Different seeds give different fields."""
        first = CoastNoise.for_seed(123).sample(32, 32)
        second = CoastNoise.for_seed(456).sample(32, 32)
        assert not np.allclose(first, second)

    def test_sample_matches_point_values(self) -> None:
        """Grid sampling agrees with per-coordinate evaluation."""
        noise = CoastNoise.for_seed(9)
        grid = noise.sample(12, 8)
        assert grid.shape == (8, 12)
        assert grid.dtype == np.float32
        for y in range(8):
            for x in range(12):
                assert grid[y, x] == pytest.approx(noise.value(x, y), abs=1e-5)

    def test_coherent(self) -> None:
        """Adjacent tiles differ far less than the full range."""
        grid = CoastNoise.for_seed(77).sample(64, 64)
        assert np.abs(np.diff(grid, axis=1)).mean() < 0.3

    def test_seed_reduced_to_31_bits(self) -> None:
        """Seeds are masked to 31 bits."""
        assert CoastNoise.for_seed(-1).seed == 0x7FFF_FFFF
        assert CoastNoise.for_seed(2**40 + 3).seed == 3

    def test_immutable(self) -> None:
        """The noise field is frozen."""
        noise = CoastNoise.for_seed(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            noise.seed = 2  # type: ignore[misc]

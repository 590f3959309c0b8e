"""Tests for the end-to-end elevation generation."""

import itertools

import numpy as np
import pytest

from hexworld.config import WorldProfile
from hexworld.exceptions import ConfigurationError
from hexworld.generator import elevation_stats, generate_elevation
from hexworld.hexgrid import count_matching_neighbors


class TestDeterminism:
    """Same profile and seed, same map."""

    def test_identical_runs(self, small_profile: WorldProfile) -> None:
        """Two runs produce byte-identical grids."""
        first = generate_elevation(small_profile)
        second = generate_elevation(small_profile)
        np.testing.assert_array_equal(first.elevation, second.elevation)
        assert first.elevation.tobytes() == second.elevation.tobytes()

    def test_explicit_seed_overrides_profile(self, small_profile: WorldProfile) -> None:
        """An explicit seed replaces the profile seed."""
        result = generate_elevation(small_profile, seed=7)
        assert result.seed == 7
        expected = generate_elevation(small_profile.with_seed(7))
        np.testing.assert_array_equal(result.elevation, expected.elevation)

    def test_different_seeds_differ(self, small_profile: WorldProfile) -> None:
        """Different seeds give different maps."""
        first = generate_elevation(small_profile, seed=1)
        second = generate_elevation(small_profile, seed=2)
        assert not np.array_equal(first.elevation, second.elevation)

    def test_negative_seed(self, small_profile: WorldProfile) -> None:
        """The most negative seed is accepted and repeatable."""
        first = generate_elevation(small_profile, seed=-(2**63))
        second = generate_elevation(small_profile, seed=-(2**63))
        np.testing.assert_array_equal(first.elevation, second.elevation)


class TestBounds:
    """Output shape and value range."""

    @pytest.mark.parametrize("seed", [0, 1, 42, 2**40])
    def test_values_in_range(self, small_profile: WorldProfile, seed: int) -> None:
        """Every tile holds a known elevation level."""
        result = generate_elevation(small_profile, seed=seed)
        assert set(np.unique(result.elevation)) <= {-2, -1, 0, 1, 2, 3}

    def test_shape_matches_profile(self, small_profile: WorldProfile) -> None:
        """Grid shape is (height, width)."""
        result = generate_elevation(small_profile)
        assert result.elevation.shape == (small_profile.height, small_profile.width)
        assert result.width == small_profile.width
        assert result.height == small_profile.height

    def test_elevation_at(self, small_profile: WorldProfile) -> None:
        """elevation_at indexes by x then y."""
        result = generate_elevation(small_profile)
        assert result.elevation_at(3, 5) == int(result.elevation[5, 3])


class TestMountainLimits:
    """Mountain counts stay within their targets."""

    @pytest.mark.parametrize("seed", [3, 17, 99])
    def test_mountain_target_respected(self, seed: int) -> None:
        """Ridges and peaks stay within their targets."""
        profile = WorldProfile(
            width=40,
            height=30,
            continents=3,
            min_distance=5,
            max_distance=20,
            water_percent=40,
            mountain_percent=10,
            tall_mountains=5,
        )
        result = generate_elevation(profile, seed=seed)
        assert np.count_nonzero(result.elevation >= 2) <= profile.mountain_target
        assert np.count_nonzero(result.elevation == 3) <= profile.tall_mountains
        assert result.peaks_placed == np.count_nonzero(result.elevation == 3)

    def test_peaks_may_exceed_zero_mountain_target(self) -> None:
        """Peaks are placed before the target applies; no ridges grow past it."""
        profile = WorldProfile(
            width=20, height=20, seed=5, mountain_percent=0, tall_mountains=5
        )
        result = generate_elevation(profile)
        grid = result.elevation

        assert profile.mountain_target == 0
        assert result.peaks_placed > 0
        assert np.count_nonzero(grid >= 2) == result.peaks_placed
        assert np.count_nonzero(grid == 3) == result.peaks_placed
        assert np.count_nonzero(grid == 2) == 0
        assert result.mountains.ridge_tiles == 0

    def test_foothills_next_to_ridges_or_peaks(self, small_profile: WorldProfile) -> None:
        """Land foothills border a ridge; shelves border the ridge that made them."""
        result = generate_elevation(small_profile)
        grid = result.elevation
        near = (count_matching_neighbors(grid, 2) > 0) | (
            count_matching_neighbors(grid, 3) > 0
        )
        assert np.all(near[grid == 1])


class TestScenario:
    """10x10 single continent without mountains."""

    def test_single_seed_no_mountains(self, scenario_profile: WorldProfile) -> None:
        """One continent and no mountains gives only ocean and plains."""
        result = generate_elevation(scenario_profile)

        assert result.seeds_placed == 1
        assert result.passed
        assert result.elevation.max() <= 0
        assert set(np.unique(result.elevation)) <= {-1, 0}

    def test_land_grows_toward_target(self, scenario_profile: WorldProfile) -> None:
        """Growth reaches about 70% land and smoothing keeps it there."""
        result = generate_elevation(scenario_profile)
        assert abs(result.land_fraction_after_growth - 0.70) <= 0.05

        final_fraction = np.count_nonzero(result.elevation >= 0) / result.elevation.size
        assert abs(final_fraction - 0.70) <= 0.05

    def test_repeatable(self, scenario_profile: WorldProfile) -> None:
        """The scenario is repeatable."""
        first = generate_elevation(scenario_profile)
        second = generate_elevation(scenario_profile)
        np.testing.assert_array_equal(first.elevation, second.elevation)


class TestSeedMetadata:
    """Seed counts and warnings on the result."""

    def test_seeds_respect_min_distance(self) -> None:
        """Placed seeds keep the minimum separation."""
        profile = WorldProfile(
            width=40, height=40, continents=5, min_distance=8, max_distance=15
        )
        result = generate_elevation(profile)
        for a, b in itertools.combinations(result.seeds, 2):
            assert a.distance_to(b.x, b.y) >= profile.min_distance

    def test_undershoot_is_warning(self) -> None:
        """Placing too few seeds warns but passes."""
        profile = WorldProfile(
            width=5,
            height=5,
            continents=3,
            min_distance=10,
            max_distance=12,
            tall_mountains=0,
            mountain_percent=0,
        )
        result = generate_elevation(profile)
        assert result.seeds_requested == 3
        assert result.seeds_placed == 1
        assert result.passed
        assert any("continents" in warning for warning in result.warnings)

    def test_zero_seeds_is_error(self) -> None:
        """Zero seeds returns an all-ocean grid with an error."""
        profile = WorldProfile(width=12, height=12, continents=0)
        result = generate_elevation(profile)

        assert not result.passed
        assert result.seeds_placed == 0
        assert result.errors
        assert np.all(result.elevation == -1)
        assert result.elevation.shape == (12, 12)

    def test_unvalidated_bad_size_rejected(self) -> None:
        """A non-positive size raises ConfigurationError."""
        values = {**WorldProfile().model_dump(), "width": 0}
        profile = WorldProfile.model_construct(**values)
        with pytest.raises(ConfigurationError):
            generate_elevation(profile)


class TestElevationStats:
    """Tests for elevation_stats."""

    def test_counts_sum_to_total(self, small_profile: WorldProfile) -> None:
        """Level counts cover every tile."""
        result = generate_elevation(small_profile)
        stats = elevation_stats(result.elevation)
        assert sum(stats.values()) == result.elevation.size

    def test_named_levels(self) -> None:
        """Each elevation level maps to its name."""
        grid = np.array([[-1, 0, 1], [2, 3, -2]], dtype=np.int8)
        assert elevation_stats(grid) == {
            "deep_water": 1,
            "ocean": 1,
            "plains": 1,
            "foothill": 1,
            "ridge": 1,
            "peak": 1,
        }

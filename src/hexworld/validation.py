"""Post-generation validation of elevation maps."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import WorldProfile
from .hexgrid import count_matching_neighbors

logger = structlog.get_logger()

VALID_ELEVATIONS = (-2, -1, 0, 1, 2, 3)
LAND_FRACTION_TOLERANCE = 0.08


class ValidationResult:
    """Result of elevation map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_elevation(
    elevation: NDArray[np.int8],
    profile: WorldProfile,
) -> ValidationResult:
    """Validate a generated elevation map against its profile.

    Args:
        elevation: Elevation grid.
        profile: Profile the grid was generated from.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Shape matches the profile
    if elevation.shape != (profile.height, profile.width):
        result.add_error(
            f"Grid shape {elevation.shape} does not match "
            f"{profile.height}x{profile.width}"
        )
        return result

    # Check 2: Every value is a known elevation level
    _check_value_range(elevation, result)

    # Check 3: Mountain tiles within target
    _check_mountain_cap(elevation, profile, result)

    # Check 4: Peak count
    _check_peak_count(elevation, profile.tall_mountains, result)

    # Check 5: Foothills sit next to ridges
    _check_foothill_adjacency(elevation, result)

    # Check 6: Land fraction in reasonable range
    _check_land_fraction(elevation, profile.land_percent / 100.0, result)

    if result.passed:
        logger.info("elevation_validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("elevation_validation_failed", errors=result.errors)

    for warning in result.warnings:
        logger.warning("elevation_validation_warning", detail=warning)

    return result


def _check_value_range(elevation: NDArray[np.int8], result: ValidationResult) -> None:
    """Check all values are valid elevation levels."""
    invalid = ~np.isin(elevation, VALID_ELEVATIONS)
    count = int(np.count_nonzero(invalid))
    if count > 0:
        result.add_error(f"{count} tiles hold values outside {VALID_ELEVATIONS}")


def _check_mountain_cap(
    elevation: NDArray[np.int8],
    profile: WorldProfile,
    result: ValidationResult,
) -> None:
    """Check ridge and peak tiles stay within the mountain target."""
    mountains = int(np.count_nonzero(elevation >= 2))
    peaks = int(np.count_nonzero(elevation == 3))

    # Peaks are placed before the target applies
    cap = max(profile.mountain_target, peaks)
    if mountains > cap:
        result.add_warning(
            f"{mountains} mountain tiles exceed target {profile.mountain_target}"
        )


def _check_peak_count(
    elevation: NDArray[np.int8],
    tall_mountains: int,
    result: ValidationResult,
) -> None:
    peaks = int(np.count_nonzero(elevation == 3))
    if peaks > tall_mountains:
        result.add_warning(f"{peaks} tall peaks exceed requested {tall_mountains}")


def _check_foothill_adjacency(
    elevation: NDArray[np.int8],
    result: ValidationResult,
) -> None:
    """Check land foothills border a ridge.

    Submerged shelves also hold foothill elevation but end ridge walks in
    water, so only foothills with no ridge or peak neighbor are reported.
    """
    near_ridge = count_matching_neighbors(elevation, 2) > 0
    near_peak = count_matching_neighbors(elevation, 3) > 0
    stranded = (elevation == 1) & ~near_ridge & ~near_peak
    count = int(np.count_nonzero(stranded))
    if count > 0:
        result.add_warning(f"{count} foothills have no ridge or peak neighbor")


def _check_land_fraction(
    elevation: NDArray[np.int8],
    target_fraction: float,
    result: ValidationResult,
) -> None:
    """Check land fraction is reasonable."""
    actual_fraction = np.count_nonzero(elevation >= 0) / elevation.size

    if abs(actual_fraction - target_fraction) > LAND_FRACTION_TOLERANCE:
        result.add_warning(
            f"Land fraction {actual_fraction:.1%} differs from target {target_fraction:.1%}"
        )

"""Mountain shaping: tall peaks, ridges and foothills.

Runs after the coastline is settled and layers three elevation tiers on top
of the land/water map:

1. Tall peaks (3) are scattered with a minimum spacing, mostly on land.
2. Ridges (2) walk out from each peak along one range axis shared by the
   whole map, turning now and then depending on irregularity.
3. Foothills (1) ring every ridge on the surrounding plains.
"""

import math
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import MAX_IRREGULARITY, WorldProfile
from .exceptions import ConfigurationError
from .hexgrid import AXES, HexDirection, count_matching_neighbors, in_bounds, rotate, step

logger = structlog.get_logger()

DEEP_WATER = -2
OCEAN = -1
LAND = 0
FOOTHILL = 1
RIDGE = 2
PEAK = 3

PEAK_ATTEMPTS_PER_TARGET = 80
OFFSHORE_PEAK_CHANCE = 0.07
MIN_PEAK_SPACING = 3

BASE_TURN_CHANCE = 0.02
TURN_CHANCE_STEP = 0.04

MIN_RIDGE_LENGTH = 6


@dataclass
class MountainReport:
    """Counts of what each mountain pass produced."""

    peaks_requested: int = 0
    peaks: list[tuple[int, int]] | None = None
    ridge_tiles: int = 0
    shelf_tiles: int = 0
    foothills: int = 0
    mountain_target: int = 0

    @property
    def peaks_placed(self) -> int:
        return len(self.peaks) if self.peaks else 0


def peak_spacing(width: int, height: int, target: int) -> int:
    """Minimum distance between tall peaks."""
    return max(MIN_PEAK_SPACING, (width + height) // (target + 4))


def place_tall_peaks(
    profile: WorldProfile,
    rng: np.random.Generator,
    elevation: NDArray[np.int8],
) -> list[tuple[int, int]]:
    """Scatter tall peaks over the map.

    A candidate must sit on land unless a 7% offshore roll allows water.
    Gives up after ``tall_mountains * 80`` attempts.

    Args:
        profile: World profile.
        rng: Random number generator for this run.
        elevation: Elevation grid, modified in place.

    Returns:
        (x, y) of every placed peak, in placement order.
    """
    target = profile.tall_mountains
    peaks: list[tuple[int, int]] = []
    spacing = peak_spacing(profile.width, profile.height, target)

    max_attempts = target * PEAK_ATTEMPTS_PER_TARGET
    attempts = 0

    while len(peaks) < target and attempts < max_attempts:
        attempts += 1

        x = int(rng.integers(0, profile.width - 1, endpoint=True))
        y = int(rng.integers(0, profile.height - 1, endpoint=True))

        allow_water = rng.random() < OFFSHORE_PEAK_CHANCE
        on_land = elevation[y, x] >= LAND
        if not (on_land or allow_water):
            continue

        if any(math.hypot(x - px, y - py) < spacing for px, py in peaks):
            continue

        elevation[y, x] = PEAK
        peaks.append((x, y))

    if len(peaks) < target:
        logger.warning(
            "tall_peaks_undershot",
            requested=target,
            placed=len(peaks),
            spacing=spacing,
        )

    logger.info("tall_peaks_placed", count=len(peaks), attempts=attempts)
    return peaks


def ridge_length(profile: WorldProfile, rng: np.random.Generator) -> int:
    """Draw a ridge branch length scaled by map size and mountain density."""
    base = (profile.width + profile.height) // 2
    density = min(1.0, max(0.1, profile.mountain_percent / 100.0))

    shortest = max(MIN_RIDGE_LENGTH, int(base * 0.20 * density))
    longest = max(shortest + 3, int(base * 0.50 * density))

    return int(rng.integers(shortest, longest, endpoint=True))


def turn_chance(irregularity: int) -> float:
    irregularity = min(MAX_IRREGULARITY, max(0, irregularity))
    return BASE_TURN_CHANCE + irregularity * TURN_CHANCE_STEP


def grow_ridges(
    profile: WorldProfile,
    rng: np.random.Generator,
    elevation: NDArray[np.int8],
    peaks: list[tuple[int, int]],
) -> tuple[int, int]:
    """Walk ridge branches out from every peak.

    All branches start along one axis chosen for the whole map. A walk ends
    at the map edge, in deep water, or after turning one shallow-water tile
    into a submerged shelf. Growth stops everywhere once the number of tiles
    at ridge elevation or above reaches the mountain target.

    Args:
        profile: World profile.
        rng: Random number generator for this run.
        elevation: Elevation grid, modified in place.
        peaks: Peaks to grow from.

    Returns:
        Tuple of (ridge tiles raised, shelf tiles created).
    """
    if not peaks:
        return 0, 0

    width, height = profile.width, profile.height
    target = profile.mountain_target
    current = int(np.count_nonzero(elevation >= RIDGE))

    axis = AXES[int(rng.integers(0, len(AXES) - 1, endpoint=True))]
    chance = turn_chance(profile.irregularity)

    raised = 0
    shelves = 0

    for px, py in peaks:
        branches = int(rng.integers(2, 3, endpoint=True))

        for _ in range(branches):
            if current >= target:
                logger.debug("ridge_target_reached", ridge_tiles=current)
                return raised, shelves

            pick = int(rng.integers(0, len(axis) - 1, endpoint=True))
            direction: HexDirection = axis[pick]
            length = ridge_length(profile, rng)
            x, y = px, py

            for _ in range(length):
                if rng.random() < chance:
                    turn = -1 if rng.integers(0, 1, endpoint=True) == 0 else 1
                    direction = rotate(direction, turn)

                nx, ny = step(x, y, direction)
                if not in_bounds(nx, ny, width, height):
                    break

                value = elevation[ny, nx]
                if value <= DEEP_WATER:
                    break

                if value == OCEAN:
                    elevation[ny, nx] = FOOTHILL
                    shelves += 1
                    break

                if value < RIDGE:
                    elevation[ny, nx] = RIDGE
                    current += 1
                    raised += 1

                x, y = nx, ny

                if current >= target:
                    break

    return raised, shelves


def apply_foothills(elevation: NDArray[np.int8]) -> int:
    """Raise plains next to ridges into foothills.

    Candidates are collected from the grid before any are raised, so new
    foothills never seed further foothills.

    Args:
        elevation: Elevation grid, modified in place.

    Returns:
        Number of foothills created.
    """
    ridge_neighbors = count_matching_neighbors(elevation, RIDGE)
    foothills = (elevation == LAND) & (ridge_neighbors > 0)
    elevation[foothills] = FOOTHILL
    return int(np.count_nonzero(foothills))


def generate_mountains(
    profile: WorldProfile,
    rng: np.random.Generator,
    elevation: NDArray[np.int8],
) -> MountainReport:
    """Run the peak, ridge and foothill passes in order.

    Args:
        profile: World profile.
        rng: Random number generator for this run.
        elevation: Smoothed elevation grid, modified in place.

    Returns:
        MountainReport summarizing the passes.

    Raises:
        ConfigurationError: If the grid shape does not match the profile.
    """
    if elevation.shape != (profile.height, profile.width):
        raise ConfigurationError(
            f"Elevation grid shape {elevation.shape} does not match "
            f"profile {profile.width}x{profile.height}"
        )

    report = MountainReport(
        peaks_requested=profile.tall_mountains,
        peaks=[],
        mountain_target=profile.mountain_target,
    )

    if profile.tall_mountains <= 0 and profile.mountain_percent <= 0:
        logger.info("mountains_skipped")
        return report

    report.peaks = place_tall_peaks(profile, rng, elevation)
    report.ridge_tiles, report.shelf_tiles = grow_ridges(
        profile, rng, elevation, report.peaks
    )
    report.foothills = apply_foothills(elevation)

    logger.info(
        "mountains_complete",
        peaks=report.peaks_placed,
        ridge_tiles=report.ridge_tiles,
        shelf_tiles=report.shelf_tiles,
        foothills=report.foothills,
        mountain_target=report.mountain_target,
    )
    return report

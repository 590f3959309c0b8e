"""Continent seed placement and multi-source frontier growth.

Continents start as single seed tiles and grow outward together, one
breadth-first frontier shared by every seed. Each candidate tile is scored by
its distance from the seed, the coastline noise and a small random jitter; a
positive score claims it for the continent that reached it first.
"""

import math
from collections import deque
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import WorldProfile
from .exceptions import NoContinentSeedsError
from .hexgrid import in_bounds, neighbors
from .noise import CoastNoise

logger = structlog.get_logger()

OCEAN = -1
LAND = 0
UNCLAIMED = -1

SEED_ATTEMPTS_PER_CONTINENT = 50
MIN_SIZE_WEIGHT = 5
MIN_BASE_SHARE = 10

BASE_COAST_THRESHOLD = 0.48
IRREGULARITY_THRESHOLD_STEP = 0.04
JITTER_SCALE = 0.2


@dataclass(frozen=True)
class ContinentSeed:
    """Origin of one continent."""

    x: int
    y: int
    size_weight: int
    irregularity: int

    @property
    def center(self) -> tuple[int, int]:
        return (self.x, self.y)

    def distance_to(self, x: int, y: int) -> float:
        return math.hypot(self.x - x, self.y - y)


@dataclass
class SeedPlacement:
    """Seeds produced by placement, with the request they answer."""

    seeds: list[ContinentSeed]
    requested: int
    attempts: int

    @property
    def undershot(self) -> bool:
        return len(self.seeds) < self.requested


@dataclass
class GrowthResult:
    """Base elevation and continent ownership after frontier growth."""

    elevation: NDArray[np.int8]
    owner: NDArray[np.int32]
    continent_land: list[int]
    land_count: int
    target_land: int


def land_target(profile: WorldProfile) -> int:
    """Number of land tiles growth aims for (never fewer than one per continent)."""
    return max(profile.continents, profile.target_land_tiles)


def place_seeds(profile: WorldProfile, rng: np.random.Generator) -> SeedPlacement:
    """Place continent seeds by rejection sampling.

    Candidates closer than ``min_distance`` to an already placed seed are
    rejected. Placement gives up after ``continents * 50`` attempts, so fewer
    seeds than requested may come back.

    Args:
        profile: World profile.
        rng: Random number generator for this run.

    Returns:
        SeedPlacement with the accepted seeds.
    """
    seeds: list[ContinentSeed] = []
    max_attempts = profile.continents * SEED_ATTEMPTS_PER_CONTINENT
    attempts = 0

    base_share = max(
        MIN_BASE_SHARE, profile.target_land_tiles // max(1, profile.continents)
    )
    variance = profile.size_variance / 100.0

    while len(seeds) < profile.continents and attempts < max_attempts:
        attempts += 1

        x = int(rng.integers(0, profile.width - 1, endpoint=True))
        y = int(rng.integers(0, profile.height - 1, endpoint=True))

        if any(seed.distance_to(x, y) < profile.min_distance for seed in seeds):
            continue

        rand_factor = 1.0 + (rng.random() * 2.0 - 1.0) * variance
        size_weight = max(MIN_SIZE_WEIGHT, int(base_share * rand_factor))

        seeds.append(ContinentSeed(x, y, size_weight, profile.irregularity))

    if len(seeds) < profile.continents:
        logger.warning(
            "continent_seeds_undershot",
            requested=profile.continents,
            placed=len(seeds),
            min_distance=profile.min_distance,
        )

    logger.info("continent_seeds_placed", count=len(seeds), attempts=attempts)
    for seed in seeds:
        logger.debug(
            "continent_seed", x=seed.x, y=seed.y, size_weight=seed.size_weight
        )

    return SeedPlacement(seeds=seeds, requested=profile.continents, attempts=attempts)


def coast_threshold(irregularity: int) -> float:
    """Noise level a tile must beat to become coast, shifted by irregularity."""
    return BASE_COAST_THRESHOLD + (irregularity - 2) * IRREGULARITY_THRESHOLD_STEP


def desired_shares(
    seeds: list[ContinentSeed],
    target_land: int,
    weighted: bool = False,
) -> list[float]:
    """Fair number of land tiles for each continent.

    By default every continent gets an even share of the target. With
    ``weighted`` the share is proportional to each seed's size weight.
    """
    if not seeds:
        return []

    if weighted:
        total_weight = sum(seed.size_weight for seed in seeds)
        return [target_land * seed.size_weight / total_weight for seed in seeds]

    average = target_land / len(seeds)
    return [average] * len(seeds)


def grow_continents(
    profile: WorldProfile,
    noise: CoastNoise,
    seeds: list[ContinentSeed],
    rng: np.random.Generator,
) -> GrowthResult:
    """Grow all continents at once from their seeds.

    Args:
        profile: World profile.
        noise: Coastline noise field.
        seeds: Placed continent seeds.
        rng: Random number generator for this run.

    Returns:
        GrowthResult whose elevation holds only ocean (-1) and land (0).

    Raises:
        NoContinentSeedsError: If ``seeds`` is empty.
    """
    width, height = profile.width, profile.height
    elevation = np.full((height, width), OCEAN, dtype=np.int8)
    owner = np.full((height, width), UNCLAIMED, dtype=np.int32)

    if not seeds:
        logger.error("continent_growth_without_seeds")
        raise NoContinentSeedsError("No continent seeds placed; cannot grow land")

    target_land = land_target(profile)
    continent_land = [0] * len(seeds)
    frontier: deque[tuple[int, int, int, int]] = deque()

    for index, seed in enumerate(seeds):
        if not in_bounds(seed.x, seed.y, width, height):
            continue
        if owner[seed.y, seed.x] != UNCLAIMED:
            continue

        owner[seed.y, seed.x] = index
        elevation[seed.y, seed.x] = LAND
        continent_land[index] = 1
        frontier.append((seed.x, seed.y, index, 0))

    land_count = sum(continent_land)

    max_distance = max(1, profile.max_distance)
    irregularity = min(5, max(0, profile.irregularity))
    threshold = coast_threshold(irregularity)
    shares = desired_shares(seeds, target_land, weighted=profile.weighted_growth)
    coast = noise.sample(width, height)

    while frontier and land_count < target_land:
        x, y, index, distance = frontier.popleft()
        if distance > max_distance:
            continue

        for nx, ny in neighbors(x, y, width, height):
            if owner[ny, nx] != UNCLAIMED:
                continue

            dist_factor = 1.0 - (distance + 1) / max_distance
            if dist_factor <= 0.0:
                continue

            noise01 = 0.5 * (float(coast[ny, nx]) + 1.0)
            jitter = (rng.random() - 0.5) * JITTER_SCALE * irregularity

            over_ratio = continent_land[index] / max(1.0, shares[index])
            size_factor = 1.0 / over_ratio if over_ratio > 1.0 else 1.0

            score = (dist_factor + (noise01 - threshold) + jitter) * size_factor
            if score <= 0.0:
                continue

            # size_factor is positive, so it only throttles when drawn against
            if profile.weighted_growth and size_factor < 1.0:
                if rng.random() >= size_factor:
                    continue

            owner[ny, nx] = index
            elevation[ny, nx] = LAND
            continent_land[index] += 1
            land_count += 1
            frontier.append((nx, ny, index, distance + 1))

            if land_count >= target_land:
                break

    logger.info(
        "continent_growth_complete",
        land_tiles=land_count,
        target_land=target_land,
        land_fraction=round(land_count / profile.total_tiles, 4),
        frontier_left=len(frontier),
    )

    return GrowthResult(
        elevation=elevation,
        owner=owner,
        continent_land=continent_land,
        land_count=land_count,
        target_land=target_land,
    )

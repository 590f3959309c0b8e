"""Main elevation map generation orchestration."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .coastal import smooth_coastlines
from .config import WorldProfile
from .continents import ContinentSeed, grow_continents, place_seeds
from .exceptions import ConfigurationError, NoContinentSeedsError
from .mountains import MountainReport, generate_mountains
from .noise import CoastNoise

logger = structlog.get_logger()

ELEVATION_NAMES: dict[int, str] = {
    -2: "deep_water",
    -1: "ocean",
    0: "plains",
    1: "foothill",
    2: "ridge",
    3: "peak",
}


class GenerationResult:
    """Elevation grid produced by one run, with seed metadata and diagnostics."""

    def __init__(
        self,
        elevation: NDArray[np.int8],
        profile: WorldProfile,
        seeds: list[ContinentSeed],
        mountains: MountainReport,
        land_fraction_after_growth: float = 0.0,
    ):
        self.elevation = elevation
        self.profile = profile
        self.seeds = seeds
        self.mountains = mountains
        self.land_fraction_after_growth = land_fraction_after_growth
        self.errors: list[str] = []
        self.warnings: list[str] = []

    @property
    def seed(self) -> int:
        return self.profile.seed

    @property
    def width(self) -> int:
        return self.profile.width

    @property
    def height(self) -> int:
        return self.profile.height

    @property
    def seeds_placed(self) -> int:
        return len(self.seeds)

    @property
    def seeds_requested(self) -> int:
        return self.profile.continents

    @property
    def peaks_placed(self) -> int:
        return self.mountains.peaks_placed

    @property
    def passed(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def elevation_at(self, x: int, y: int) -> int:
        """Elevation of the tile at column x, row y."""
        return int(self.elevation[y, x])


def generate_elevation(
    profile: WorldProfile,
    seed: int | None = None,
) -> GenerationResult:
    """Generate a complete elevation map from a profile.

    Args:
        profile: World profile.
        seed: Seed for this run; overrides ``profile.seed`` when given.

    Returns:
        GenerationResult. When no continent seed could be placed the grid is
        all ocean and the result carries an error.

    Raises:
        ConfigurationError: If the grid size is unusable.
    """
    if seed is not None:
        profile = profile.with_seed(seed)

    _check_profile(profile)

    rng = np.random.default_rng(profile.rng_seed)
    width, height = profile.width, profile.height
    log = logger.bind(seed=profile.seed, width=width, height=height)
    log.info("generation_started")

    # Stage A: Continent seeds
    placement = place_seeds(profile, rng)
    noise = CoastNoise.for_seed(profile.noise_seed)

    # Stage B: Frontier growth
    try:
        growth = grow_continents(profile, noise, placement.seeds, rng)
    except NoContinentSeedsError as e:
        result = GenerationResult(
            elevation=np.full((height, width), -1, dtype=np.int8),
            profile=profile,
            seeds=placement.seeds,
            mountains=MountainReport(peaks=[]),
        )
        result.add_error(str(e))
        log.error("generation_failed", reason=str(e))
        return result

    elevation = growth.elevation
    result = GenerationResult(
        elevation=elevation,
        profile=profile,
        seeds=placement.seeds,
        mountains=MountainReport(peaks=[]),
        land_fraction_after_growth=growth.land_count / profile.total_tiles,
    )
    if placement.undershot:
        result.add_warning(
            f"Requested {placement.requested} continents but placed "
            f"{len(placement.seeds)} with min_distance={profile.min_distance}"
        )

    # Stage C: Coastline smoothing
    smooth_coastlines(elevation)

    # Stage D: Mountains
    result.mountains = generate_mountains(profile, rng, elevation)
    if result.mountains.peaks_placed < result.mountains.peaks_requested:
        result.add_warning(
            f"Requested {result.mountains.peaks_requested} tall mountains but "
            f"placed {result.mountains.peaks_placed}"
        )

    _log_elevation_stats(elevation)
    log.info(
        "generation_complete",
        seeds_placed=result.seeds_placed,
        peaks_placed=result.peaks_placed,
        warnings=len(result.warnings),
    )
    return result


def _check_profile(profile: WorldProfile) -> None:
    """Reject profiles whose grid cannot be allocated."""
    if profile.width <= 0 or profile.height <= 0:
        raise ConfigurationError(
            f"Grid size must be positive, got {profile.width}x{profile.height}"
        )


def elevation_stats(elevation: NDArray[np.int8]) -> dict[str, int]:
    """Count tiles at each elevation level.

    Args:
        elevation: Elevation grid.

    Returns:
        Mapping of level name to tile count, ordered from deep water to peaks.
    """
    return {
        name: int(np.count_nonzero(elevation == level))
        for level, name in ELEVATION_NAMES.items()
    }


def _log_elevation_stats(elevation: NDArray[np.int8]) -> None:
    """Log elevation statistics."""
    total = elevation.size
    counts = elevation_stats(elevation)
    land = int(np.count_nonzero(elevation >= 0))

    logger.info(
        "elevation_stats",
        tiles=total,
        land_fraction=round(land / total, 4),
        **counts,
    )

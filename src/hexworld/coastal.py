"""Coastal refinement: cellular-automaton smoothing of land and water."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .hexgrid import count_matching_neighbors

logger = structlog.get_logger()

OCEAN = -1
LAND = 0

# Water with >= this many land neighbors becomes land
POCKET_LAND_NEIGHBORS = 5

# Land with <= this many land neighbors becomes water
SPECK_LAND_NEIGHBORS = 2


def fill_water_pockets(
    elevation: NDArray[np.int8],
    land_threshold: int = POCKET_LAND_NEIGHBORS,
) -> int:
    """Turn water tiles mostly surrounded by land into land.

    Neighbor counts come from the grid as it was before the pass, so the
    result does not depend on scan order.

    Args:
        elevation: Elevation grid, modified in place.
        land_threshold: Minimum land neighbors for a pocket to fill.

    Returns:
        Number of tiles changed.
    """
    land_neighbors = count_matching_neighbors(elevation, LAND)
    pockets = (elevation == OCEAN) & (land_neighbors >= land_threshold)
    elevation[pockets] = LAND
    return int(np.count_nonzero(pockets))


def remove_land_specks(
    elevation: NDArray[np.int8],
    land_threshold: int = SPECK_LAND_NEIGHBORS,
) -> int:
    """Sink land tiles with too few land neighbors.

    Args:
        elevation: Elevation grid, modified in place.
        land_threshold: Land with at most this many land neighbors sinks.

    Returns:
        Number of tiles changed.
    """
    land_neighbors = count_matching_neighbors(elevation, LAND)
    specks = (elevation == LAND) & (land_neighbors <= land_threshold)
    elevation[specks] = OCEAN
    return int(np.count_nonzero(specks))


def smooth_coastlines(elevation: NDArray[np.int8]) -> tuple[int, int]:
    """Fill tiny water holes, then remove tiny land specks.

    Args:
        elevation: Elevation grid holding ocean (-1) and land (0), modified in place.

    Returns:
        Tuple of (pockets filled, specks removed).
    """
    filled = fill_water_pockets(elevation)
    removed = remove_land_specks(elevation)

    logger.info("coastline_smoothed", pockets_filled=filled, specks_removed=removed)
    return filled, removed

"""Hex grid geometry for offset coordinates.

The grid uses "odd-r" offset coordinates: hexes are laid out in rows and every
odd row is shifted half a hex to the right. Adjacency therefore depends on the
parity of the row a tile sits in, so every lookup goes through the offset
table selected by ``y % 2``.

Coordinate system: +X is East, +Y is South. Grids are numpy arrays of shape
``(height, width)`` indexed ``[y, x]``.
"""

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage


class HexDirection(IntEnum):
    """The six hex directions, clockwise starting east."""

    EAST = 0
    SOUTHEAST = 1
    SOUTHWEST = 2
    WEST = 3
    NORTHWEST = 4
    NORTHEAST = 5


# Offsets indexed by HexDirection
EVEN_ROW_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
)

ODD_ROW_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
)

# Opposing direction pairs: E-W, SE-NW, SW-NE
AXES: tuple[tuple[HexDirection, HexDirection], ...] = (
    (HexDirection.EAST, HexDirection.WEST),
    (HexDirection.SOUTHEAST, HexDirection.NORTHWEST),
    (HexDirection.SOUTHWEST, HexDirection.NORTHEAST),
)


def _parity_kernel(offsets: tuple[tuple[int, int], ...]) -> NDArray[np.int32]:
    """Build a 3x3 correlation kernel marking the given (dx, dy) offsets."""
    kernel = np.zeros((3, 3), dtype=np.int32)
    for dx, dy in offsets:
        kernel[dy + 1, dx + 1] = 1
    return kernel


_EVEN_KERNEL = _parity_kernel(EVEN_ROW_OFFSETS)
_ODD_KERNEL = _parity_kernel(ODD_ROW_OFFSETS)


def offsets_for_row(y: int) -> tuple[tuple[int, int], ...]:
    """Return the neighbor offset table for a row."""
    return ODD_ROW_OFFSETS if y & 1 else EVEN_ROW_OFFSETS


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def step(x: int, y: int, direction: HexDirection | int) -> tuple[int, int]:
    """Return the coordinate one hex away in a direction.

    The result may lie outside the grid; callers check bounds.
    """
    dx, dy = offsets_for_row(y)[direction]
    return x + dx, y + dy


def neighbors(x: int, y: int, width: int, height: int) -> list[tuple[int, int]]:
    """Return the in-bounds neighbors of a hex in direction order.

    Args:
        x: Column.
        y: Row.
        width: Grid width.
        height: Grid height.

    Returns:
        Up to six (x, y) coordinates, ordered E, SE, SW, W, NW, NE.
    """
    result = []
    for dx, dy in offsets_for_row(y):
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            result.append((nx, ny))
    return result


def rotate(direction: HexDirection | int, turn: int) -> HexDirection:
    """Turn a direction by ``turn`` sixths of a circle (negative = counterclockwise)."""
    return HexDirection((int(direction) + turn) % 6)


def opposite(direction: HexDirection | int) -> HexDirection:
    return rotate(direction, 3)


def count_matching_neighbors(
    grid: NDArray[np.integer],
    value: int,
) -> NDArray[np.int32]:
    """Count, for every tile, how many of its neighbors equal ``value``.

    Vectorized with one correlation per row parity; neighbors outside the
    grid never match.

    Args:
        grid: 2D array of shape (height, width).
        value: Value to match.

    Returns:
        int32 array of the same shape with counts in [0, 6].
    """
    mask = (grid == value).astype(np.int32)

    even_counts = ndimage.correlate(mask, _EVEN_KERNEL, mode="constant", cval=0)
    odd_counts = ndimage.correlate(mask, _ODD_KERNEL, mode="constant", cval=0)

    counts = even_counts
    counts[1::2, :] = odd_counts[1::2, :]
    return counts

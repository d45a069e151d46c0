"""Classify the four quadrants of an autotile cell from its neighbour mask.

Each cell looks at its 8 neighbours and packs "same autotile here" into one
byte::

    +---+---+---+
    | 1 | 2 | 4 |
    +---+---+---+
    | 8 |   |16 |
    +---+---+---+
    |32 |64 |128|
    +---+---+---+

A quadrant only depends on the two edge neighbours it touches and the
diagonal neighbour between them, which yields five possible shapes.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------


class Direction(IntFlag):
    TOP_LEFT = 1
    TOP = 2
    TOP_RIGHT = 4
    LEFT = 8
    RIGHT = 16
    BOTTOM_LEFT = 32
    BOTTOM = 64
    BOTTOM_RIGHT = 128


class Corner(IntEnum):
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


class CornerShape(IntEnum):
    """How a quadrant renders, named with the top-left corner as reference.

    +-+                      +
    |   INT_CORNER               EXT_CORNER
    +

    +                        +-+
    |   FIRST_SIDE               SECOND_SIDE
    +

        PLAIN (full of texture)
    """

    EXT_CORNER = 0
    INT_CORNER = 1
    FIRST_SIDE = 2
    SECOND_SIDE = 3
    PLAIN = 4


# Directions walked clockwise from the top-left neighbour
DIRECTION_RING: tuple[Direction, ...] = (
    Direction.TOP_LEFT,
    Direction.TOP,
    Direction.TOP_RIGHT,
    Direction.RIGHT,
    Direction.BOTTOM_RIGHT,
    Direction.BOTTOM,
    Direction.BOTTOM_LEFT,
    Direction.LEFT,
)

# Position of each corner's diagonal neighbour in DIRECTION_RING
CORNER_RING_OFFSETS: dict[Corner, int] = {
    Corner.TOP_LEFT: 0,
    Corner.TOP_RIGHT: 2,
    Corner.BOTTOM_RIGHT: 4,
    Corner.BOTTOM_LEFT: 6,
}

MASK_COUNT = 256


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _ring(index: int) -> Direction:
    return DIRECTION_RING[index % len(DIRECTION_RING)]


def classify_corner(corner: Corner, mask: int) -> CornerShape:
    """Return the shape of *corner* for a cell whose neighbours are *mask*."""
    if not 0 <= mask < MASK_COUNT:
        raise ValueError(f"Neighbour mask must be in 0..255, got {mask}")

    offset = CORNER_RING_OFFSETS[Corner(corner)]
    has_before = bool(mask & _ring(offset - 1))
    has_after = bool(mask & _ring(offset + 1))

    if has_before and has_after:
        if mask & _ring(offset):
            return CornerShape.PLAIN
        return CornerShape.EXT_CORNER
    if has_before:
        return CornerShape.SECOND_SIDE
    if has_after:
        return CornerShape.FIRST_SIDE
    return CornerShape.INT_CORNER


def classify_all(mask: int) -> dict[Corner, CornerShape]:
    """Classify every corner of one cell."""
    return {corner: classify_corner(corner, mask) for corner in Corner}


def describe_mask(mask: int) -> str:
    """Human-readable description of a neighbour mask."""
    names = [d.name for d in DIRECTION_RING if mask & d]
    return "+".join(names) if names else "isolated"

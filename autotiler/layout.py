"""Where each corner shape lives on an autotile source sheet.

The source sheet is a 2x3 grid of 32x32 tiles (64x96 pixels). Every
(corner, shape) pair maps to one 16x16 quadrant of that sheet.
"""

from __future__ import annotations

from .corners import Corner, CornerShape

TILE_SIZE = 32
QUADRANT_SIZE = TILE_SIZE // 2

SOURCE_WIDTH = 64
SOURCE_HEIGHT = 96

_Q = QUADRANT_SIZE

# (corner, shape) -> (x, y) origin of the 16x16 source quadrant
SOURCE_OFFSETS: dict[tuple[Corner, CornerShape], tuple[int, int]] = {
    (Corner.TOP_LEFT, CornerShape.EXT_CORNER): (32, 0),
    (Corner.TOP_LEFT, CornerShape.INT_CORNER): (0, 32),
    (Corner.TOP_LEFT, CornerShape.FIRST_SIDE): (0, 64),
    (Corner.TOP_LEFT, CornerShape.SECOND_SIDE): (32, 32),
    (Corner.TOP_LEFT, CornerShape.PLAIN): (32, 64),
    (Corner.TOP_RIGHT, CornerShape.EXT_CORNER): (32 + _Q, 0),
    (Corner.TOP_RIGHT, CornerShape.INT_CORNER): (32 + _Q, 32),
    (Corner.TOP_RIGHT, CornerShape.FIRST_SIDE): (_Q, 32),
    (Corner.TOP_RIGHT, CornerShape.SECOND_SIDE): (32 + _Q, 64),
    (Corner.TOP_RIGHT, CornerShape.PLAIN): (_Q, 64),
    (Corner.BOTTOM_LEFT, CornerShape.EXT_CORNER): (32, _Q),
    (Corner.BOTTOM_LEFT, CornerShape.INT_CORNER): (0, 64 + _Q),
    (Corner.BOTTOM_LEFT, CornerShape.FIRST_SIDE): (32, 64 + _Q),
    (Corner.BOTTOM_LEFT, CornerShape.SECOND_SIDE): (0, 32 + _Q),
    (Corner.BOTTOM_LEFT, CornerShape.PLAIN): (32, 32 + _Q),
    (Corner.BOTTOM_RIGHT, CornerShape.EXT_CORNER): (32 + _Q, _Q),
    (Corner.BOTTOM_RIGHT, CornerShape.INT_CORNER): (32 + _Q, 64 + _Q),
    (Corner.BOTTOM_RIGHT, CornerShape.FIRST_SIDE): (32 + _Q, 32 + _Q),
    (Corner.BOTTOM_RIGHT, CornerShape.SECOND_SIDE): (_Q, 64 + _Q),
    (Corner.BOTTOM_RIGHT, CornerShape.PLAIN): (_Q, 32 + _Q),
}

# Where each corner's quadrant lands inside a 32x32 output tile
DEST_OFFSETS: dict[Corner, tuple[int, int]] = {
    Corner.TOP_LEFT: (0, 0),
    Corner.TOP_RIGHT: (_Q, 0),
    Corner.BOTTOM_RIGHT: (_Q, _Q),
    Corner.BOTTOM_LEFT: (0, _Q),
}


def source_offset(corner: Corner, shape: CornerShape) -> tuple[int, int]:
    return SOURCE_OFFSETS[(Corner(corner), CornerShape(shape))]


def source_box(corner: Corner, shape: CornerShape) -> tuple[int, int, int, int]:
    """Crop box of the source quadrant for a (corner, shape) pair."""
    x, y = source_offset(corner, shape)
    return x, y, x + QUADRANT_SIZE, y + QUADRANT_SIZE

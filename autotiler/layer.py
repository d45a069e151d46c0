"""Packed tile indices and the neighbour-mask pass over a map layer.

A layer is a flat, row-major list of signed integers:

| Range            | Meaning                                   |
|------------------|-------------------------------------------|
| 1 and up         | tile from the tileset                     |
| 0                | empty                                     |
| -1 to -256       | variant of the autotile in slot 0         |
| -257 to -512     | variant of the autotile in slot 1         |
| ...              | ...                                       |

A negative value ``v`` decodes to ``slot = (-v - 1) // 256`` and
``mask = (-v - 1) % 256``. Slot order is owned by the map, see
``registry.AutotileRegistry``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union

from .corners import MASK_COUNT, Direction

# (dx, dy, bit) for the 8 neighbours of a cell
NEIGHBOUR_OFFSETS: tuple[tuple[int, int, Direction], ...] = (
    (-1, -1, Direction.TOP_LEFT),
    (0, -1, Direction.TOP),
    (1, -1, Direction.TOP_RIGHT),
    (-1, 0, Direction.LEFT),
    (1, 0, Direction.RIGHT),
    (-1, 1, Direction.BOTTOM_LEFT),
    (0, 1, Direction.BOTTOM),
    (1, 1, Direction.BOTTOM_RIGHT),
)


class LayerSize(NamedTuple):
    width: int
    height: int


# ---------------------------------------------------------------------------
# Packed index
# ---------------------------------------------------------------------------


def pack_index(slot: int, mask: int) -> int:
    if slot < 0:
        raise ValueError(f"Autotile slot must be >= 0, got {slot}")
    if not 0 <= mask < MASK_COUNT:
        raise ValueError(f"Neighbour mask must be in 0..255, got {mask}")
    return -(slot * MASK_COUNT + mask + 1)


def unpack_index(value: int) -> tuple[int, int]:
    """Return ``(slot, mask)`` for a negative packed index."""
    if value >= 0:
        raise ValueError(f"Not an autotile index: {value}")
    return divmod(-value - 1, MASK_COUNT)


def slot_of(value: int) -> int | None:
    """Autotile slot of a cell value, or None for empty/tileset cells."""
    if value >= 0:
        return None
    return (-value - 1) // MASK_COUNT


def belongs_to_slot(value: int | None, slot: int) -> bool:
    if value is None:
        return False
    return slot_of(value) == slot


def pending_sentinel(slot: int) -> int:
    """Value callers write into a cell to mark it for encoding."""
    return pack_index(slot, 0)


def slot_range(slot: int) -> tuple[int, int]:
    """Inclusive ``(lowest, highest)`` packed values owned by *slot*."""
    return pack_index(slot, MASK_COUNT - 1), pack_index(slot, 0)


# ---------------------------------------------------------------------------
# Layer access
# ---------------------------------------------------------------------------


def check_layer(layer: list, size: LayerSize) -> None:
    expected = size.width * size.height
    if size.width < 0 or size.height < 0:
        raise ValueError(f"Layer size must not be negative, got {tuple(size)}")
    if len(layer) != expected:
        raise ValueError(
            f"Layer has {len(layer)} cells, expected "
            f"{size.width}x{size.height} = {expected}"
        )


def cell_at(layer: list, size: LayerSize, x: int, y: int):
    """Cell at (x, y), or None when outside the layer."""
    if x < 0 or y < 0 or x >= size.width or y >= size.height:
        return None
    return layer[y * size.width + x]


def neighbour_mask(layer: list, size: LayerSize, x: int, y: int, member) -> int:
    """Bitmask of the neighbours of (x, y) for which ``member(cell)`` holds."""
    mask = 0
    for dx, dy, bit in NEIGHBOUR_OFFSETS:
        cell = cell_at(layer, size, x + dx, y + dy)
        if cell is not None and member(cell):
            mask |= bit
    return int(mask)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_autotile_slot(layer: list[int], size: LayerSize, slot: int) -> None:
    """Rewrite every cell of *slot* with its packed neighbour variant.

    Every negative cell that decodes to *slot* is treated as a member,
    whatever mask it already carries. Running the pass again therefore
    recomputes masks from the current layer instead of skipping cells that
    were resolved earlier.
    """
    check_layer(layer, size)

    def member(cell: int) -> bool:
        return belongs_to_slot(cell, slot)

    for y in range(size.height):
        for x in range(size.width):
            if not member(layer[y * size.width + x]):
                continue
            mask = neighbour_mask(layer, size, x, y, member)
            layer[y * size.width + x] = pack_index(slot, mask)


def encode_layer(layer: list[int], size: LayerSize, slot_count: int) -> None:
    """Encode every autotile slot of a layer, lowest slot first."""
    for slot in range(slot_count):
        encode_autotile_slot(layer, size, slot)


# ---------------------------------------------------------------------------
# Tagged cells
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Tileset:
    index: int


@dataclass(frozen=True)
class AutotilePending:
    slot: int


@dataclass(frozen=True)
class AutotileResolved:
    slot: int
    mask: int


Cell = Union[Empty, Tileset, AutotilePending, AutotileResolved]

EMPTY = Empty()


def _cell_slot(cell: Cell) -> int | None:
    if isinstance(cell, (AutotilePending, AutotileResolved)):
        return cell.slot
    return None


def cell_to_int(cell: Cell) -> int:
    """Packed integer form of a tagged cell.

    Pending cells pack as their slot sentinel, which is the same value as a
    resolved isolated cell.
    """
    if isinstance(cell, Empty):
        return 0
    if isinstance(cell, Tileset):
        if cell.index <= 0:
            raise ValueError(f"Tileset index must be > 0, got {cell.index}")
        return cell.index
    if isinstance(cell, AutotilePending):
        return pending_sentinel(cell.slot)
    if isinstance(cell, AutotileResolved):
        return pack_index(cell.slot, cell.mask)
    raise TypeError(f"Unknown cell type: {cell!r}")


def to_cells(layer: list[int], pending: bool = True) -> list[Cell]:
    """Decode an integer layer.

    With ``pending=True`` every autotile cell becomes ``AutotilePending``
    (the integer form cannot tell a sentinel from an isolated variant);
    otherwise the stored masks are kept as ``AutotileResolved``.
    """
    cells: list[Cell] = []
    for value in layer:
        if value == 0:
            cells.append(EMPTY)
        elif value > 0:
            cells.append(Tileset(value))
        else:
            slot, mask = unpack_index(value)
            if pending:
                cells.append(AutotilePending(slot))
            else:
                cells.append(AutotileResolved(slot, mask))
    return cells


def from_cells(cells: list[Cell]) -> list[int]:
    return [cell_to_int(cell) for cell in cells]


def resolve_cells(cells: list[Cell], size: LayerSize) -> list[Cell]:
    """Return a copy of *cells* with every pending cell resolved.

    Membership compares slots only, so pending and resolved neighbours count
    alike. Already resolved cells are left untouched, making this safe to run
    more than once.
    """
    check_layer(cells, size)
    out = list(cells)

    for y in range(size.height):
        for x in range(size.width):
            cell = cells[y * size.width + x]
            if not isinstance(cell, AutotilePending):
                continue
            slot = cell.slot
            mask = neighbour_mask(
                cells, size, x, y, lambda other: _cell_slot(other) == slot
            )
            out[y * size.width + x] = AutotileResolved(slot, mask)

    return out

"""Ordered set of autotiles attached to one map."""

from __future__ import annotations

from PIL import Image

from .autotile import Autotile
from .layer import LayerSize, check_layer, encode_layer, unpack_index
from .layout import TILE_SIZE


class AutotileRegistry:
    """Autotiles in slot order.

    The slot of an autotile is its position in this registry and is baked
    into every encoded layer, so autotiles can only be appended.
    """

    def __init__(self, autotiles: list[Autotile] | None = None) -> None:
        self._autotiles: list[Autotile] = []
        for autotile in autotiles or []:
            self.add(autotile)

    def __len__(self) -> int:
        return len(self._autotiles)

    def __iter__(self):
        return iter(self._autotiles)

    def __getitem__(self, slot: int) -> Autotile:
        if not 0 <= slot < len(self._autotiles):
            raise IndexError(
                f"No autotile in slot {slot} ({len(self._autotiles)} registered)"
            )
        return self._autotiles[slot]

    def add(self, autotile: Autotile) -> int:
        """Append an autotile and return its slot."""
        if any(a.name == autotile.name for a in self._autotiles):
            raise ValueError(f"Autotile {autotile.name!r} is already registered")
        self._autotiles.append(autotile)
        return len(self._autotiles) - 1

    def slot(self, name: str) -> int:
        for slot, autotile in enumerate(self._autotiles):
            if autotile.name == name:
                return slot
        raise KeyError(f"Unknown autotile: {name!r}")

    def compile_all(self) -> None:
        for autotile in self._autotiles:
            if not autotile.compiled:
                autotile.compile()

    def encode(self, layer: list[int], size: LayerSize) -> None:
        """Encode every registered slot of *layer* in place."""
        encode_layer(layer, size, len(self._autotiles))

    def draw_cell(self, dest: Image.Image, value: int, x: int, y: int) -> bool:
        """Draw an encoded autotile cell; returns False for other cells."""
        if value >= 0:
            return False
        slot, mask = unpack_index(value)
        self[slot].draw_tile(dest, mask, x, y)
        return True


def render_layer(
    layer: list[int],
    size: LayerSize,
    registry: AutotileRegistry,
) -> Image.Image:
    """Render the autotile cells of an encoded layer onto a new RGBA image."""
    check_layer(layer, size)
    out = Image.new(
        "RGBA", (size.width * TILE_SIZE, size.height * TILE_SIZE), (0, 0, 0, 0)
    )

    for y in range(size.height):
        for x in range(size.width):
            registry.draw_cell(
                out, layer[y * size.width + x], x * TILE_SIZE, y * TILE_SIZE
            )

    return out

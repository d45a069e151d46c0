"""Compile an autotile source sheet into a strip of 256 neighbour variants.

The output strip is 32 pixels wide and 256 tiles tall; variant ``mask`` sits
at ``y = mask * 32``.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .corners import MASK_COUNT, Corner, classify_corner
from .layout import (
    DEST_OFFSETS,
    SOURCE_HEIGHT,
    SOURCE_WIDTH,
    TILE_SIZE,
    source_box,
)

VARIANT_COUNT = MASK_COUNT
STRIP_SIZE = (TILE_SIZE, TILE_SIZE * VARIANT_COUNT)


class MalformedAutotileError(ValueError):
    """Source sheet too small to hold every corner quadrant."""


class VariantOutOfRangeError(IndexError):
    """Variant index outside 0..255."""


def check_source_size(image: Image.Image, label: str = "source") -> None:
    w, h = image.size
    if w < SOURCE_WIDTH or h < SOURCE_HEIGHT:
        raise MalformedAutotileError(
            f"Autotile {label} is {w}x{h}, "
            f"expected at least {SOURCE_WIDTH}x{SOURCE_HEIGHT}"
        )


def check_variant(variant: int) -> None:
    if not 0 <= variant < VARIANT_COUNT:
        raise VariantOutOfRangeError(
            f"Variant must be in 0..{VARIANT_COUNT - 1}, got {variant}"
        )


class Autotile:
    """One autotile asset and its compiled variant strip."""

    def __init__(
        self,
        image: Image.Image,
        name: str,
        id: str | None = None,
        src: str | None = None,
        padding: int | None = None,
    ) -> None:
        self.name = name
        self.id = id
        self.src = src
        self.padding = padding

        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.surface = Image.new("RGBA", STRIP_SIZE, (0, 0, 0, 0))
        self.compiled = False

    @classmethod
    def open(
        cls,
        path: Path,
        name: str | None = None,
        id: str | None = None,
        padding: int | None = None,
    ) -> Autotile:
        """Load a source sheet from disk."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Autotile source not found: {path}")

        img = Image.open(path)
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        img.load()  # read pixels into memory, release file handle

        return cls(img, name or path.stem, id=id, src=str(path), padding=padding)

    def __repr__(self) -> str:
        state = "compiled" if self.compiled else "pending"
        return f"<Autotile {self.name!r} {state}>"

    def compile(self) -> None:
        """Render all 256 variants into the output strip."""
        check_source_size(self.image, repr(self.name))

        for mask in range(VARIANT_COUNT):
            top = mask * TILE_SIZE
            for corner in Corner:
                shape = classify_corner(corner, mask)
                quadrant = self.image.crop(source_box(corner, shape))
                dx, dy = DEST_OFFSETS[corner]
                self.surface.paste(quadrant, (dx, top + dy))

        self.compiled = True

    def variant_box(self, variant: int) -> tuple[int, int, int, int]:
        check_variant(variant)
        top = variant * TILE_SIZE
        return 0, top, TILE_SIZE, top + TILE_SIZE

    def variant(self, variant: int) -> Image.Image:
        """Return one compiled variant as a standalone 32x32 image."""
        if not self.compiled:
            raise RuntimeError(f"Autotile {self.name!r} has not been compiled")
        return self.surface.crop(self.variant_box(variant))

    def draw_tile(self, dest: Image.Image, variant: int, x: int, y: int) -> None:
        """Blit one variant onto *dest* with its top-left corner at (x, y)."""
        tile = self.variant(variant)
        dest.paste(tile, (x, y), tile)

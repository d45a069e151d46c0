"""Generate a placeholder autotile source sheet.

Output is a 64x96 sheet (2x3 tiles of 32x32). Every 16x16 quadrant gets its
own base colour with a little speckle so each compiled variant shows which
quadrants it was built from.
"""

from __future__ import annotations

import random

from PIL import Image, ImageDraw

from .layout import QUADRANT_SIZE, SOURCE_HEIGHT, SOURCE_WIDTH

# ── Palette ───────────────────────────────────────────────
# one hue per 32x32 source tile, row-major
TILE_HUES = [
    (58, 125, 44),
    (139, 105, 20),
    (107, 107, 107),
    (52, 90, 160),
    (150, 60, 60),
    (120, 70, 150),
]
SPECKLE_COUNT = 12


def _shade(color: tuple[int, int, int], amount: int) -> tuple[int, int, int, int]:
    r, g, b = (max(0, min(255, c + amount)) for c in color)
    return (r, g, b, 255)


def quadrant_color(qx: int, qy: int) -> tuple[int, int, int, int]:
    """Base colour of the quadrant at grid position (qx, qy)."""
    hue = TILE_HUES[(qy // 2) * 2 + qx // 2]
    return _shade(hue, 24 * (qx % 2) + 48 * (qy % 2))


def generate_placeholder_sheet(seed: int = 42) -> Image.Image:
    rng = random.Random(seed)
    sheet = Image.new("RGBA", (SOURCE_WIDTH, SOURCE_HEIGHT), (0, 0, 0, 0))
    draw = ImageDraw.Draw(sheet)
    px = sheet.load()

    for qy in range(SOURCE_HEIGHT // QUADRANT_SIZE):
        for qx in range(SOURCE_WIDTH // QUADRANT_SIZE):
            ox, oy = qx * QUADRANT_SIZE, qy * QUADRANT_SIZE
            base = quadrant_color(qx, qy)
            draw.rectangle(
                [ox, oy, ox + QUADRANT_SIZE - 1, oy + QUADRANT_SIZE - 1], fill=base
            )

            # Speckles keep neighbouring quadrants distinguishable up close
            for _ in range(SPECKLE_COUNT):
                x = ox + rng.randint(0, QUADRANT_SIZE - 1)
                y = oy + rng.randint(0, QUADRANT_SIZE - 1)
                px[x, y] = _shade(base[:3], rng.choice([-30, -15, 15, 30]))

    return sheet

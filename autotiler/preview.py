"""Enlarged, labelled overview of every compiled variant."""

from __future__ import annotations

from PIL import Image, ImageDraw

from .autotile import VARIANT_COUNT, Autotile
from .layout import TILE_SIZE


def generate_preview(autotile: Autotile, scale: int = 2, cols: int = 16) -> Image.Image:
    """Grid of all 256 variants, each scaled up and labelled with its mask."""
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    if cols < 1:
        raise ValueError(f"cols must be >= 1, got {cols}")

    ts = TILE_SIZE * scale
    n_rows = (VARIANT_COUNT + cols - 1) // cols

    cell_w = ts + 4
    cell_h = ts + 14
    margin = 8

    pw = cols * cell_w + margin * 2
    ph = n_rows * cell_h + margin * 2
    preview = Image.new("RGBA", (pw, ph), (32, 32, 40, 255))
    draw = ImageDraw.Draw(preview)

    for mask in range(VARIANT_COUNT):
        c, r = mask % cols, mask // cols
        x = margin + c * cell_w + 2
        y = margin + r * cell_h + 2

        scaled = autotile.variant(mask).resize((ts, ts), Image.Resampling.NEAREST)
        preview.paste(scaled, (x, y), scaled)

        draw.rectangle(
            [x - 1, y - 1, x + ts, y + ts],
            outline=(80, 80, 100, 180),
        )
        draw.text((x + 1, y + ts + 1), str(mask), fill=(200, 200, 220, 255))

    return preview

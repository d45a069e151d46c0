import pytest
from PIL import Image

from autotiler.autotile import (
    STRIP_SIZE,
    Autotile,
    MalformedAutotileError,
    VariantOutOfRangeError,
)
from autotiler.corners import Corner, classify_corner
from autotiler.layout import DEST_OFFSETS, QUADRANT_SIZE, source_box
from autotiler.preview import generate_preview


def quadrant(img: Image.Image, x: int, y: int) -> bytes:
    return img.crop((x, y, x + QUADRANT_SIZE, y + QUADRANT_SIZE)).tobytes()


def test_compile_fills_strip(autotile: Autotile):
    assert autotile.compiled
    assert autotile.surface.size == STRIP_SIZE == (32, 8192)
    assert autotile.surface.getchannel("A").getextrema() == (255, 255)


@pytest.mark.parametrize("mask", [0, 1, 22, 85, 170, 208, 255])
def test_variant_is_built_from_classified_quadrants(autotile: Autotile, mask: int):
    tile = autotile.variant(mask)
    for corner in Corner:
        shape = classify_corner(corner, mask)
        expected = autotile.image.crop(source_box(corner, shape)).tobytes()
        assert quadrant(tile, *DEST_OFFSETS[corner]) == expected


def test_every_variant_addressable(autotile: Autotile):
    for mask in range(256):
        tile = autotile.variant(mask)
        region = autotile.surface.crop((0, mask * 32, 32, mask * 32 + 32))
        assert tile.size == (32, 32)
        assert tile.tobytes() == region.tobytes()


def test_variants_dedupe_to_blob_set(autotile: Autotile):
    unique = {autotile.variant(mask).tobytes() for mask in range(256)}
    assert len(unique) == 47


def test_isolated_variant_uses_int_corners(autotile: Autotile, sheet: Image.Image):
    tile = autotile.variant(0)
    assert quadrant(tile, 0, 0) == quadrant(sheet, 0, 32)
    assert quadrant(tile, 16, 0) == quadrant(sheet, 48, 32)
    assert quadrant(tile, 0, 16) == quadrant(sheet, 0, 80)
    assert quadrant(tile, 16, 16) == quadrant(sheet, 48, 80)


def test_draw_tile(autotile: Autotile):
    dest = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    autotile.draw_tile(dest, 208, 32, 32)

    assert dest.crop((32, 32, 64, 64)).tobytes() == autotile.variant(208).tobytes()
    assert dest.crop((0, 0, 32, 32)).getbbox() is None


@pytest.mark.parametrize("variant", [-1, 256, 4096])
def test_draw_tile_rejects_out_of_range(autotile: Autotile, variant: int):
    dest = Image.new("RGBA", (32, 32))
    with pytest.raises(VariantOutOfRangeError):
        autotile.draw_tile(dest, variant, 0, 0)
    with pytest.raises(IndexError):
        autotile.variant(variant)


def test_draw_before_compile(sheet: Image.Image):
    at = Autotile(sheet, "raw")
    with pytest.raises(RuntimeError):
        at.draw_tile(Image.new("RGBA", (32, 32)), 0, 0, 0)


@pytest.mark.parametrize("size", [(32, 32), (64, 80), (48, 96)])
def test_malformed_source(size: tuple[int, int]):
    at = Autotile(Image.new("RGBA", size, (255, 0, 0, 255)), "tiny")
    with pytest.raises(MalformedAutotileError):
        at.compile()
    assert not at.compiled
    assert at.surface.getbbox() is None


def test_rgb_source_is_converted(sheet: Image.Image):
    at = Autotile(sheet.convert("RGB"), "rgb", padding=2)
    assert at.image.mode == "RGBA"
    assert at.padding == 2
    at.compile()
    assert at.variant(255).getchannel("A").getextrema() == (255, 255)


def test_open(tmp_path, sheet: Image.Image):
    path = tmp_path / "water.png"
    sheet.save(path)

    at = Autotile.open(path, id="w")
    assert at.name == "water"
    assert at.id == "w"
    assert at.src == str(path)
    assert at.image.tobytes() == sheet.tobytes()


def test_open_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Autotile.open(tmp_path / "nope.png")


def test_preview(autotile: Autotile):
    preview = generate_preview(autotile, scale=1)
    assert preview.size == (16 * 36 + 16, 16 * 46 + 16)


def test_preview_rejects_bad_scale(autotile: Autotile):
    with pytest.raises(ValueError):
        generate_preview(autotile, scale=0)

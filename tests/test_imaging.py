from pathlib import Path
import sys

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1] / "gba_graphix/src"))

from gba_graphix import (
    ImageOptions,
    InvalidDimensionsError,
    RasterImage,
    TileBuffer,
    UnsupportedDepthError,
    UnsupportedPaletteSizeError,
    colors_from_image,
    convert_image,
    draw,
    encode_tiles,
    image_to_raster,
    raster_to_image,
)

RED_RAMP = [(i * 8, 0, 0) for i in range(16)]


def _checker_raster() -> RasterImage:
    pixels = [((x // 2) + y) % 16 for y in range(16) for x in range(16)]
    return RasterImage(16, 16, 4, pixels)


def test_draw_renders_indices_and_palette() -> None:
    buffer = TileBuffer(bytes([0x10]) + bytes(31), 4)

    image = draw(buffer, 1, RED_RAMP)

    assert image.mode == "P"
    assert image.size == (8, 8)
    assert image.getpixel((0, 0)) == 0
    assert image.getpixel((1, 0)) == 1
    assert image.convert("RGB").getpixel((1, 0)) == (8, 0, 0)


def test_raster_to_image_needs_full_palette() -> None:
    with pytest.raises(UnsupportedPaletteSizeError):
        raster_to_image(_checker_raster(), RED_RAMP[:8])
    with pytest.raises(UnsupportedPaletteSizeError):
        raster_to_image(RasterImage(8, 8, 8, bytes(64)), RED_RAMP)


def test_image_round_trip() -> None:
    raster = _checker_raster()
    image = raster_to_image(raster, RED_RAMP)

    assert image_to_raster(image, 4) == raster


def test_depth_is_inferred_from_palette_size() -> None:
    small = raster_to_image(_checker_raster(), RED_RAMP)
    large = raster_to_image(RasterImage(8, 8, 8, bytes(64)), [(i, i, i) for i in range(256)])

    assert image_to_raster(small).bits_per_pixel == 4
    assert image_to_raster(large).bits_per_pixel == 8


def test_image_to_raster_rejects_bad_input() -> None:
    with pytest.raises(UnsupportedDepthError):
        image_to_raster(Image.new("RGB", (8, 8)))
    with pytest.raises(InvalidDimensionsError):
        image_to_raster(Image.new("P", (10, 8)), 8)


def test_colors_from_image_pads_with_black() -> None:
    image = Image.new("P", (8, 8))
    image.putpalette([255, 0, 0, 0, 255, 0, 0, 0, 255, 255, 255, 255])

    colors = colors_from_image(image, 16)

    assert len(colors) == 16
    assert colors[:4] == [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)]
    assert colors[4:] == [(0, 0, 0)] * 12


def test_colors_from_image_truncates_with_warning() -> None:
    image = raster_to_image(RasterImage(8, 8, 8, bytes(64)), [(i, i, i) for i in range(256)])

    with pytest.warns(RuntimeWarning):
        colors = colors_from_image(image, 16)

    assert colors == [(i, i, i) for i in range(16)]

    with pytest.raises(UnsupportedPaletteSizeError):
        colors_from_image(image, 32)


def test_convert_image_produces_rom_buffers() -> None:
    raster = _checker_raster()
    colors = [(i * 16, 240 - i * 16, 8) for i in range(16)]
    image = raster_to_image(raster, colors)

    tiles, palette = convert_image(image, ImageOptions(bits_per_pixel=4, compressed=True))

    assert tiles.data == encode_tiles(raster).data
    assert tiles.tile_count == 4
    assert tiles.compressed
    assert palette.compressed
    assert palette.to_colors() == colors

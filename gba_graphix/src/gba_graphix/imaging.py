"""Pillow adapter for editing GBA graphics as ordinary indexed images.

Decoded rasters become palette ("P" mode) images whose palette holds the
decoded colors, so they can be saved as PNG and touched up in any editor.
Edited images are converted back by reading their pixel indices and palette
directly; no quantization or color matching is performed.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Sequence, Tuple

from PIL import Image

from .errors import InvalidDimensionsError, UnsupportedDepthError, UnsupportedPaletteSizeError
from .palette import PALETTE_SIZES, ColorTable, PackedPalette, encode_palette
from .tiles import TILE_SIZE, RasterImage, TileBuffer, bytes_per_tile, decode_tiles, encode_tiles


@dataclass
class ImageOptions:
    """Options for converting a Pillow image into ROM buffers."""

    bits_per_pixel: int | None = None  # None: 4bpp when the palette has <= 16 colors
    compressed: bool = False


def raster_to_image(raster: RasterImage, colors: Sequence[Sequence[int]]) -> Image.Image:
    needed = 1 << raster.bits_per_pixel
    if len(colors) < needed:
        raise UnsupportedPaletteSizeError(
            f"A {raster.bits_per_pixel}bpp image needs {needed} colors, got {len(colors)}"
        )
    image = Image.frombytes("P", (raster.width, raster.height), raster.pixels)
    image.putpalette([component for color in colors[:needed] for component in color])
    return image


def draw(buffer: TileBuffer, tiles_per_row: int, colors: Sequence[Sequence[int]]) -> Image.Image:
    """Decode ``buffer`` and render it with ``colors``.

    ``tiles_per_row`` is the image width in tiles (``width // 8``).
    """

    return raster_to_image(decode_tiles(buffer, tiles_per_row), colors)


def _palette_colors(image: Image.Image) -> ColorTable:
    flat = image.getpalette() or []
    return [
        (flat[i], flat[i + 1], flat[i + 2]) for i in range(0, len(flat) - len(flat) % 3, 3)
    ]


def _infer_depth(image: Image.Image) -> int:
    return 4 if len(_palette_colors(image)) <= PALETTE_SIZES[0] else 8


def image_to_raster(image: Image.Image, bits_per_pixel: int | None = None) -> RasterImage:
    if image.mode != "P":
        raise UnsupportedDepthError(
            f"Expected a palette ('P' mode) image, got mode {image.mode!r}"
        )
    depth = bits_per_pixel if bits_per_pixel is not None else _infer_depth(image)
    bytes_per_tile(depth)

    width, height = image.size
    if width % TILE_SIZE or height % TILE_SIZE:
        raise InvalidDimensionsError(
            f"Image size {width}x{height} is not a multiple of {TILE_SIZE}"
        )
    return RasterImage(width, height, depth, image.tobytes())


def colors_from_image(image: Image.Image, entry_count: int) -> ColorTable:
    """Return the image palette resized to ``entry_count`` colors.

    Short palettes are padded with black; longer ones are truncated with a
    warning.
    """

    if entry_count not in PALETTE_SIZES:
        raise UnsupportedPaletteSizeError(
            f"Palettes must hold 16 or 256 colors, got {entry_count}"
        )
    colors = _palette_colors(image)
    if len(colors) > entry_count:
        warnings.warn(
            f"Image palette has {len(colors)} colors; keeping the first {entry_count}",
            RuntimeWarning,
            stacklevel=2,
        )
        colors = colors[:entry_count]
    colors.extend([(0, 0, 0)] * (entry_count - len(colors)))
    return colors


def convert_image(
    image: Image.Image, options: ImageOptions | None = None
) -> Tuple[TileBuffer, PackedPalette]:
    """Convert an indexed image into tile data plus its packed palette."""

    options = options or ImageOptions()
    raster = image_to_raster(image, options.bits_per_pixel)
    colors = colors_from_image(image, 1 << raster.bits_per_pixel)
    return (
        encode_tiles(raster, options.compressed),
        encode_palette(colors, options.compressed),
    )

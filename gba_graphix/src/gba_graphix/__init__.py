"""GBA tile graphics and palette codecs.

Converts 4bpp/8bpp tile-ordered character data into linear indexed rasters
and back, and 15-bit packed palettes into 24-bit RGB color tables and back.
Compressed payloads are routed through a caller-supplied compressor.
"""

from .errors import (
    ColorOutOfRangeError,
    CompressionError,
    GraphixError,
    InvalidDimensionsError,
    MalformedBufferError,
    PixelIndexOutOfRangeError,
    UnsupportedDepthError,
    UnsupportedPaletteSizeError,
)
from .imaging import (
    ImageOptions,
    colors_from_image,
    convert_image,
    draw,
    image_to_raster,
    raster_to_image,
)
from .palette import (
    Color,
    ColorTable,
    PackedPalette,
    decode_palette,
    encode_palette,
    pack_color,
    read_palette,
    unpack_color,
)
from .payload import Compressor, RomReader
from .tiles import (
    RasterImage,
    TileBuffer,
    bytes_per_tile,
    decode_tiles,
    encode_tiles,
    read_tiles,
)

__all__ = [
    "Color",
    "ColorOutOfRangeError",
    "ColorTable",
    "CompressionError",
    "Compressor",
    "GraphixError",
    "ImageOptions",
    "InvalidDimensionsError",
    "MalformedBufferError",
    "PackedPalette",
    "PixelIndexOutOfRangeError",
    "RasterImage",
    "RomReader",
    "TileBuffer",
    "UnsupportedDepthError",
    "UnsupportedPaletteSizeError",
    "bytes_per_tile",
    "colors_from_image",
    "convert_image",
    "decode_palette",
    "decode_tiles",
    "draw",
    "encode_palette",
    "encode_tiles",
    "image_to_raster",
    "pack_color",
    "raster_to_image",
    "read_palette",
    "read_tiles",
    "unpack_color",
]

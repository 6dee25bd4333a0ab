"""Tile-ordered character data <-> linear indexed raster."""

# Reference: GBA character (tile) data
# Depth | Bytes per tile | Byte layout
# ------|----------------|-----------------------------------------------------
# 4bpp  | 32             | 2 pixels per byte; low nibble = left, high = right
# 8bpp  | 64             | 1 pixel per byte
#
# Each 8x8 tile is stored row-major. Tiles are placed on the raster left to
# right, then top to bottom. Grid cells past the last tile decode as index 0.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import (
    InvalidDimensionsError,
    MalformedBufferError,
    PixelIndexOutOfRangeError,
    UnsupportedDepthError,
)
from .payload import Compressor, RomReader, load, materialize, read_payload

TILE_SIZE = 8
BYTES_PER_TILE: Dict[int, int] = {4: 32, 8: 64}


def bytes_per_tile(bits_per_pixel: int) -> int:
    try:
        return BYTES_PER_TILE[bits_per_pixel]
    except KeyError as exc:
        raise UnsupportedDepthError(
            f"Unsupported pixel depth: {bits_per_pixel} (expected 4 or 8)"
        ) from exc


@dataclass(frozen=True)
class RasterImage:
    """Row-major palette indices, one byte per pixel at either depth."""

    width: int
    height: int
    bits_per_pixel: int
    pixels: bytes

    def __post_init__(self) -> None:
        bytes_per_tile(self.bits_per_pixel)
        if self.width < 0 or self.height < 0:
            raise InvalidDimensionsError(
                f"Raster size must not be negative: {self.width}x{self.height}"
            )
        if isinstance(self.pixels, int):
            raise TypeError("Pixels must be a sequence of palette indices, not an int")
        try:
            pixels = bytes(self.pixels)
        except ValueError as exc:
            raise PixelIndexOutOfRangeError(
                "Pixel indices must be between 0 and 255"
            ) from exc
        if len(pixels) != self.width * self.height:
            raise InvalidDimensionsError(
                f"{len(pixels)} pixels do not fill a {self.width}x{self.height} raster"
            )
        object.__setattr__(self, "pixels", pixels)

    @property
    def tile_columns(self) -> int:
        return self.width // TILE_SIZE

    @property
    def tile_rows(self) -> int:
        return self.height // TILE_SIZE

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} raster")
        return self.pixels[y * self.width + x]


@dataclass(frozen=True)
class TileBuffer:
    """Character data exactly as laid out in the ROM (after decompression)."""

    data: bytes
    bits_per_pixel: int
    compressed: bool = False

    def __post_init__(self) -> None:
        bytes_per_tile(self.bits_per_pixel)
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def bytes_per_tile(self) -> int:
        return BYTES_PER_TILE[self.bits_per_pixel]

    @property
    def tile_count(self) -> int:
        size, remainder = divmod(len(self.data), self.bytes_per_tile)
        if remainder:
            raise MalformedBufferError(
                f"{len(self.data)} bytes is not a whole number of "
                f"{self.bits_per_pixel}bpp tiles ({self.bytes_per_tile} bytes each)"
            )
        return size

    def decode(self, tiles_per_row: int) -> RasterImage:
        return decode_tiles(self, tiles_per_row)

    def to_bytes(self, compressor: Compressor | None = None) -> bytes:
        """Return the ROM representation, compressed if ``compressed`` is set."""

        return materialize(self.data, self.compressed, compressor)

    @classmethod
    def from_raster(cls, raster: RasterImage, compressed: bool = False) -> "TileBuffer":
        return encode_tiles(raster, compressed)

    @classmethod
    def from_source(
        cls,
        source: bytes,
        bits_per_pixel: int,
        compressed: bool = False,
        compressor: Compressor | None = None,
        offset: int = 0,
        tile_count: int | None = None,
    ) -> "TileBuffer":
        """Build a buffer from raw bytes, decompressing them when flagged.

        ``tile_count`` bounds an uncompressed read and must match the decoded
        length of a compressed one.
        """

        length = None if tile_count is None else tile_count * bytes_per_tile(bits_per_pixel)
        data = load(source, offset, length, compressed, compressor)
        if length is not None:
            _check_declared_length(data, length, bits_per_pixel)
        return cls(data, bits_per_pixel, compressed)


def _check_declared_length(data: bytes, length: int, bits_per_pixel: int) -> None:
    if len(data) != length:
        raise MalformedBufferError(
            f"Expected {length // BYTES_PER_TILE[bits_per_pixel]} {bits_per_pixel}bpp tiles "
            f"({length} bytes), got {len(data)} bytes"
        )


def _unpack_row(row: bytes, bits_per_pixel: int) -> bytes:
    if bits_per_pixel == 8:
        return row
    out = bytearray()
    for value in row:
        out.append(value & 0x0F)
        out.append((value & 0xF0) >> 4)
    return bytes(out)


def _pack_row(row: bytes, bits_per_pixel: int) -> bytes:
    if bits_per_pixel == 8:
        return row
    return bytes(row[x] | (row[x + 1] << 4) for x in range(0, len(row), 2))


def decode_tiles(buffer: TileBuffer, tiles_per_row: int) -> RasterImage:
    """Lay the tiles of ``buffer`` out on a raster ``tiles_per_row`` tiles wide."""

    if tiles_per_row < 1:
        raise InvalidDimensionsError(f"tiles_per_row must be at least 1, got {tiles_per_row}")

    tile_count = buffer.tile_count
    tile_rows = (tile_count + tiles_per_row - 1) // tiles_per_row
    width = tiles_per_row * TILE_SIZE
    height = tile_rows * TILE_SIZE
    row_bytes = buffer.bytes_per_tile // TILE_SIZE
    pixels = bytearray(width * height)

    for tile in range(tile_count):
        ty, tx = divmod(tile, tiles_per_row)
        base = tile * buffer.bytes_per_tile
        for ry in range(TILE_SIZE):
            start = base + ry * row_bytes
            offset = (ty * TILE_SIZE + ry) * width + tx * TILE_SIZE
            pixels[offset : offset + TILE_SIZE] = _unpack_row(
                buffer.data[start : start + row_bytes], buffer.bits_per_pixel
            )

    return RasterImage(width, height, buffer.bits_per_pixel, bytes(pixels))


def encode_tiles(raster: RasterImage, compressed: bool = False) -> TileBuffer:
    """Pack ``raster`` back into tile order. Inverse of :func:`decode_tiles`."""

    if raster.width % TILE_SIZE or raster.height % TILE_SIZE:
        raise InvalidDimensionsError(
            f"Raster size {raster.width}x{raster.height} is not a multiple of {TILE_SIZE}"
        )

    limit = 1 << raster.bits_per_pixel
    for index, value in enumerate(raster.pixels):
        if value >= limit:
            y, x = divmod(index, raster.width)
            raise PixelIndexOutOfRangeError(
                f"Pixel ({x}, {y}) has index {value}, "
                f"beyond the {limit} colors of a {raster.bits_per_pixel}bpp image"
            )

    data = bytearray()
    for ty in range(raster.tile_rows):
        for tx in range(raster.tile_columns):
            for ry in range(TILE_SIZE):
                offset = (ty * TILE_SIZE + ry) * raster.width + tx * TILE_SIZE
                data += _pack_row(
                    raster.pixels[offset : offset + TILE_SIZE], raster.bits_per_pixel
                )

    return TileBuffer(bytes(data), raster.bits_per_pixel, compressed)


def read_tiles(
    rom: RomReader,
    offset: int,
    tile_count: int,
    bits_per_pixel: int,
    compressed: bool = False,
    compressor: Compressor | None = None,
) -> TileBuffer:
    """Read ``tile_count`` tiles from ``rom`` at ``offset``."""

    length = tile_count * bytes_per_tile(bits_per_pixel)
    data = read_payload(rom, offset, length, compressed, compressor)
    _check_declared_length(data, length, bits_per_pixel)
    return TileBuffer(data, bits_per_pixel, compressed)

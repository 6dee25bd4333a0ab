"""15-bit packed palette <-> 24-bit RGB color table.

Each entry is a little-endian halfword ``0BBBBBGGGGGRRRRR``. Channels widen
by ``* 8`` and narrow by ``// 8``, so a 5-bit value survives decode+encode but
an arbitrary 8-bit channel comes back floored to a multiple of 8.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import ColorOutOfRangeError, UnsupportedPaletteSizeError
from .payload import Compressor, RomReader, load, materialize, read_payload

Color = Tuple[int, int, int]
ColorTable = List[Color]

PALETTE_SIZES = (16, 256)
BYTES_PER_ENTRY = 2


def _check_entry_count(count: int) -> int:
    if count not in PALETTE_SIZES:
        raise UnsupportedPaletteSizeError(
            f"Palettes must hold 16 or 256 colors, got {count}"
        )
    return count


def _check_declared_length(data: bytes, entry_count: int) -> None:
    if len(data) != entry_count * BYTES_PER_ENTRY:
        raise UnsupportedPaletteSizeError(
            f"Expected {entry_count} colors ({entry_count * BYTES_PER_ENTRY} bytes), "
            f"got {len(data)} bytes"
        )


def unpack_color(word: int) -> Color:
    red = (word & 0x001F) * 8
    green = ((word & 0x03E0) >> 5) * 8
    blue = ((word & 0x7C00) >> 10) * 8
    return (red, green, blue)


def pack_color(color: Sequence[int]) -> int:
    red, green, blue = color
    for component in (red, green, blue):
        if not isinstance(component, int) or not (0 <= component <= 255):
            raise ColorOutOfRangeError(
                f"Color components must be integers between 0 and 255, got {tuple(color)}"
            )
    return (red // 8) | ((green // 8) << 5) | ((blue // 8) << 10)


@dataclass(frozen=True)
class PackedPalette:
    """Palette bytes as stored in the ROM (after decompression)."""

    data: bytes
    compressed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def entry_count(self) -> int:
        if len(self.data) % BYTES_PER_ENTRY:
            raise UnsupportedPaletteSizeError(
                f"{len(self.data)} bytes is not a whole number of 2-byte colors"
            )
        return _check_entry_count(len(self.data) // BYTES_PER_ENTRY)

    def to_colors(self) -> ColorTable:
        return decode_palette(self)

    def to_bytes(self, compressor: Compressor | None = None) -> bytes:
        """Return the ROM representation, compressed if ``compressed`` is set."""

        return materialize(self.data, self.compressed, compressor)

    @classmethod
    def from_colors(cls, colors: Sequence[Sequence[int]], compressed: bool = False) -> "PackedPalette":
        return encode_palette(colors, compressed)

    @classmethod
    def from_source(
        cls,
        source: bytes,
        compressed: bool = False,
        compressor: Compressor | None = None,
        offset: int = 0,
        entry_count: int | None = None,
    ) -> "PackedPalette":
        length = None if entry_count is None else _check_entry_count(entry_count) * BYTES_PER_ENTRY
        data = load(source, offset, length, compressed, compressor)
        if entry_count is not None:
            _check_declared_length(data, entry_count)
        return cls(data, compressed)


def decode_palette(palette: PackedPalette) -> ColorTable:
    count = palette.entry_count
    return [unpack_color(word) for word in struct.unpack(f"<{count}H", palette.data)]


def encode_palette(colors: Sequence[Sequence[int]], compressed: bool = False) -> PackedPalette:
    count = _check_entry_count(len(colors))
    words = [pack_color(color) for color in colors]
    return PackedPalette(struct.pack(f"<{count}H", *words), compressed)


def read_palette(
    rom: RomReader,
    offset: int,
    entry_count: int,
    compressed: bool = False,
    compressor: Compressor | None = None,
) -> PackedPalette:
    """Read a 16 or 256 color palette from ``rom`` at ``offset``."""

    length = _check_entry_count(entry_count) * BYTES_PER_ENTRY
    data = read_payload(rom, offset, length, compressed, compressor)
    _check_declared_length(data, entry_count)
    return PackedPalette(data, compressed)

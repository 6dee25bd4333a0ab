"""Compression pass-through and ROM access glue.

Graphics and palettes inside a GBA ROM are often stored LZ77-compressed. This
package never interprets the compressed stream: any object providing the
:class:`Compressor` methods can be plugged in, and the buffers only route their
bytes through it when they are flagged as ``compressed``.

Compressed streams are self-describing (the decoded length is part of the
stream header), so reading one needs nothing but its start offset. Pixel depth
and palette size are *not* stored in the stream and must always be supplied by
the caller.
"""

from __future__ import annotations

from typing import Protocol

from .errors import CompressionError, GraphixError, MalformedBufferError


class Compressor(Protocol):
    """Codec used for payloads flagged as compressed."""

    def decode(self, source: bytes, offset: int = 0) -> bytes:
        ...

    def encode(self, data: bytes) -> bytes:
        ...


class RomReader(Protocol):
    """Read-only view over a ROM image with a movable cursor."""

    offset: int

    def read_bytes(self, offset: int, length: int) -> bytes:
        ...

    def __len__(self) -> int:
        ...


def _require_compressor(compressor: Compressor | None) -> Compressor:
    if compressor is None:
        raise CompressionError("Compressed payload requires a compressor")
    return compressor


def compress(data: bytes, compressor: Compressor | None) -> bytes:
    compressor = _require_compressor(compressor)
    try:
        return bytes(compressor.encode(bytes(data)))
    except GraphixError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise CompressionError(f"Compression failed: {exc}") from exc


def decompress(source: bytes, offset: int, compressor: Compressor | None) -> bytes:
    compressor = _require_compressor(compressor)
    try:
        return bytes(compressor.decode(bytes(source), offset))
    except GraphixError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise CompressionError(f"Decompression at offset {offset:#x} failed: {exc}") from exc


def materialize(data: bytes, compressed: bool, compressor: Compressor | None) -> bytes:
    """Return ``data`` as stored in a ROM, compressing it when flagged."""

    if compressed:
        return compress(data, compressor)
    return bytes(data)


def load(
    source: bytes,
    offset: int = 0,
    length: int | None = None,
    compressed: bool = False,
    compressor: Compressor | None = None,
) -> bytes:
    """Extract a payload from ``source``.

    Compressed payloads are decoded starting at ``offset`` and ``length`` is
    ignored. Uncompressed payloads are sliced; ``length=None`` takes every byte
    after ``offset``.
    """

    if offset < 0 or offset > len(source):
        raise MalformedBufferError(
            f"Offset {offset:#x} lies outside a {len(source)}-byte source"
        )
    if compressed:
        return decompress(source, offset, compressor)
    end = len(source) if length is None else offset + length
    if end > len(source):
        raise MalformedBufferError(
            f"Requested {length} bytes at {offset:#x} but only "
            f"{len(source) - offset} are available"
        )
    return bytes(source[offset:end])


def read_payload(
    rom: RomReader,
    offset: int,
    length: int,
    compressed: bool = False,
    compressor: Compressor | None = None,
) -> bytes:
    """Read a payload through a ROM reader, decompressing it when flagged."""

    rom.offset = offset
    if compressed:
        return decompress(rom.read_bytes(offset, len(rom) - offset), 0, compressor)
    data = rom.read_bytes(offset, length)
    if len(data) != length:
        raise MalformedBufferError(
            f"ROM returned {len(data)} bytes at {offset:#x}, expected {length}"
        )
    return bytes(data)

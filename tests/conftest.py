import struct

import pytest


class FakeCompressor:
    """Length-prefixed stand-in for the LZ77 codec: ``b"LZ" + <I length + data``."""

    MAGIC = b"LZ"

    def encode(self, data: bytes) -> bytes:
        return self.MAGIC + struct.pack("<I", len(data)) + bytes(data)

    def decode(self, source: bytes, offset: int = 0) -> bytes:
        if source[offset : offset + 2] != self.MAGIC:
            raise ValueError(f"no compressed stream at {offset:#x}")
        (length,) = struct.unpack_from("<I", source, offset + 2)
        start = offset + 6
        return bytes(source[start : start + length])


class FakeRom:
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def read_bytes(self, offset: int, length: int) -> bytes:
        self.offset = offset + length
        return self.data[offset : offset + length]

    def __len__(self) -> int:
        return len(self.data)


@pytest.fixture
def compressor() -> FakeCompressor:
    return FakeCompressor()


@pytest.fixture
def make_rom():
    return FakeRom

"""Exceptions raised by the GBA graphics codecs."""

from __future__ import annotations


class GraphixError(Exception):
    """Base class for every codec failure."""


class MalformedBufferError(GraphixError):
    """Raised when a buffer length is not a multiple of its unit size."""


class InvalidDimensionsError(GraphixError):
    """Raised when a raster is not made of whole 8x8 tiles."""


class PixelIndexOutOfRangeError(GraphixError):
    """Raised when a pixel index does not fit the declared bit depth."""


class UnsupportedPaletteSizeError(GraphixError):
    """Raised when a palette does not hold exactly 16 or 256 entries."""


class UnsupportedDepthError(GraphixError):
    """Raised for pixel depths other than 4 or 8 bits per pixel."""


class ColorOutOfRangeError(GraphixError):
    """Raised when an RGB channel lies outside 0-255."""


class CompressionError(GraphixError):
    """Wraps any failure reported by the compression collaborator."""

"""Exceptions raised by the dithering pipeline."""

from __future__ import annotations


class DitherError(Exception):
    """Base class for all ditherer errors."""


class InvalidBufferError(DitherError, ValueError):
    """The pixel buffer has no pixels or an unusable shape."""


class UnsupportedAlgorithmError(DitherError, ValueError):
    """The requested algorithm is not one of the registered variants."""


class DecodeError(DitherError, OSError):
    """An input file could not be decoded into a pixel buffer."""


class EncodeError(DitherError, OSError):
    """A pixel buffer could not be written to disk."""

"""Fixed-width field readers for locator frames.

All multi-byte fields are little-endian on the wire. Floats and GPS words are
sent with their bytes reversed relative to a big-endian IEEE-754 decode, which
is the same thing as reading them little-endian.
"""

from __future__ import annotations

import math

import numpy as np

Buffer = bytes | bytearray | memoryview


class DecodeError(ValueError):
    """A locator frame could not be decoded."""


class OutOfBoundsError(DecodeError):
    """A field read would fall outside the frame."""

    def __init__(self, offset: int, width: int, length: int) -> None:
        super().__init__(
            f"Field of {width} byte(s) at offset {offset} exceeds frame of {length} byte(s)"
        )
        self.offset = offset
        self.width = width
        self.length = length


def check_bounds(buffer: Buffer, offset: int, width: int) -> None:
    """Raise OutOfBoundsError unless ``buffer[offset:offset + width]`` exists."""
    if offset < 0 or offset + width > len(buffer):
        raise OutOfBoundsError(offset, width, len(buffer))


def _read(buffer: Buffer, offset: int, dtype: str) -> np.generic:
    width = np.dtype(dtype).itemsize
    check_bounds(buffer, offset, width)
    return np.frombuffer(buffer, dtype=dtype, count=1, offset=offset)[0]


def read_u8(buffer: Buffer, offset: int) -> int:
    return int(_read(buffer, offset, "u1"))


def read_i8(buffer: Buffer, offset: int) -> int:
    return int(_read(buffer, offset, "i1"))


def read_u16(buffer: Buffer, offset: int) -> int:
    """Unsigned 16-bit little-endian."""
    return int(_read(buffer, offset, "<u2"))


def read_i16(buffer: Buffer, offset: int) -> int:
    """Signed (two's complement) 16-bit little-endian."""
    return int(_read(buffer, offset, "<i2"))


def read_f32(buffer: Buffer, offset: int) -> float:
    """IEEE-754 single, byte-reversed on the wire."""
    return float(_read(buffer, offset, "<f4"))


def read_gps_coord(buffer: Buffer, offset: int) -> float:
    """Decode an 8-byte ddmm.mmmm coordinate word to decimal degrees.

    The word is an IEEE-754 double whose decimal digits pack whole degrees
    followed by minutes, e.g. ``4230.5`` is 42 deg 30.5 min. Degrees are
    truncated toward zero, so southern/western values keep their sign.
    """
    raw = float(_read(buffer, offset, "<f8"))
    if not math.isfinite(raw):
        return raw
    degrees = math.trunc(raw) // 100 if raw >= 0 else -(math.trunc(-raw) // 100)
    return degrees + (raw - degrees * 100) / 60.0


def read_text(buffer: Buffer, offset: int, width: int) -> str:
    """Fixed-width UTF-8 text field with trailing NUL padding removed."""
    check_bounds(buffer, offset, width)
    return bytes(buffer[offset : offset + width]).decode("utf-8", errors="replace").rstrip("\x00")

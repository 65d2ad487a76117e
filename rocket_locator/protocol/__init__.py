"""Locator wire protocol: byte readers, classifier, decoders and frame builders."""

from .classifier import MessageType, classify_message
from .prelaunch import decode_prelaunch
from .readers import (
    DecodeError,
    OutOfBoundsError,
    read_f32,
    read_gps_coord,
    read_i8,
    read_i16,
    read_text,
    read_u8,
    read_u16,
)
from .telemetry import decode_telemetry

__all__ = [
    "DecodeError",
    "MessageType",
    "OutOfBoundsError",
    "classify_message",
    "decode_prelaunch",
    "decode_telemetry",
    "read_f32",
    "read_gps_coord",
    "read_i8",
    "read_i16",
    "read_text",
    "read_u8",
    "read_u16",
]

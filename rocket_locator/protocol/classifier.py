"""Header-based message classification."""

from __future__ import annotations

from enum import Enum

from rocket_locator.config import DEFAULT_CONFIG, LocatorConfig
from rocket_locator.protocol.readers import Buffer

HEADER_LENGTH = 3


class MessageType(Enum):
    PRELAUNCH = "prelaunch"
    TELEMETRY = "telemetry"


def classify_message(message: Buffer, config: LocatorConfig = DEFAULT_CONFIG) -> MessageType | None:
    """Return the message type for a frame, or None for a foreign header.

    Frames from other devices can share the channel, so an unknown header is
    not an error.
    """
    header = bytes(message[:HEADER_LENGTH])
    if header == config.prelaunch_header:
        return MessageType.PRELAUNCH
    if header == config.telemetry_header:
        return MessageType.TELEMETRY
    return None

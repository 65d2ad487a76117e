"""In-flight telemetry message decoder."""

from __future__ import annotations

from dataclasses import replace
import logging

from rocket_locator.config import DEFAULT_CONFIG, LocatorConfig
from rocket_locator.models import FlightPhase, FlightState
from rocket_locator.protocol.readers import (
    Buffer,
    OutOfBoundsError,
    read_f32,
    read_gps_coord,
    read_u8,
)

logger = logging.getLogger(__name__)

# Byte offsets within a telemetry frame. The first altitude sample starts on
# the flight-phase byte; the firmware lays the frame out this way.
LATITUDE = 11
LONGITUDE = 19
FIX_QUALITY = 27
SATELLITES = 28
HDOP = 29
FLIGHT_PHASE = 40
AGL_SAMPLES = 40
AGL_SAMPLE_WIDTH = 4


def decode_telemetry(
    message: Buffer,
    previous: FlightState,
    config: LocatorConfig = DEFAULT_CONFIG,
) -> FlightState:
    """Decode a telemetry frame into a new flight state.

    The fix-quality byte is taken raw here, unlike the ASCII digit carried by
    prelaunch frames. An unknown phase byte keeps the previous phase. While in
    flight a full second of altitude samples is decoded, otherwise only the
    first; either way only that prefix of ``agl_samples`` is overwritten.

    Raises:
        OutOfBoundsError: the frame is shorter than a full telemetry frame.
    """

    min_length = config.telemetry_min_length
    if len(message) < min_length:
        raise OutOfBoundsError(0, min_length, len(message))

    phase_byte = read_u8(message, FLIGHT_PHASE)
    phase = FlightPhase.from_byte(phase_byte)
    if phase is None:
        logger.debug("Unknown flight phase byte %d; keeping %s", phase_byte, previous.flight_phase)
        phase = previous.flight_phase

    state = replace(
        previous,
        latitude_deg=read_gps_coord(message, LATITUDE),
        longitude_deg=read_gps_coord(message, LONGITUDE),
        fix_quality=read_u8(message, FIX_QUALITY),
        satellites=read_u8(message, SATELLITES),
        hdop=read_f32(message, HDOP),
        flight_phase=phase,
    )

    count = config.samples_per_second if state.in_flight else 1
    samples = list(previous.agl_samples)
    if len(samples) < count:
        samples.extend([0.0] * (count - len(samples)))
    for i in range(count):
        samples[i] = read_f32(message, AGL_SAMPLES + i * AGL_SAMPLE_WIDTH) / config.altimeter_scale
    return replace(state, agl_samples=tuple(samples))

"""Configuration objects for the locator protocol."""

from __future__ import annotations

from dataclasses import dataclass

SAMPLES_PER_SECOND = 20
ALTIMETER_SCALE = 10.0
ACCELEROMETER_SCALE = 2048.0
EARTH_RADIUS_M = 6_371_000.0

PRELAUNCH_HEADER = b"PRE"
TELEMETRY_HEADER = b"TLM"


@dataclass(frozen=True)
class LocatorConfig:
    """Protocol constants shared by the decoders and the geometry engine."""

    samples_per_second: int = SAMPLES_PER_SECOND
    altimeter_scale: float = ALTIMETER_SCALE
    accelerometer_scale: float = ACCELEROMETER_SCALE
    earth_radius_m: float = EARTH_RADIUS_M
    prelaunch_header: bytes = PRELAUNCH_HEADER
    telemetry_header: bytes = TELEMETRY_HEADER

    @property
    def telemetry_min_length(self) -> int:
        return 40 + 4 * self.samples_per_second


DEFAULT_CONFIG = LocatorConfig()

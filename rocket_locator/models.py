"""Core data models for locator state, deployment config and geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

import numpy as np

from rocket_locator.config import SAMPLES_PER_SECOND


class FlightPhase(IntEnum):
    """Flight lifecycle reported by the locator, in flight order."""

    WAITING_LAUNCH = 0
    LAUNCHED = 1
    BURNOUT = 2
    NOSEOVER = 3
    DROGUE_PRIMARY_DEPLOYED = 4
    DROGUE_BACKUP_DEPLOYED = 5
    MAIN_PRIMARY_DEPLOYED = 6
    MAIN_BACKUP_DEPLOYED = 7
    LANDED = 8

    @classmethod
    def from_byte(cls, value: int) -> FlightPhase | None:
        """Return the phase for a wire byte, or None when the byte is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class DeployMode(IntEnum):
    """Deployment channel assignment stored on the locator."""

    DROGUE_PRIMARY_DROGUE_BACKUP = 0
    MAIN_PRIMARY_MAIN_BACKUP = 1
    DROGUE_PRIMARY_MAIN_PRIMARY = 2
    DROGUE_BACKUP_MAIN_BACKUP = 3

    @classmethod
    def from_byte(cls, value: int) -> DeployMode | None:
        try:
            return cls(value)
        except ValueError:
            return None


class Orientation(Enum):
    UP = "up"
    DOWN = "down"
    SIDE = "side"


@dataclass(frozen=True)
class Accelerometer:
    """Raw 3-axis accelerometer counts."""

    x: int = 0
    y: int = 0
    z: int = 0

    @property
    def magnitude(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))


# Status byte bit positions, most significant first.
STATUS_BITS: dict[str, int] = {
    "altimeter_ok": 3,
    "accelerometer_ok": 2,
    "deploy_channel_1_armed": 1,
    "deploy_channel_2_armed": 0,
}


@dataclass(frozen=True)
class StatusFlags:
    """Subsystem health flags packed into the prelaunch status byte."""

    altimeter_ok: bool = False
    accelerometer_ok: bool = False
    deploy_channel_1_armed: bool = False
    deploy_channel_2_armed: bool = False

    @classmethod
    def from_byte(cls, value: int) -> StatusFlags:
        return cls(**{name: bool((value >> bit) & 1) for name, bit in STATUS_BITS.items()})

    def to_byte(self) -> int:
        return sum(1 << bit for name, bit in STATUS_BITS.items() if getattr(self, name))


def _empty_agl_samples() -> tuple[float, ...]:
    return (0.0,) * SAMPLES_PER_SECOND


@dataclass(frozen=True)
class FlightState:
    """Latest known locator status.

    ``agl_samples`` has one slot per sample in a second of flight. A telemetry
    message only overwrites the prefix it carries; slots past that prefix keep
    whatever an earlier message wrote there.
    """

    last_message_time_s: float | None = None
    latitude_deg: float = 0.0
    longitude_deg: float = 0.0
    fix_quality: int = 0
    satellites: int = 0
    hdop: float = 0.0
    status: StatusFlags = field(default_factory=StatusFlags)
    agl_m: float = 0.0
    accelerometer: Accelerometer = field(default_factory=Accelerometer)
    g_force: float = 0.0
    orientation: Orientation = Orientation.SIDE
    battery_voltage: int = 0
    flight_phase: FlightPhase | None = None
    agl_samples: tuple[float, ...] = field(default_factory=_empty_agl_samples)

    @classmethod
    def initial(cls, samples_per_second: int = SAMPLES_PER_SECOND) -> FlightState:
        return cls(agl_samples=(0.0,) * samples_per_second)

    @property
    def in_flight(self) -> bool:
        """True strictly between LAUNCHED and LANDED."""
        phase = self.flight_phase if self.flight_phase is not None else FlightPhase.WAITING_LAUNCH
        return FlightPhase.LAUNCHED < phase < FlightPhase.LANDED


@dataclass(frozen=True)
class DeployConfig:
    """Deployment parameters persisted on the locator."""

    deploy_mode: DeployMode | None = None
    launch_detect_altitude_m: int = 0
    drogue_primary_deploy_delay_s: int = 0
    drogue_backup_deploy_delay_s: int = 0
    main_primary_deploy_altitude_m: int = 0
    main_backup_deploy_altitude_m: int = 0
    deploy_signal_duration: int = 0
    device_name: str = ""


@dataclass(frozen=True)
class GeoPoint:
    lat_deg: float
    lon_deg: float


@dataclass(frozen=True)
class LocatorVector:
    """Great-circle distance and initial bearing from observer to locator."""

    distance_m: int
    bearing_deg: float


@dataclass(frozen=True)
class GeometrySnapshot:
    """Handheld heading pair plus the latest bearing/distance to the locator."""

    heading_deg: float = 0.0
    last_heading_deg: float = 0.0
    bearing_to_locator_deg: float = 0.0
    distance_to_locator_m: int = 0

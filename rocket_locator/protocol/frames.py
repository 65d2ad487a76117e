"""Frame builders producing byte-accurate prelaunch and telemetry messages."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from rocket_locator.config import DEFAULT_CONFIG, LocatorConfig
from rocket_locator.models import Accelerometer, DeployConfig, FlightPhase, StatusFlags
from rocket_locator.protocol import prelaunch as pl
from rocket_locator.protocol import telemetry as tl


def encode_gps_coord(deg: float) -> float:
    """Pack decimal degrees into the ddmm.mmmm coordinate word."""
    degrees = math.trunc(deg)
    minutes = (deg - degrees) * 60.0
    return degrees * 100 + minutes


def _put(frame: bytearray, offset: int, dtype: str, value: float | int) -> None:
    raw = np.array([value], dtype=dtype).tobytes()
    frame[offset : offset + len(raw)] = raw


def _put_fix(
    frame: bytearray,
    offsets: tuple[int, int, int, int, int],
    latitude_deg: float,
    longitude_deg: float,
    fix_byte: int,
    satellites: int,
    hdop: float,
) -> None:
    lat_off, lon_off, fix_off, sats_off, hdop_off = offsets
    _put(frame, lat_off, "<f8", encode_gps_coord(latitude_deg))
    _put(frame, lon_off, "<f8", encode_gps_coord(longitude_deg))
    frame[fix_off] = fix_byte & 0xFF
    frame[sats_off] = satellites & 0xFF
    _put(frame, hdop_off, "<f4", hdop)


def build_prelaunch_message(
    *,
    latitude_deg: float = 0.0,
    longitude_deg: float = 0.0,
    fix_quality: int = 1,
    satellites: int = 8,
    hdop: float = 0.9,
    status: StatusFlags | int = 0,
    agl_m: float = 0.0,
    accelerometer: Accelerometer | None = None,
    deploy: DeployConfig | None = None,
    battery_voltage: int = 0,
    config: LocatorConfig = DEFAULT_CONFIG,
) -> bytes:
    """Build a prelaunch frame; the fix quality is sent as an ASCII digit."""
    accelerometer = accelerometer or Accelerometer()
    deploy = deploy or DeployConfig()
    status_byte = status.to_byte() if isinstance(status, StatusFlags) else int(status)

    frame = bytearray(pl.PRELAUNCH_MIN_LENGTH)
    frame[0:3] = config.prelaunch_header
    _put_fix(
        frame,
        (pl.LATITUDE, pl.LONGITUDE, pl.FIX_QUALITY, pl.SATELLITES, pl.HDOP),
        latitude_deg,
        longitude_deg,
        fix_quality + ord("0"),
        satellites,
        hdop,
    )
    frame[pl.STATUS] = status_byte & 0xFF
    _put(frame, pl.AGL, "<u2", round(agl_m * config.altimeter_scale))
    _put(frame, pl.ACCEL_X, "<i2", accelerometer.x)
    _put(frame, pl.ACCEL_Y, "<i2", accelerometer.y)
    _put(frame, pl.ACCEL_Z, "<i2", accelerometer.z)
    frame[pl.DEPLOY_MODE] = int(deploy.deploy_mode) if deploy.deploy_mode is not None else 0xFF
    _put(frame, pl.LAUNCH_DETECT_ALTITUDE, "<u2", deploy.launch_detect_altitude_m)
    _put(frame, pl.DROGUE_PRIMARY_DELAY, "i1", deploy.drogue_primary_deploy_delay_s)
    _put(frame, pl.DROGUE_BACKUP_DELAY, "i1", deploy.drogue_backup_deploy_delay_s)
    _put(frame, pl.MAIN_PRIMARY_ALTITUDE, "<u2", deploy.main_primary_deploy_altitude_m)
    _put(frame, pl.MAIN_BACKUP_ALTITUDE, "<u2", deploy.main_backup_deploy_altitude_m)
    _put(frame, pl.DEPLOY_SIGNAL_DURATION, "i1", deploy.deploy_signal_duration)
    name = deploy.device_name.encode("utf-8")[: pl.DEVICE_NAME_LENGTH]
    frame[pl.DEVICE_NAME : pl.DEVICE_NAME + len(name)] = name
    _put(frame, pl.BATTERY_VOLTAGE, "<u2", battery_voltage)
    return bytes(frame)


def build_telemetry_message(
    *,
    latitude_deg: float = 0.0,
    longitude_deg: float = 0.0,
    fix_quality: int = 1,
    satellites: int = 8,
    hdop: float = 0.9,
    flight_phase: FlightPhase | int = FlightPhase.WAITING_LAUNCH,
    agl_samples: Sequence[float] = (),
    config: LocatorConfig = DEFAULT_CONFIG,
) -> bytes:
    """Build a telemetry frame.

    The phase byte shares offset 40 with the low byte of the first altitude
    sample, so that sample loses a little mantissa precision on the wire.
    """
    frame = bytearray(config.telemetry_min_length)
    frame[0:3] = config.telemetry_header
    _put_fix(
        frame,
        (tl.LATITUDE, tl.LONGITUDE, tl.FIX_QUALITY, tl.SATELLITES, tl.HDOP),
        latitude_deg,
        longitude_deg,
        fix_quality,
        satellites,
        hdop,
    )
    for i, agl_m in enumerate(list(agl_samples)[: config.samples_per_second]):
        _put(frame, tl.AGL_SAMPLES + i * tl.AGL_SAMPLE_WIDTH, "<f4", agl_m * config.altimeter_scale)
    frame[tl.FLIGHT_PHASE] = int(flight_phase) & 0xFF
    return bytes(frame)

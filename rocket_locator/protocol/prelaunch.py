"""Prelaunch (configuration snapshot) message decoder."""

from __future__ import annotations

from dataclasses import replace

from rocket_locator.config import DEFAULT_CONFIG, LocatorConfig
from rocket_locator.models import (
    Accelerometer,
    DeployConfig,
    DeployMode,
    FlightState,
    Orientation,
    StatusFlags,
)
from rocket_locator.protocol.readers import (
    Buffer,
    OutOfBoundsError,
    read_f32,
    read_gps_coord,
    read_i8,
    read_i16,
    read_text,
    read_u8,
    read_u16,
)

# Byte offsets within a prelaunch frame.
LATITUDE = 11
LONGITUDE = 19
FIX_QUALITY = 27
SATELLITES = 28
HDOP = 29
STATUS = 40
AGL = 41
ACCEL_X = 43
ACCEL_Y = 45
ACCEL_Z = 47
DEPLOY_MODE = 49
LAUNCH_DETECT_ALTITUDE = 50
DROGUE_PRIMARY_DELAY = 52
DROGUE_BACKUP_DELAY = 53
MAIN_PRIMARY_ALTITUDE = 54
MAIN_BACKUP_ALTITUDE = 56
DEPLOY_SIGNAL_DURATION = 58
DEVICE_NAME = 59
DEVICE_NAME_LENGTH = 12
BATTERY_VOLTAGE = 71

PRELAUNCH_MIN_LENGTH = BATTERY_VOLTAGE + 2

ORIENTATION_THRESHOLD = 0.5


def classify_orientation(x: int, magnitude: float) -> Orientation:
    """Label the airframe attitude from the X-axis share of total acceleration."""

    if magnitude == 0.0:
        return Orientation.SIDE
    ratio = x / magnitude
    if ratio < -ORIENTATION_THRESHOLD:
        return Orientation.UP
    if ratio > ORIENTATION_THRESHOLD:
        return Orientation.DOWN
    return Orientation.SIDE


def decode_prelaunch(
    message: Buffer,
    previous: FlightState,
    config: LocatorConfig = DEFAULT_CONFIG,
) -> tuple[FlightState, DeployConfig]:
    """Decode a prelaunch frame into a new flight state and deploy config.

    G-force and orientation are derived from the accelerometer reading held in
    ``previous``; the reading carried by this frame becomes the reference for
    the next one. Nothing is returned unless every field decodes, so callers
    never see a partially applied frame.

    Raises:
        OutOfBoundsError: the frame is shorter than a full prelaunch frame.
    """

    if len(message) < PRELAUNCH_MIN_LENGTH:
        raise OutOfBoundsError(0, PRELAUNCH_MIN_LENGTH, len(message))

    reference = previous.accelerometer
    raw_g = reference.magnitude

    state = replace(
        previous,
        latitude_deg=read_gps_coord(message, LATITUDE),
        longitude_deg=read_gps_coord(message, LONGITUDE),
        fix_quality=(read_u8(message, FIX_QUALITY) - ord("0")) & 0xFF,
        satellites=read_u8(message, SATELLITES),
        hdop=read_f32(message, HDOP),
        status=StatusFlags.from_byte(read_u8(message, STATUS)),
        agl_m=read_u16(message, AGL) / config.altimeter_scale,
        accelerometer=Accelerometer(
            read_i16(message, ACCEL_X),
            read_i16(message, ACCEL_Y),
            read_i16(message, ACCEL_Z),
        ),
        g_force=raw_g / config.accelerometer_scale,
        orientation=classify_orientation(reference.x, raw_g),
        battery_voltage=read_u16(message, BATTERY_VOLTAGE),
    )
    deploy = DeployConfig(
        deploy_mode=DeployMode.from_byte(read_u8(message, DEPLOY_MODE)),
        launch_detect_altitude_m=read_u16(message, LAUNCH_DETECT_ALTITUDE),
        drogue_primary_deploy_delay_s=read_i8(message, DROGUE_PRIMARY_DELAY),
        drogue_backup_deploy_delay_s=read_i8(message, DROGUE_BACKUP_DELAY),
        main_primary_deploy_altitude_m=read_u16(message, MAIN_PRIMARY_ALTITUDE),
        main_backup_deploy_altitude_m=read_u16(message, MAIN_BACKUP_ALTITUDE),
        deploy_signal_duration=read_i8(message, DEPLOY_SIGNAL_DURATION),
        device_name=read_text(message, DEVICE_NAME, DEVICE_NAME_LENGTH),
    )
    return state, deploy

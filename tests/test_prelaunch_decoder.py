from dataclasses import replace

import pytest

from rocket_locator.models import (
    Accelerometer,
    DeployConfig,
    DeployMode,
    FlightPhase,
    FlightState,
    Orientation,
    StatusFlags,
)
from rocket_locator.protocol import prelaunch as pl
from rocket_locator.protocol.frames import build_prelaunch_message
from rocket_locator.protocol.readers import OutOfBoundsError


def test_decodes_fix_status_and_sensors(prelaunch_frame: bytes) -> None:
    state, _ = pl.decode_prelaunch(prelaunch_frame, FlightState())

    assert state.latitude_deg == pytest.approx(42.5083333, abs=1e-6)
    assert state.longitude_deg == pytest.approx(-71.25, abs=1e-6)
    assert state.fix_quality == 1
    assert state.satellites == 9
    assert state.hdop == pytest.approx(1.25)
    assert state.status == StatusFlags(
        altimeter_ok=True,
        accelerometer_ok=True,
        deploy_channel_1_armed=False,
        deploy_channel_2_armed=True,
    )
    assert state.agl_m == pytest.approx(12.3)
    assert state.accelerometer == Accelerometer(-2048, 10, -20)
    assert state.battery_voltage == 3912


def test_decodes_deploy_config(prelaunch_frame: bytes, deploy_config: DeployConfig) -> None:
    _, deploy = pl.decode_prelaunch(prelaunch_frame, FlightState())
    assert deploy == deploy_config


def test_gforce_and_orientation_use_previous_reading(prelaunch_frame: bytes) -> None:
    first, _ = pl.decode_prelaunch(prelaunch_frame, FlightState())
    assert first.g_force == 0.0
    assert first.orientation is Orientation.SIDE

    second, _ = pl.decode_prelaunch(prelaunch_frame, first)
    expected = (2048**2 + 10**2 + 20**2) ** 0.5 / 2048
    assert second.g_force == pytest.approx(expected)
    assert second.orientation is Orientation.UP


@pytest.mark.parametrize(
    ("x", "expected"),
    [
        (-2048, Orientation.UP),
        (2048, Orientation.DOWN),
        (100, Orientation.SIDE),
        (-1024, Orientation.SIDE),
    ],
)
def test_orientation_thresholds(x: int, expected: Orientation) -> None:
    previous = FlightState(accelerometer=Accelerometer(x, 0, 2048 if abs(x) < 2048 else 0))
    state, _ = pl.decode_prelaunch(build_prelaunch_message(), previous)
    assert state.orientation is expected


def test_status_byte_bits() -> None:
    state, _ = pl.decode_prelaunch(build_prelaunch_message(status=0b00001111), FlightState())
    assert state.status == StatusFlags(True, True, True, True)
    state, _ = pl.decode_prelaunch(build_prelaunch_message(status=0b00000000), FlightState())
    assert state.status == StatusFlags(False, False, False, False)
    state, _ = pl.decode_prelaunch(build_prelaunch_message(status=0b11110100), FlightState())
    assert state.status == StatusFlags(False, True, False, False)


def test_fix_quality_ascii_digit_wraps() -> None:
    frame = bytearray(build_prelaunch_message())
    frame[pl.FIX_QUALITY] = ord("/")
    state, _ = pl.decode_prelaunch(bytes(frame), FlightState())
    assert state.fix_quality == 255


def test_signed_deploy_bytes_and_unknown_mode() -> None:
    frame = bytearray(build_prelaunch_message())
    frame[pl.DEPLOY_MODE] = 0x42
    frame[pl.DROGUE_PRIMARY_DELAY] = 0xFE
    frame[pl.DEPLOY_SIGNAL_DURATION] = 0x80
    _, deploy = pl.decode_prelaunch(bytes(frame), FlightState())
    assert deploy.deploy_mode is None
    assert deploy.drogue_primary_deploy_delay_s == -2
    assert deploy.deploy_signal_duration == -128


def test_full_length_device_name_is_not_trimmed() -> None:
    deploy = DeployConfig(deploy_mode=DeployMode.MAIN_PRIMARY_MAIN_BACKUP, device_name="ABCDEFGHIJKL")
    _, decoded = pl.decode_prelaunch(build_prelaunch_message(deploy=deploy), FlightState())
    assert decoded.device_name == "ABCDEFGHIJKL"


def test_keeps_fields_prelaunch_does_not_carry() -> None:
    previous = FlightState(flight_phase=FlightPhase.BURNOUT, last_message_time_s=12.0)
    previous = replace(previous, agl_samples=(1.0,) * len(previous.agl_samples))
    state, _ = pl.decode_prelaunch(build_prelaunch_message(), previous)
    assert state.flight_phase is FlightPhase.BURNOUT
    assert state.agl_samples == previous.agl_samples
    assert state.last_message_time_s == 12.0


def test_decoding_is_deterministic(prelaunch_frame: bytes) -> None:
    previous = FlightState(accelerometer=Accelerometer(5, -6, 2000))
    assert pl.decode_prelaunch(prelaunch_frame, previous) == pl.decode_prelaunch(prelaunch_frame, previous)


def test_short_frame_raises_without_touching_previous(prelaunch_frame: bytes) -> None:
    previous = FlightState(accelerometer=Accelerometer(1, 2, 3))
    with pytest.raises(OutOfBoundsError):
        pl.decode_prelaunch(prelaunch_frame[: pl.PRELAUNCH_MIN_LENGTH - 1], previous)
    assert previous == FlightState(accelerometer=Accelerometer(1, 2, 3))

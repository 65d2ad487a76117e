import logging

import numpy as np
import pytest

from rocket_locator.models import (
    DeployConfig,
    FlightPhase,
    FlightState,
    GeoPoint,
    GeometrySnapshot,
)
from rocket_locator.protocol.classifier import MessageType
from rocket_locator.protocol import telemetry as tl
from rocket_locator.protocol.frames import build_telemetry_message
from rocket_locator.protocol.readers import OutOfBoundsError
from rocket_locator.runtime import LocatorEngine


class _Clock:
    def __init__(self) -> None:
        self.t = 100.0

    def __call__(self) -> float:
        self.t += 1.0
        return self.t


def test_prelaunch_publishes_state_and_deploy_config(prelaunch_frame: bytes, deploy_config: DeployConfig) -> None:
    engine = LocatorEngine(clock=_Clock())
    states: list[FlightState] = []
    engine.flight_state.subscribe(states.append)

    assert engine.handle_message(prelaunch_frame) is MessageType.PRELAUNCH

    assert len(states) == 1
    assert engine.flight_state.value.last_message_time_s == 101.0
    assert engine.flight_state.value.satellites == 9
    assert engine.deploy_config.value == deploy_config


def test_telemetry_updates_phase_and_samples() -> None:
    engine = LocatorEngine(clock=_Clock())
    frame = build_telemetry_message(
        flight_phase=FlightPhase.DROGUE_PRIMARY_DEPLOYED,
        agl_samples=[300.0 - i for i in range(20)],
    )
    assert engine.handle_message(frame) is MessageType.TELEMETRY
    state = engine.flight_state.value
    assert state.flight_phase is FlightPhase.DROGUE_PRIMARY_DEPLOYED
    assert state.agl_samples[-1] == pytest.approx(281.0)
    assert engine.deploy_config.value == DeployConfig()


def test_foreign_header_leaves_state_untouched(prelaunch_frame: bytes) -> None:
    engine = LocatorEngine(clock=_Clock())
    engine.handle_message(prelaunch_frame)
    before = engine.flight_state.value

    assert engine.handle_message(b"XYZ" + bytes(80)) is None
    assert engine.flight_state.value is before
    assert engine.messages_ignored == 1


def test_short_frame_raises_and_keeps_committed_state(prelaunch_frame: bytes) -> None:
    engine = LocatorEngine(clock=_Clock())
    engine.handle_message(prelaunch_frame)
    state_before = engine.flight_state.value
    deploy_before = engine.deploy_config.value

    with pytest.raises(OutOfBoundsError):
        engine.handle_message(prelaunch_frame[:60])
    with pytest.raises(OutOfBoundsError):
        engine.handle_message(build_telemetry_message(flight_phase=FlightPhase.BURNOUT)[:100])

    assert engine.flight_state.value is state_before
    assert engine.deploy_config.value is deploy_before


def test_consume_drops_bad_frames_and_continues(
    prelaunch_frame: bytes, caplog: pytest.LogCaptureFixture
) -> None:
    engine = LocatorEngine(clock=_Clock())
    frames = [
        prelaunch_frame,
        prelaunch_frame[:10],
        b"ZZZ",
        build_telemetry_message(flight_phase=FlightPhase.LANDED, agl_samples=[2.0]),
    ]
    with caplog.at_level(logging.WARNING, logger="rocket_locator"):
        decoded = engine.consume(frames)

    assert decoded == 2
    assert engine.messages_decoded == 2
    assert engine.messages_dropped == 1
    assert engine.messages_ignored == 1
    assert engine.flight_state.value.flight_phase is FlightPhase.LANDED
    assert "Dropped locator frame" in caplog.text


def test_heading_updates_shift_previous_value() -> None:
    engine = LocatorEngine()
    gravity = (0.0, 9.81, 0.0)

    first = engine.update_heading(gravity, (-20.0, -40.0, 0.0))
    assert first.heading_deg == pytest.approx(90.0)
    assert first.last_heading_deg == 0.0

    second = engine.update_heading(gravity, (0.0, -40.0, -20.0))
    assert second.heading_deg == pytest.approx(0.0, abs=1e-9)
    assert second.last_heading_deg == pytest.approx(90.0)


def test_locator_vector_updates_geometry() -> None:
    engine = LocatorEngine()
    engine.update_heading((0.0, 9.81, 0.0), (-20.0, -40.0, 0.0))
    vector = engine.update_locator_vector(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))

    snap = engine.geometry.value
    assert snap.distance_to_locator_m == vector.distance_m == 111194
    assert snap.bearing_to_locator_deg == pytest.approx(0.0, abs=1e-9)
    assert snap.heading_deg == pytest.approx(90.0)


def test_locator_vector_to_latest_fix() -> None:
    engine = LocatorEngine()
    engine.handle_message(build_telemetry_message(latitude_deg=0.0, longitude_deg=1.0))
    vector = engine.update_locator_vector_to(GeoPoint(0.0, 0.0))
    assert vector.bearing_deg == pytest.approx(90.0)
    assert engine.geometry.value != GeometrySnapshot()


def test_nan_latitude_fix_gives_zero_distance() -> None:
    engine = LocatorEngine()
    frame = bytearray(build_telemetry_message(latitude_deg=10.0, longitude_deg=1.0))
    frame[tl.LATITUDE : tl.LATITUDE + 8] = np.array([np.nan], dtype="<f8").tobytes()
    engine.handle_message(frame)

    assert np.isnan(engine.flight_state.value.latitude_deg)
    vector = engine.update_locator_vector_to(GeoPoint(0.0, 0.0))
    assert vector.distance_m == 0
    assert engine.geometry.value.distance_to_locator_m == 0


def test_failing_subscriber_does_not_block_deploy_config_or_stream(
    prelaunch_frame: bytes, deploy_config: DeployConfig
) -> None:
    engine = LocatorEngine(clock=_Clock())

    def _broken(state: FlightState) -> None:
        raise RuntimeError("display went away")

    engine.flight_state.subscribe(_broken)
    decoded = engine.consume(
        [prelaunch_frame, build_telemetry_message(flight_phase=FlightPhase.LANDED, agl_samples=[2.0])]
    )

    assert decoded == 2
    assert engine.deploy_config.value == deploy_config
    assert engine.flight_state.value.flight_phase is FlightPhase.LANDED

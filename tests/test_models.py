from rocket_locator.models import (
    STATUS_BITS,
    Accelerometer,
    DeployMode,
    FlightPhase,
    FlightState,
    StatusFlags,
)


def test_flight_phase_ordering_and_lookup() -> None:
    assert FlightPhase.WAITING_LAUNCH < FlightPhase.LAUNCHED < FlightPhase.LANDED
    assert FlightPhase.from_byte(8) is FlightPhase.LANDED
    assert FlightPhase.from_byte(200) is None
    assert DeployMode.from_byte(1) is DeployMode.MAIN_PRIMARY_MAIN_BACKUP
    assert DeployMode.from_byte(9) is None


def test_in_flight_is_strictly_between_launched_and_landed() -> None:
    in_flight = {phase for phase in FlightPhase if FlightState(flight_phase=phase).in_flight}
    assert FlightPhase.LAUNCHED not in in_flight
    assert FlightPhase.LANDED not in in_flight
    assert in_flight == set(FlightPhase) - {
        FlightPhase.WAITING_LAUNCH,
        FlightPhase.LAUNCHED,
        FlightPhase.LANDED,
    }
    assert not FlightState().in_flight


def test_status_flags_round_trip_bit_table() -> None:
    assert sorted(STATUS_BITS.values()) == [0, 1, 2, 3]
    flags = StatusFlags.from_byte(0b1010)
    assert flags == StatusFlags(altimeter_ok=True, deploy_channel_1_armed=True)
    assert flags.to_byte() == 0b1010


def test_initial_state_has_one_second_of_samples() -> None:
    assert len(FlightState().agl_samples) == 20
    assert FlightState.initial(5).agl_samples == (0.0,) * 5
    assert Accelerometer(3, 4, 0).magnitude == 5.0

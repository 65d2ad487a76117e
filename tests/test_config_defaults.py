from rocket_locator.config import LocatorConfig


def test_locator_config_protocol_defaults() -> None:
    cfg = LocatorConfig()

    assert cfg.samples_per_second == 20
    assert cfg.altimeter_scale == 10.0
    assert cfg.accelerometer_scale == 2048.0
    assert cfg.earth_radius_m == 6_371_000.0
    assert len(cfg.prelaunch_header) == 3
    assert len(cfg.telemetry_header) == 3
    assert cfg.prelaunch_header != cfg.telemetry_header
    assert cfg.telemetry_min_length == 120

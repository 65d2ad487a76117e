"""Shared pytest fixtures for locator frames."""

from __future__ import annotations

import pytest

from rocket_locator.models import Accelerometer, DeployConfig, DeployMode, StatusFlags
from rocket_locator.protocol.frames import build_prelaunch_message


@pytest.fixture
def deploy_config() -> DeployConfig:
    return DeployConfig(
        deploy_mode=DeployMode.DROGUE_PRIMARY_MAIN_PRIMARY,
        launch_detect_altitude_m=30,
        drogue_primary_deploy_delay_s=1,
        drogue_backup_deploy_delay_s=3,
        main_primary_deploy_altitude_m=150,
        main_backup_deploy_altitude_m=120,
        deploy_signal_duration=10,
        device_name="Pigeon-7",
    )


@pytest.fixture
def prelaunch_frame(deploy_config: DeployConfig) -> bytes:
    return build_prelaunch_message(
        latitude_deg=42.508333333333333,
        longitude_deg=-71.25,
        fix_quality=1,
        satellites=9,
        hdop=1.25,
        status=StatusFlags(True, True, False, True),
        agl_m=12.3,
        accelerometer=Accelerometer(-2048, 10, -20),
        deploy=deploy_config,
        battery_voltage=3912,
    )

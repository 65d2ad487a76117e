"""Synthetic rocket flight rendered as a locator frame stream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from rocket_locator.config import DEFAULT_CONFIG, EARTH_RADIUS_M, LocatorConfig
from rocket_locator.models import (
    Accelerometer,
    DeployConfig,
    DeployMode,
    FlightPhase,
    FlightState,
    GeoPoint,
    StatusFlags,
)
from rocket_locator.protocol.frames import build_prelaunch_message, build_telemetry_message
from rocket_locator.runtime import LocatorEngine

GRAVITY_MPS2 = 9.81
ONE_G_COUNTS = 2048


@dataclass(frozen=True)
class FlightProfileConfig:
    """Synthetic flight defaults."""

    rng_seed: int = 42
    pad_time_s: float = 5.0
    burn_time_s: float = 2.0
    apogee_m: float = 450.0
    main_deploy_altitude_m: float = 150.0
    drogue_descent_mps: float = 20.0
    main_descent_mps: float = 6.0
    landed_time_s: float = 3.0
    site_lat_deg: float = 36.597383
    site_lon_deg: float = -121.874300
    drift_east_mps: float = 3.0
    satellites: int = 9
    hdop: float = 0.9
    battery_voltage: int = 3950
    device_name: str = "SimLocator"
    foreign_frame_rate: float = 0.0
    truncated_frame_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.burn_time_s <= 0.0:
            raise ValueError("burn_time_s must be > 0")
        if self.apogee_m <= self.main_deploy_altitude_m:
            raise ValueError("apogee_m must be above main_deploy_altitude_m")
        if self.drogue_descent_mps <= 0.0 or self.main_descent_mps <= 0.0:
            raise ValueError("descent rates must be > 0")
        for name in ("foreign_frame_rate", "truncated_frame_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")


@dataclass(frozen=True)
class _Timeline:
    accel_mps2: float
    burnout_t_s: float
    apogee_t_s: float
    main_t_s: float
    landing_t_s: float


def _timeline(cfg: FlightProfileConfig) -> _Timeline:
    # Constant thrust for burn_time_s, then ballistic coast to apogee_m.
    t_b = cfg.burn_time_s
    qa = t_b**2 / (2.0 * GRAVITY_MPS2)
    qb = t_b**2 / 2.0
    accel = (-qb + np.sqrt(qb**2 + 4.0 * qa * cfg.apogee_m)) / (2.0 * qa)
    apogee_t = t_b + accel * t_b / GRAVITY_MPS2
    main_t = apogee_t + (cfg.apogee_m - cfg.main_deploy_altitude_m) / cfg.drogue_descent_mps
    landing_t = main_t + cfg.main_deploy_altitude_m / cfg.main_descent_mps
    return _Timeline(float(accel), t_b, float(apogee_t), float(main_t), float(landing_t))


def flight_duration_s(cfg: FlightProfileConfig) -> float:
    """Seconds from ignition to touchdown."""

    return _timeline(cfg).landing_t_s


def altitude_agl_m(t_s: np.ndarray | float, cfg: FlightProfileConfig) -> np.ndarray:
    """Altitude above the pad at flight time ``t_s`` (0 at ignition)."""

    tl = _timeline(cfg)
    t = np.atleast_1d(np.asarray(t_s, dtype=float))
    v_b = tl.accel_mps2 * tl.burnout_t_s
    h_b = 0.5 * tl.accel_mps2 * tl.burnout_t_s**2

    alt = np.zeros_like(t)
    burn = (t >= 0.0) & (t < tl.burnout_t_s)
    alt[burn] = 0.5 * tl.accel_mps2 * t[burn] ** 2
    coast = (t >= tl.burnout_t_s) & (t < tl.apogee_t_s)
    tc = t[coast] - tl.burnout_t_s
    alt[coast] = h_b + v_b * tc - 0.5 * GRAVITY_MPS2 * tc**2
    drogue = (t >= tl.apogee_t_s) & (t < tl.main_t_s)
    alt[drogue] = cfg.apogee_m - cfg.drogue_descent_mps * (t[drogue] - tl.apogee_t_s)
    main = (t >= tl.main_t_s) & (t < tl.landing_t_s)
    alt[main] = cfg.main_deploy_altitude_m - cfg.main_descent_mps * (t[main] - tl.main_t_s)
    return np.clip(alt, 0.0, None)


def flight_phase_at(t_s: float, cfg: FlightProfileConfig) -> FlightPhase:
    tl = _timeline(cfg)
    if t_s < 0.0:
        return FlightPhase.WAITING_LAUNCH
    if t_s < 1.0:
        return FlightPhase.LAUNCHED
    if t_s < tl.apogee_t_s:
        return FlightPhase.BURNOUT
    if t_s < tl.apogee_t_s + 1.0:
        return FlightPhase.NOSEOVER
    if t_s < tl.main_t_s:
        return FlightPhase.DROGUE_PRIMARY_DEPLOYED
    if t_s < tl.landing_t_s:
        return FlightPhase.MAIN_PRIMARY_DEPLOYED
    return FlightPhase.LANDED


def locator_position(t_s: float, cfg: FlightProfileConfig) -> GeoPoint:
    """Locator position after drifting east with the wind since ignition."""

    drift_m = cfg.drift_east_mps * max(t_s, 0.0)
    d_lon = np.rad2deg(drift_m / (EARTH_RADIUS_M * np.cos(np.deg2rad(cfg.site_lat_deg))))
    return GeoPoint(cfg.site_lat_deg, cfg.site_lon_deg + float(d_lon))


def synthetic_flight_frames(
    cfg: FlightProfileConfig | None = None,
    locator_cfg: LocatorConfig = DEFAULT_CONFIG,
) -> Iterator[bytes]:
    """Yield one frame per second: prelaunch on the pad, telemetry from ignition on.

    Foreign and truncated frames are mixed in at the configured rates.
    """

    cfg = cfg or FlightProfileConfig()
    rng = np.random.default_rng(cfg.rng_seed)
    deploy = DeployConfig(
        deploy_mode=DeployMode.DROGUE_PRIMARY_MAIN_PRIMARY,
        launch_detect_altitude_m=30,
        drogue_primary_deploy_delay_s=0,
        drogue_backup_deploy_delay_s=2,
        main_primary_deploy_altitude_m=int(cfg.main_deploy_altitude_m),
        main_backup_deploy_altitude_m=int(cfg.main_deploy_altitude_m * 0.8),
        deploy_signal_duration=10,
        device_name=cfg.device_name,
    )
    status = StatusFlags(True, True, True, True)
    rate = locator_cfg.samples_per_second
    end_t = int(np.ceil(flight_duration_s(cfg) + cfg.landed_time_s))

    for second in range(-int(np.ceil(cfg.pad_time_s)), end_t):
        pos = locator_position(float(second), cfg)
        if second < 0:
            jitter = rng.integers(-20, 21, size=3)
            frame = build_prelaunch_message(
                latitude_deg=pos.lat_deg,
                longitude_deg=pos.lon_deg,
                satellites=cfg.satellites,
                hdop=cfg.hdop,
                status=status,
                agl_m=0.0,
                accelerometer=Accelerometer(
                    int(-ONE_G_COUNTS + jitter[0]), int(jitter[1]), int(jitter[2])
                ),
                deploy=deploy,
                battery_voltage=cfg.battery_voltage,
                config=locator_cfg,
            )
        else:
            t = second + np.arange(rate) / rate
            frame = build_telemetry_message(
                latitude_deg=pos.lat_deg,
                longitude_deg=pos.lon_deg,
                satellites=cfg.satellites,
                hdop=cfg.hdop,
                flight_phase=flight_phase_at(float(second), cfg),
                agl_samples=altitude_agl_m(t, cfg).tolist(),
                config=locator_cfg,
            )

        if rng.random() < cfg.foreign_frame_rate:
            yield b"XYZ" + rng.integers(0, 256, size=int(rng.integers(0, 64))).astype(np.uint8).tobytes()
        if rng.random() < cfg.truncated_frame_rate:
            frame = frame[: int(rng.integers(3, len(frame)))]
        yield frame


@dataclass(frozen=True)
class ReplaySummary:
    frames_total: int
    frames_decoded: int
    frames_ignored: int
    frames_dropped: int
    max_agl_m: float
    final_phase: FlightPhase | None
    device_name: str
    distance_to_locator_m: int
    bearing_to_locator_deg: float


def run_replay(
    cfg: FlightProfileConfig | None = None,
    *,
    observer: GeoPoint | None = None,
    engine: LocatorEngine | None = None,
) -> ReplaySummary:
    """Feed a synthetic flight through an engine and summarise what it saw."""

    cfg = cfg or FlightProfileConfig()
    engine = engine or LocatorEngine()
    observer = observer or GeoPoint(cfg.site_lat_deg, cfg.site_lon_deg)
    max_agl = [0.0]

    def _track_max(state: FlightState) -> None:
        if state.in_flight:
            max_agl[0] = max(max_agl[0], max(state.agl_samples))
        else:
            max_agl[0] = max(max_agl[0], state.agl_samples[0])

    unsubscribe = engine.flight_state.subscribe(_track_max)
    frames = list(synthetic_flight_frames(cfg, engine.config))
    try:
        engine.consume(frames)
    finally:
        unsubscribe()

    vector = engine.update_locator_vector_to(observer)
    return ReplaySummary(
        frames_total=len(frames),
        frames_decoded=engine.messages_decoded,
        frames_ignored=engine.messages_ignored,
        frames_dropped=engine.messages_dropped,
        max_agl_m=float(max_agl[0]),
        final_phase=engine.flight_state.value.flight_phase,
        device_name=engine.deploy_config.value.device_name,
        distance_to_locator_m=vector.distance_m,
        bearing_to_locator_deg=vector.bearing_deg,
    )

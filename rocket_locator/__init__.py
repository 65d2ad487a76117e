"""Rocket locator protocol decoder and handheld geometry package."""

from rocket_locator.config import LocatorConfig
from rocket_locator.models import DeployConfig, FlightPhase, FlightState, GeometrySnapshot
from rocket_locator.runtime import LocatorEngine

__all__ = [
    "DeployConfig",
    "FlightPhase",
    "FlightState",
    "GeometrySnapshot",
    "LocatorConfig",
    "LocatorEngine",
    "protocol",
    "geometry",
    "runtime",
    "utils",
]

"""Handheld heading and observer-to-locator geometry."""

from rocket_locator.geometry.haversine import haversine_distance_m, initial_bearing_deg, locator_vector
from rocket_locator.geometry.heading import (
    AXIS_X,
    AXIS_Y,
    AXIS_Z,
    device_heading_deg,
    orientation_angles,
    remap_coordinate_system,
    rotation_matrix,
)

__all__ = [
    "AXIS_X",
    "AXIS_Y",
    "AXIS_Z",
    "device_heading_deg",
    "haversine_distance_m",
    "initial_bearing_deg",
    "locator_vector",
    "orientation_angles",
    "remap_coordinate_system",
    "rotation_matrix",
]

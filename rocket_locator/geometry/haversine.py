"""Great-circle distance and forward azimuth on a spherical Earth."""

from __future__ import annotations

import numpy as np

from rocket_locator.config import EARTH_RADIUS_M
from rocket_locator.models import GeoPoint, LocatorVector
from rocket_locator.utils.angles import wrap_deg_360


def haversine_distance_m(
    origin: GeoPoint, target: GeoPoint, earth_radius_m: float = EARTH_RADIUS_M
) -> float:
    """Great-circle distance between two points in meters."""

    lat1 = np.deg2rad(origin.lat_deg)
    lat2 = np.deg2rad(target.lat_deg)
    d_lat = lat2 - lat1
    d_lon = np.deg2rad(target.lon_deg - origin.lon_deg)

    a = np.sin(d_lat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_lon / 2.0) ** 2
    # rounding near the antipode can push a just past 1
    a = np.clip(a, 0.0, 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return float(earth_radius_m * c)


def initial_bearing_deg(origin: GeoPoint, target: GeoPoint) -> float:
    """Initial bearing from origin to target, clockwise from true north in [0, 360)."""

    lat1 = np.deg2rad(origin.lat_deg)
    lat2 = np.deg2rad(target.lat_deg)
    d_lon = np.deg2rad(target.lon_deg - origin.lon_deg)

    y = np.sin(d_lon) * np.cos(lat2)
    x = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(d_lon)
    return wrap_deg_360(np.rad2deg(np.arctan2(y, x)))


def locator_vector(
    observer: GeoPoint, locator: GeoPoint, earth_radius_m: float = EARTH_RADIUS_M
) -> LocatorVector:
    """Distance (truncated to whole meters) and bearing from observer to locator.

    A fix with NaN coordinates gives distance 0 and a NaN bearing.
    """

    distance = haversine_distance_m(observer, locator, earth_radius_m)
    return LocatorVector(
        distance_m=int(distance) if np.isfinite(distance) else 0,
        bearing_deg=initial_bearing_deg(observer, locator),
    )

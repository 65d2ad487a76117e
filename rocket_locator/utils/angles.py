"""Angle utilities."""

from __future__ import annotations


def wrap_deg_360(angle_deg: float) -> float:
    """Wrap an angle in degrees to [0, 360)."""

    wrapped = (float(angle_deg) + 360.0) % 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped

"""Compass heading of the handheld device from accelerometer and magnetometer.

Device frame: X to the right of the screen, Y to the top, Z out of the
screen. World frame: X east, Y north, Z up. The heading is taken with the
device held upright so the camera looks along the map direction, which is the
world frame remapped with device X kept and device Z standing in for Y.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from rocket_locator.utils.angles import wrap_deg_360

logger = logging.getLogger(__name__)

AXIS_X = 1
AXIS_Y = 2
AXIS_Z = 3
AXIS_MINUS_X = AXIS_X | 0x80
AXIS_MINUS_Y = AXIS_Y | 0x80
AXIS_MINUS_Z = AXIS_Z | 0x80

GRAVITY = 9.81
FREE_FALL_GRAVITY_SQUARED = 0.01 * GRAVITY * GRAVITY
MIN_HORIZONTAL_FIELD = 0.1


def rotation_matrix(gravity: Sequence[float], geomagnetic: Sequence[float]) -> np.ndarray | None:
    """Return the device-to-world rotation matrix, or None for unusable input.

    Rows are the world east, north and up axes expressed in device coordinates.
    Input is unusable when the device is in free fall or the magnetic field is
    (nearly) parallel to gravity.
    """

    a = np.asarray(gravity, dtype=float)
    e = np.asarray(geomagnetic, dtype=float)
    norm_sq_a = float(a @ a)
    if norm_sq_a < FREE_FALL_GRAVITY_SQUARED:
        return None

    h = np.cross(e, a)
    norm_h = float(np.linalg.norm(h))
    if norm_h < MIN_HORIZONTAL_FIELD:
        return None

    h = h / norm_h
    a = a / np.sqrt(norm_sq_a)
    m = np.cross(a, h)
    return np.vstack([h, m, a])


def remap_coordinate_system(matrix: np.ndarray, x_axis: int, y_axis: int) -> np.ndarray:
    """Rotate a rotation matrix so the device axes ``x_axis``/``y_axis`` become X/Y.

    Axes are the ``AXIS_*`` constants; the remapped Z axis is derived so the
    result stays right-handed.
    """

    if (x_axis & 0x7C) or (y_axis & 0x7C):
        raise ValueError("Axis must be one of the AXIS_* constants")
    if not (x_axis & 0x3) or not (y_axis & 0x3):
        raise ValueError("Axis must be one of the AXIS_* constants")
    if (x_axis & 0x3) == (y_axis & 0x3):
        raise ValueError("x_axis and y_axis must name different axes")

    z_axis = x_axis ^ y_axis
    x = (x_axis & 0x3) - 1
    y = (y_axis & 0x3) - 1
    z = (z_axis & 0x3) - 1
    if (x ^ ((z + 1) % 3)) | (y ^ ((z + 2) % 3)):
        z_axis ^= 0x80

    src = np.asarray(matrix, dtype=float)
    out = np.zeros((3, 3), dtype=float)
    for col, axis, flag in ((x, 0, x_axis), (y, 1, y_axis), (z, 2, z_axis)):
        out[:, col] = -src[:, axis] if flag >= 0x80 else src[:, axis]
    return out


def orientation_angles(matrix: np.ndarray) -> tuple[float, float, float]:
    """Return (azimuth, pitch, roll) in radians from a rotation matrix."""

    r = np.asarray(matrix, dtype=float)
    azimuth = float(np.arctan2(r[0, 1], r[1, 1]))
    pitch = float(np.arcsin(np.clip(-r[2, 1], -1.0, 1.0)))
    roll = float(np.arctan2(-r[2, 0], r[2, 2]))
    return azimuth, pitch, roll


def device_heading_deg(gravity: Sequence[float], geomagnetic: Sequence[float]) -> float:
    """Compass heading in [0, 360) of the direction the upright device faces.

    Unusable sensor input yields 0.
    """

    matrix = rotation_matrix(gravity, geomagnetic)
    if matrix is None:
        logger.debug("No rotation matrix for gravity=%s field=%s", gravity, geomagnetic)
        matrix = np.zeros((3, 3), dtype=float)
    remapped = remap_coordinate_system(matrix, AXIS_X, AXIS_Z)
    azimuth, _, _ = orientation_angles(remapped)
    return wrap_deg_360(np.rad2deg(azimuth))

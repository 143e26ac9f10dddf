from __future__ import annotations

import math

import numpy as np


def focal_length(vp0: np.ndarray, vp1: np.ndarray, sensor_length: float) -> float | None:
    """
    Focal length (in sensor units) from two orthogonal vanishing points.

    The camera-space rays (x0, y0, -2f/L) and (x1, y1, -2f/L) are orthogonal
    iff (2f/L)^2 = -(x0*x1 + y0*y1). Returns None when that quantity is not
    positive, i.e. no real focal length matches the two points.
    """
    if not sensor_length > 0.0:
        raise ValueError("sensor_length must be > 0")
    x0, y0 = (float(c) for c in np.asarray(vp0, dtype=np.float64).reshape(2))
    x1, y1 = (float(c) for c in np.asarray(vp1, dtype=np.float64).reshape(2))
    radicand = -(x0 * x1 + y0 * y1)
    if not radicand > 0.0:
        return None
    return math.sqrt(radicand) / 2.0 * float(sensor_length)


def field_of_view(focal: float, sensor_length: float) -> float:
    """Angle of view across `sensor_length`, in radians."""
    if not focal > 0.0:
        raise ValueError("focal length must be > 0")
    return 2.0 * math.atan(float(sensor_length) / (2.0 * float(focal)))

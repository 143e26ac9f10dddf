from __future__ import annotations

import numpy as np

from vanishcam.core.linalg import transpose, vec_add


def project_point(xyz: np.ndarray, focal: float, sensor_length: float) -> np.ndarray:
    """
    Project a camera-space point (x right, y up, looking down -z) to UV.
    """
    xyz = np.asarray(xyz, dtype=np.float64).reshape(3)
    if xyz[2] == 0.0:
        raise ValueError("cannot project a point on the camera plane (z == 0)")
    c = -2.0 * float(focal) / float(sensor_length) / xyz[2]
    return xyz[:2] * c


def unproject_point(uv: np.ndarray, depth: float, focal: float, sensor_length: float) -> np.ndarray:
    """Camera-space point at distance `depth` in front of the camera that projects to `uv`."""
    uv = np.asarray(uv, dtype=np.float64).reshape(2)
    c = float(sensor_length) / float(focal) / 2.0 * float(depth)
    return np.array([uv[0] * c, uv[1] * c, -float(depth)], dtype=np.float64)


def axis_overlay(
    world_transform: np.ndarray,
    origin_uv: np.ndarray,
    focal: float,
    sensor_length: float,
    depth: float | None = None,
) -> dict[str, tuple[np.ndarray, np.ndarray]]:
    """
    UV line segments showing the world x, y, z axes at the origin point.

    The origin is placed `depth` in front of the camera (default
    10 * focal / sensor_length) and each unit world axis is drawn from there.
    Axes whose tip falls on or behind the camera plane are left out.
    """
    if depth is None:
        depth = 10.0 * float(focal) / float(sensor_length)
    start = unproject_point(origin_uv, depth, focal, sensor_length)
    start_uv = project_point(start, focal, sensor_length)

    out: dict[str, tuple[np.ndarray, np.ndarray]] = {}
    axes = transpose(world_transform)
    for name, axis in zip("xyz", axes):
        end = vec_add(start, axis)
        if end[2] >= 0.0:
            continue
        out[name] = (start_uv, project_point(end, focal, sensor_length))
    return out

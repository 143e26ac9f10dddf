from __future__ import annotations

import numpy as np

from vanishcam.core.linalg import inverse, normalize, transform_vector
from vanishcam.core.projection import unproject_point


def camera_location(
    origin_uv: np.ndarray,
    distance: float,
    focal: float,
    sensor_length: float,
    world_transform: np.ndarray,
) -> np.ndarray | None:
    """
    Camera position in world coordinates.

    The world origin is assumed to sit at `origin_uv`, `distance` away from
    the camera along the viewing ray. Returns None if `world_transform`
    cannot be inverted.
    """
    if not distance > 0.0:
        raise ValueError("distance must be > 0")
    direction = normalize(unproject_point(origin_uv, 1.0, focal, sensor_length))
    origin_cam = direction * float(distance)

    cam_to_world = inverse(world_transform)
    if cam_to_world is None:
        return None
    return -transform_vector(cam_to_world, origin_cam)

import numpy as np
import pytest

from vanishcam.core.linalg import rotation_3d
from vanishcam.core.location import camera_location
from vanishcam.core.projection import axis_overlay, project_point, unproject_point

SENSOR = 36.0
FOCAL = 24.0


def test_camera_location_recovers_known_position():
    w = rotation_3d(2, 0.4) @ rotation_3d(1, 0.6) @ rotation_3d(0, -0.3)
    origin_cam = np.array([0.5, -0.3, -8.0])
    # World origin sits at origin_cam in camera space: origin_cam = W @ (0 - C).
    expected = -w.T @ origin_cam

    origin_uv = project_point(origin_cam, FOCAL, SENSOR)
    loc = camera_location(origin_uv, float(np.linalg.norm(origin_cam)), FOCAL, SENSOR, w)
    assert loc is not None
    assert np.max(np.abs(loc - expected)) < 1e-9


def test_camera_location_on_optical_axis():
    loc = camera_location([0.0, 0.0], 5.0, FOCAL, SENSOR, np.eye(3))
    assert np.allclose(loc, [0.0, 0.0, 5.0])


def test_camera_location_requires_invertible_transform_and_distance():
    assert camera_location([0.1, 0.1], 2.0, FOCAL, SENSOR, np.zeros((3, 3))) is None
    with pytest.raises(ValueError):
        camera_location([0.1, 0.1], 0.0, FOCAL, SENSOR, np.eye(3))


def test_project_unproject_consistent():
    uv = np.array([0.37, -0.61])
    for depth in (0.5, 3.0, 40.0):
        xyz = unproject_point(uv, depth, FOCAL, SENSOR)
        assert xyz[2] == -depth
        assert np.allclose(project_point(xyz, FOCAL, SENSOR), uv)
    with pytest.raises(ValueError):
        project_point([1.0, 1.0, 0.0], FOCAL, SENSOR)


def test_axis_overlay_directions():
    overlay = axis_overlay(np.eye(3), [0.0, 0.0], SENSOR, SENSOR)
    assert set(overlay) == {"x", "y", "z"}
    start, end_x = overlay["x"]
    assert np.allclose(start, [0.0, 0.0])
    assert end_x[0] > 0.0 and abs(end_x[1]) < 1e-12
    assert overlay["y"][1][1] > 0.0
    # World z points straight at the camera and projects onto the start.
    assert np.allclose(overlay["z"][1], start)


def test_axis_overlay_drops_axes_behind_camera():
    overlay = axis_overlay(np.eye(3), [0.0, 0.0], SENSOR, SENSOR, depth=0.5)
    assert "z" not in overlay
    assert {"x", "y"} <= set(overlay)

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from vanishcam.api.calibration import CalibrationIssue, CalibrationResult

RESULT_SCHEMA = "vanishcam.result.v0"


def _require_pose(result: CalibrationResult) -> np.ndarray:
    cam_to_world = result.camera_to_world
    if cam_to_world is None or result.focal_length is None:
        raise ValueError("calibration result has no pose")
    return cam_to_world


def pose_matrix(result: CalibrationResult) -> np.ndarray:
    """
    4x4 camera-to-world transform: rotation rows from the inverse world
    transform, translation column = camera location, last row [0, 0, 0, 1].
    """
    cam_to_world = _require_pose(result)
    if result.location is None:
        raise ValueError("calibration result has no camera location")
    m = np.eye(4, dtype=np.float64)
    m[:3, :3] = cam_to_world
    m[:3, 3] = np.asarray(result.location, dtype=np.float64).reshape(3)
    return m


def pose_command(result: CalibrationResult) -> str:
    """
    Two assignment statements placing the scene camera, for pasting into a
    3D tool's Python console.
    """
    m = pose_matrix(result)
    rows = ", ".join("(" + ", ".join(repr(float(x)) for x in row) + ")" for row in m)
    return (
        f"C.scene.camera.matrix_world = Matrix(({rows}))\n"
        f"C.scene.camera.data.lens = {float(result.focal_length)!r}"
    )


def pose_quaternion(result: CalibrationResult) -> tuple[float, float, float, float]:
    """Camera-to-world rotation as a (w, x, y, z) quaternion."""
    from scipy.spatial.transform import Rotation as Rot  # type: ignore

    cam_to_world = _require_pose(result)
    x, y, z, w = Rot.from_matrix(cam_to_world).as_quat()
    return float(w), float(x), float(y), float(z)


def _list_or_none(x: Any) -> Any:
    if x is None:
        return None
    return np.asarray(x, dtype=np.float64).tolist()


def result_to_dict(result: CalibrationResult) -> dict[str, Any]:
    vps = result.vanishing_points
    return {
        "schema_version": RESULT_SCHEMA,
        "sensor_length": float(result.sensor_length),
        "vanishing_points": None if vps is None else [_list_or_none(vp) for vp in vps],
        "focal_length": result.focal_length,
        "field_of_view": result.field_of_view,
        "world_transform": _list_or_none(result.world_transform),
        "location": _list_or_none(result.location),
        "euler_rotation": _list_or_none(result.euler_rotation),
        "issues": [issue.value for issue in result.issues],
    }


def result_from_dict(data: dict[str, Any]) -> CalibrationResult:
    if str(data.get("schema_version")) != RESULT_SCHEMA:
        raise ValueError("unsupported result schema")

    def arr(key: str, shape: tuple[int, ...]) -> np.ndarray | None:
        value = data.get(key)
        if value is None:
            return None
        return np.asarray(value, dtype=np.float64).reshape(shape)

    vps = data.get("vanishing_points")
    euler = data.get("euler_rotation")
    focal = data.get("focal_length")
    fov = data.get("field_of_view")
    return CalibrationResult(
        sensor_length=float(data["sensor_length"]),
        vanishing_points=None if vps is None else tuple(np.asarray(vp, dtype=np.float64).reshape(2) for vp in vps),
        focal_length=None if focal is None else float(focal),
        field_of_view=None if fov is None else float(fov),
        world_transform=arr("world_transform", (3, 3)),
        location=arr("location", (3,)),
        euler_rotation=None if euler is None else tuple(float(a) for a in euler),
        issues=tuple(CalibrationIssue(v) for v in data.get("issues", [])),
    )


def save_result(path: Path, result: CalibrationResult) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(result_to_dict(result), indent=2, sort_keys=True), encoding="utf-8")
    return path


def load_result(path: Path) -> CalibrationResult:
    return result_from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

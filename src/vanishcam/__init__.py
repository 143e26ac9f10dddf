from vanishcam import scene
from vanishcam.api import (
    AxisAssignment,
    CalibrationIssue,
    CalibrationResult,
    Corner,
    SignedAxis,
    calibrate,
    load_result,
    pose_command,
    pose_matrix,
    save_result,
)
from vanishcam.scene import load_scene

__all__ = [
    "scene",
    "AxisAssignment",
    "CalibrationIssue",
    "CalibrationResult",
    "Corner",
    "SignedAxis",
    "calibrate",
    "load_result",
    "load_scene",
    "pose_command",
    "pose_matrix",
    "save_result",
]

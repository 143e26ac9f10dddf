from vanishcam.api.calibration import CalibrationIssue, CalibrationResult, calibrate
from vanishcam.api.export import load_result, pose_command, pose_matrix, pose_quaternion, save_result
from vanishcam.core.vanishing import Corner
from vanishcam.core.world import AxisAssignment, SignedAxis

__all__ = [
    "AxisAssignment",
    "CalibrationIssue",
    "CalibrationResult",
    "Corner",
    "SignedAxis",
    "calibrate",
    "load_result",
    "pose_command",
    "pose_matrix",
    "pose_quaternion",
    "save_result",
]

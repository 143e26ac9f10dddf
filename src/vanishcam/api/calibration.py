from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from vanishcam.core.euler import euler_angles
from vanishcam.core.focal import field_of_view, focal_length
from vanishcam.core.linalg import inverse
from vanishcam.core.location import camera_location
from vanishcam.core.vanishing import Corner, vanishing_points
from vanishcam.core.world import AxisAssignment, world_transform

logger = logging.getLogger(__name__)


class CalibrationIssue(Enum):
    SINGULAR_GEOMETRY = "singular_geometry"
    NO_REAL_FOCAL_LENGTH = "no_real_focal_length"
    AMBIGUOUS_AXIS_ASSIGNMENT = "ambiguous_axis_assignment"
    MISSING_DISTANCE = "missing_distance"
    DEGENERATE_INVERSION = "degenerate_inversion"


def _readonly(a) -> np.ndarray:
    out = np.array(a, dtype=np.float64)
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class CalibrationResult:
    """
    Outcome of one calibration.

    Stages that could not be computed are None and the reason is listed in
    `issues`. Angles are in radians; `location` is in the units of the
    origin distance.
    """

    sensor_length: float
    vanishing_points: tuple[np.ndarray, np.ndarray] | None = None
    focal_length: float | None = None
    field_of_view: float | None = None
    world_transform: np.ndarray | None = None  # (3,3), columns = world axes in camera space
    location: np.ndarray | None = None  # (3,)
    euler_rotation: tuple[float, float, float] | None = None  # (alpha, beta, gamma)
    issues: tuple[CalibrationIssue, ...] = ()

    def __post_init__(self) -> None:
        # Array fields are private read-only copies.
        if self.vanishing_points is not None:
            vp0, vp1 = self.vanishing_points
            object.__setattr__(self, "vanishing_points", (_readonly(vp0), _readonly(vp1)))
        for name in ("world_transform", "location"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _readonly(value))

    @property
    def has_pose(self) -> bool:
        return self.world_transform is not None and self.euler_rotation is not None

    @property
    def field_of_view_degrees(self) -> float | None:
        if self.field_of_view is None:
            return None
        return math.degrees(self.field_of_view)

    @property
    def euler_rotation_degrees(self) -> tuple[float, float, float] | None:
        if self.euler_rotation is None:
            return None
        return tuple(math.degrees(a) for a in self.euler_rotation)  # type: ignore[return-value]

    @property
    def camera_to_world(self) -> np.ndarray | None:
        if self.world_transform is None:
            return None
        return inverse(self.world_transform)


def calibrate(
    corners: Sequence[Corner],
    axes: AxisAssignment,
    sensor_length: float,
    origin_distance: float | None = None,
    origin: tuple[float, float] = (0.0, 0.0),
) -> CalibrationResult:
    """
    Solve focal length, orientation and (with `origin_distance`) position.

    Geometric dead ends (parallel edges, no real focal length, both vanishing
    points on one axis, no distance) do not raise; the affected fields stay
    None and the result carries the matching CalibrationIssue.
    """
    if len(corners) != 2:
        raise ValueError(f"exactly two corners are required (got {len(corners)})")
    if not sensor_length > 0.0:
        raise ValueError("sensor_length must be > 0")
    if origin_distance is not None and not origin_distance > 0.0:
        raise ValueError("origin_distance must be > 0")
    sensor_length = float(sensor_length)

    vps = vanishing_points(corners)
    if vps is None:
        logger.debug("corresponding corner edges are parallel; no vanishing point")
        return CalibrationResult(sensor_length=sensor_length, issues=(CalibrationIssue.SINGULAR_GEOMETRY,))

    f = focal_length(vps[0], vps[1], sensor_length)
    if f is None:
        logger.debug("vanishing points %s and %s admit no real focal length", vps[0].tolist(), vps[1].tolist())
        return CalibrationResult(
            sensor_length=sensor_length,
            vanishing_points=vps,
            issues=(CalibrationIssue.NO_REAL_FOCAL_LENGTH,),
        )
    fov = field_of_view(f, sensor_length)
    partial = dict(sensor_length=sensor_length, vanishing_points=vps, focal_length=f, field_of_view=fov)

    if axes.is_ambiguous:
        logger.debug("axis assignment %s uses one axis twice; pose withheld", axes.labels)
        return CalibrationResult(**partial, issues=(CalibrationIssue.AMBIGUOUS_AXIS_ASSIGNMENT,))

    transform = world_transform(vps, f, sensor_length, axes)
    cam_to_world = inverse(transform)
    rotation = euler_angles(cam_to_world) if cam_to_world is not None else None
    if rotation is None:
        logger.debug("world transform could not be inverted; pose withheld")
        return CalibrationResult(**partial, issues=(CalibrationIssue.DEGENERATE_INVERSION,))

    issues: list[CalibrationIssue] = []
    location = None
    if origin_distance is None:
        logger.debug("no origin distance given; camera location withheld")
        issues.append(CalibrationIssue.MISSING_DISTANCE)
    else:
        location = camera_location(origin, origin_distance, f, sensor_length, transform)
        if location is None:
            issues.append(CalibrationIssue.DEGENERATE_INVERSION)

    return CalibrationResult(
        **partial,
        world_transform=transform,
        location=location,
        euler_rotation=rotation,
        issues=tuple(issues),
    )

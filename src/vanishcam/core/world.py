from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from vanishcam.core.linalg import cross, normalize, transpose


class AmbiguousAxisError(ValueError):
    pass


class SignedAxis(Enum):
    POS_X = (0, 1)
    NEG_X = (0, -1)
    POS_Y = (1, 1)
    NEG_Y = (1, -1)
    POS_Z = (2, 1)
    NEG_Z = (2, -1)

    @property
    def axis(self) -> int:
        return self.value[0]

    @property
    def sign(self) -> int:
        return self.value[1]

    @property
    def label(self) -> str:
        return ("+" if self.sign > 0 else "-") + "xyz"[self.axis]

    @classmethod
    def parse(cls, label: str) -> "SignedAxis":
        """Parse "+x", "-z", "y" (unsigned means positive)."""
        text = str(label).strip().lower()
        sign = 1
        if text[:1] in ("+", "-"):
            sign = -1 if text[0] == "-" else 1
            text = text[1:]
        if text not in ("x", "y", "z"):
            raise ValueError(f"invalid axis label: {label!r}")
        return cls(("xyz".index(text), sign))


@dataclass(frozen=True)
class AxisAssignment:
    """World axes for the first and second vanishing point."""

    first: SignedAxis
    second: SignedAxis

    @classmethod
    def parse(cls, first: str, second: str) -> "AxisAssignment":
        return cls(first=SignedAxis.parse(first), second=SignedAxis.parse(second))

    @property
    def is_ambiguous(self) -> bool:
        return self.first.axis == self.second.axis

    @property
    def labels(self) -> tuple[str, str]:
        return (self.first.label, self.second.label)


def camera_ray(uv: np.ndarray, focal: float, sensor_length: float) -> np.ndarray:
    """Camera-space direction through a UV point (camera looks down -z)."""
    uv = np.asarray(uv, dtype=np.float64).reshape(2)
    return np.array([uv[0], uv[1], -2.0 * float(focal) / float(sensor_length)], dtype=np.float64)


def world_transform(
    vanishing_points: tuple[np.ndarray, np.ndarray],
    focal: float,
    sensor_length: float,
    axes: AxisAssignment,
) -> np.ndarray:
    """
    Rotation whose columns are the world x, y, z axes expressed in camera space.

    Each vanishing ray becomes the row of its assigned world axis (flipped for
    a negative label); the remaining row is completed by a cross product so
    the basis stays right-handed.
    """
    if axes.is_ambiguous:
        raise AmbiguousAxisError(f"both vanishing points are assigned to the same axis: {axes.labels}")

    rows: list[np.ndarray | None] = [None, None, None]
    for vp, signed in zip(vanishing_points, (axes.first, axes.second)):
        rows[signed.axis] = normalize(camera_ray(vp, focal, sensor_length)) * signed.sign

    missing = next(i for i, row in enumerate(rows) if row is None)
    rows[missing] = cross(rows[(missing + 1) % 3], rows[(missing + 2) % 3])
    return transpose(np.stack(rows, axis=0))

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from vanishcam.core.linalg import inverse, transform_vector


def _uv(p) -> np.ndarray:
    p = np.asarray(p, dtype=np.float64).reshape(-1)
    if p.size != 2:
        raise ValueError(f"expected a 2D UV point, got {p.size} components")
    return p


@dataclass(frozen=True)
class Corner:
    """
    A real-world right-angle corner seen in the image.

    `center` is the anchor where the two edges meet; `point1` and `point2`
    are the UV positions of the far ends of the two edges. Edge family 0 runs
    through `point1`, family 1 through `point2`.
    """

    center: tuple[float, float]
    point1: tuple[float, float]
    point2: tuple[float, float]

    @classmethod
    def from_offsets(cls, center, offset1, offset2) -> "Corner":
        c = _uv(center)
        p1 = c + _uv(offset1)
        p2 = c + _uv(offset2)
        return cls(
            center=(float(c[0]), float(c[1])),
            point1=(float(p1[0]), float(p1[1])),
            point2=(float(p2[0]), float(p2[1])),
        )

    @property
    def points(self) -> tuple[tuple[float, float], tuple[float, float], tuple[float, float]]:
        return (self.center, self.point1, self.point2)

    def endpoint(self, family: int) -> np.ndarray:
        if family == 0:
            return _uv(self.point1)
        if family == 1:
            return _uv(self.point2)
        raise ValueError(f"edge family must be 0 or 1 (got {family})")

    def edge_direction(self, family: int) -> np.ndarray:
        return _uv(self.center) - self.endpoint(family)


def _check_corners(corners: Sequence[Corner]) -> tuple[Corner, Corner]:
    if len(corners) != 2:
        raise ValueError(f"exactly two corners are required (got {len(corners)})")
    return corners[0], corners[1]


PARALLEL_TOL = 1e3 * np.finfo(np.float64).eps


def is_parallel(a: np.ndarray, b: np.ndarray, tol: float = PARALLEL_TOL) -> bool:
    """
    True when 2D directions `a` and `b` are parallel up to rounding noise,
    i.e. |a x b| <= tol * |a| * |b|. A zero-length direction counts as parallel.
    """
    a = _uv(a)
    b = _uv(b)
    crs = abs(a[0] * b[1] - a[1] * b[0])
    return bool(crs <= tol * float(np.linalg.norm(a)) * float(np.linalg.norm(b)))


def vanishing_point(corners: Sequence[Corner], family: int) -> np.ndarray | None:
    """
    Intersect the rays o1 + t*p1 and o2 + s*p2 of one edge family.

    Returns the vanishing point in UV units, or None when the two edges are
    parallel (the vanishing point is at infinity).
    """
    c1, c2 = _check_corners(corners)
    o1 = _uv(c1.center)
    o2 = _uv(c2.center)
    p1 = c1.edge_direction(family)
    p2 = c2.edge_direction(family)
    if is_parallel(p1, p2):
        return None

    system = np.array([[p1[0], -p2[0]], [p1[1], -p2[1]]], dtype=np.float64)
    system_inv = inverse(system)
    if system_inv is None:
        return None
    t, _s = transform_vector(system_inv, o2 - o1)
    return o1 + t * p1


def vanishing_points(corners: Sequence[Corner]) -> tuple[np.ndarray, np.ndarray] | None:
    """
    Both vanishing points, or None when either is at infinity or a corner's
    own two edges are collinear.
    """
    for corner in _check_corners(corners):
        if is_parallel(corner.edge_direction(0), corner.edge_direction(1)):
            return None
    vp0 = vanishing_point(corners, 0)
    vp1 = vanishing_point(corners, 1)
    if vp0 is None or vp1 is None:
        return None
    return vp0, vp1

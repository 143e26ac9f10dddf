"""
Tait-Bryan angles from a rotation matrix.

The matrix is decomposed as Rz(gamma) @ Ry(beta) @ Rx(alpha). Reading gamma
and beta off the matrix entries is two-valued for each angle, so all four
(gamma, beta) branches are expanded, alpha is solved for each one, and the
branch whose recomposed matrix lies closest to the input wins.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass

import numpy as np

from vanishcam.core.linalg import inverse, multiply, rotation_3d


@dataclass(frozen=True)
class EulerCandidate:
    alpha: float
    beta: float
    gamma: float
    error: float

    @property
    def angles(self) -> tuple[float, float, float]:
        return (self.alpha, self.beta, self.gamma)


def compose_euler(alpha: float, beta: float, gamma: float) -> np.ndarray:
    return multiply(rotation_3d(2, gamma), multiply(rotation_3d(1, beta), rotation_3d(0, alpha)))


def _gamma_branches(m: np.ndarray) -> tuple[float, float]:
    if m[0, 0] == 0.0:
        gamma = math.copysign(math.pi / 2.0, m[1, 0])
    else:
        gamma = math.atan(m[1, 0] / m[0, 0])
    return (gamma, gamma + math.pi)


def _beta_branches(m: np.ndarray) -> tuple[float, float]:
    beta = -math.asin(float(np.clip(m[2, 0], -1.0, 1.0)))
    return (beta, math.pi - beta)


def euler_candidates(m: np.ndarray) -> list[EulerCandidate] | None:
    """
    All four branch candidates for `m`, in (gamma, beta) product order.

    Returns None if one of the elementary rotations cannot be inverted.
    """
    m = np.asarray(m, dtype=np.float64).reshape(3, 3)
    out: list[EulerCandidate] = []
    for gamma, beta in itertools.product(_gamma_branches(m), _beta_branches(m)):
        gamma_inv = inverse(rotation_3d(2, gamma))
        beta_inv = inverse(rotation_3d(1, beta))
        if gamma_inv is None or beta_inv is None:
            return None
        residual = multiply(beta_inv, multiply(gamma_inv, m))
        alpha = math.atan2(residual[2, 1], residual[1, 1])

        diff = compose_euler(alpha, beta, gamma) - m
        out.append(EulerCandidate(alpha=alpha, beta=beta, gamma=gamma, error=float(np.sum(diff * diff))))
    return out


def euler_angles(m: np.ndarray) -> tuple[float, float, float] | None:
    """
    Best (alpha, beta, gamma) in radians for rotation `m`.

    Ties keep the first candidate generated.
    """
    candidates = euler_candidates(m)
    if candidates is None:
        return None
    best = min(candidates, key=lambda c: c.error)
    return best.angles

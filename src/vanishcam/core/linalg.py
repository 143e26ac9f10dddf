from __future__ import annotations

import numpy as np


def _as_matrix(m: np.ndarray) -> np.ndarray:
    m = np.asarray(m, dtype=np.float64)
    if m.ndim != 2:
        raise ValueError(f"expected a 2D matrix, got shape {m.shape}")
    return m


def identity(size: int) -> np.ndarray:
    return np.eye(int(size), dtype=np.float64)


def transpose(m: np.ndarray) -> np.ndarray:
    return _as_matrix(m).T.copy()


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix product `a @ b`; raises ValueError when a.n != b.m."""
    a = _as_matrix(a)
    b = _as_matrix(b)
    if a.shape[1] != b.shape[0]:
        raise ValueError(f"cannot multiply {a.shape} by {b.shape}")
    return a @ b


def transform_vector(m: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Apply `m` to vector `v`.

    Only the first min(len(v), n) components take part; a longer vector is
    truncated and a shorter one behaves as if zero-padded.
    """
    m = _as_matrix(m)
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    k = min(v.size, m.shape[1])
    return m[:, :k] @ v[:k]


def inverse(m: np.ndarray, tol: float = 0.0) -> np.ndarray | None:
    """
    Gauss-Jordan inverse of a square matrix.

    Works on a copy of `m` together with an accumulating identity matrix.
    The forward pass normalizes each pivot row and clears the entries below
    the diagonal; a zero pivot is replaced by the first row further down the
    same column with a nonzero entry. The backward pass clears the entries
    above the diagonal.

    Returns None for non-square or singular input (|pivot| <= tol).
    """
    m = _as_matrix(m)
    rows, cols = m.shape
    if rows != cols:
        return None

    work = m.copy()
    inv = identity(cols)

    for col in range(cols):
        if abs(work[col, col]) <= tol:
            below = np.flatnonzero(np.abs(work[col + 1 :, col]) > tol)
            if below.size == 0:
                return None
            swap = col + 1 + int(below[0])
            work[[col, swap]] = work[[swap, col]]
            inv[[col, swap]] = inv[[swap, col]]

        pivot = work[col, col]
        work[col] /= pivot
        inv[col] /= pivot

        for row in range(col + 1, rows):
            factor = work[row, col]
            work[row] -= factor * work[col]
            inv[row] -= factor * inv[col]

    for col in range(cols - 1, -1, -1):
        for row in range(col - 1, -1, -1):
            factor = work[row, col]
            work[row] -= factor * work[col]
            inv[row] -= factor * inv[col]

    return inv


def rotation_3d(axis: int, radians: float) -> np.ndarray:
    """
    Right-handed rotation matrix about coordinate axis 0, 1 or 2 (x, y, z).
    """
    axis = int(axis)
    if axis not in (0, 1, 2):
        raise ValueError(f"axis must be 0, 1 or 2 (got {axis})")
    s = float(np.sin(radians))
    c = float(np.cos(radians))
    a1 = (axis + 1) % 3
    a2 = (axis + 2) % 3

    r = np.zeros((3, 3), dtype=np.float64)
    r[axis, axis] = 1.0
    r[a1, a1] = c
    r[a2, a2] = c
    r[a2, a1] = s
    r[a1, a2] = -s
    return r


# ---------------------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------------------


def _padded_pair(a: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    n = max(a.size, b.size)
    aa = np.zeros((n,), dtype=np.float64)
    bb = np.zeros((n,), dtype=np.float64)
    aa[: a.size] = a
    bb[: b.size] = b
    # Missing or non-numeric components count as zero.
    return np.nan_to_num(aa, nan=0.0), np.nan_to_num(bb, nan=0.0)


def vec_add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aa, bb = _padded_pair(a, b)
    return aa + bb


def vec_sub(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aa, bb = _padded_pair(a, b)
    return aa - bb


def vec_scale(v: np.ndarray, s: float) -> np.ndarray:
    return np.asarray(v, dtype=np.float64).reshape(-1) * float(s)


def normalize(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    norm = float(np.sqrt(np.sum(v * v)))
    if norm == 0.0 or not np.isfinite(norm):
        raise ValueError("cannot normalize a zero or non-finite vector")
    return v / norm


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if a.size != 3 or b.size != 3:
        raise ValueError("cross product is defined for 3D vectors only")
    out = np.empty((3,), dtype=np.float64)
    for i in range(3):
        out[i] = a[(i + 1) % 3] * b[(i + 2) % 3] - a[(i + 2) % 3] * b[(i + 1) % 3]
    return out

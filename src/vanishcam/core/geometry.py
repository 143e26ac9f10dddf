from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


def pixel_to_uv(
    x_px: np.ndarray, y_px: np.ndarray, width_px: int, height_px: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Map image pixel coordinates -> UV.

    Convention: pixel origin at the top-left corner, y down. UV origin at the
    image centre, v up, 1 unit = half of the longer image side.
    """
    x_px = np.asarray(x_px, dtype=np.float64)
    y_px = np.asarray(y_px, dtype=np.float64)
    scale = 2.0 / float(max(width_px, height_px))
    u = (x_px - width_px / 2.0) * scale
    v = -(y_px - height_px / 2.0) * scale
    return u, v


def uv_to_pixel(u: np.ndarray, v: np.ndarray, width_px: int, height_px: int) -> tuple[np.ndarray, np.ndarray]:
    """Inverse of `pixel_to_uv`."""
    u = np.asarray(u, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    scale = float(max(width_px, height_px)) / 2.0
    x_px = u * scale + width_px / 2.0
    y_px = -v * scale + height_px / 2.0
    return x_px, y_px


def sensor_length(width_mm: float, height_mm: float) -> float:
    """Longer sensor side; UV units are relative to it."""
    return float(max(width_mm, height_mm))


def match_sensor_aspect(
    width_mm: float,
    height_mm: float,
    image_width_px: int,
    image_height_px: int,
    deciding: int | None = None,
) -> tuple[float, float]:
    """
    Adjust sensor dimensions to the image aspect ratio.

    deciding=0 keeps the width, deciding=1 keeps the height. With None the
    longer of the two sensor dimensions is put on the longer image side.
    """
    aspect = float(image_width_px) / float(image_height_px)
    width_mm = float(width_mm)
    height_mm = float(height_mm)

    if deciding is None:
        longest = max(width_mm, height_mm)
        if aspect > 1.0:
            return longest, longest / aspect
        return longest * aspect, longest
    if deciding == 0:
        return width_mm, width_mm / aspect
    if deciding == 1:
        return height_mm * aspect, height_mm
    raise ValueError(f"deciding must be None, 0 or 1 (got {deciding})")


def image_size(path: str | Path) -> tuple[int, int]:
    """(width_px, height_px) of an image file."""
    with Image.open(Path(path)) as im:
        return int(im.width), int(im.height)

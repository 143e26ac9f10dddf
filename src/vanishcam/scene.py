from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vanishcam.core.geometry import pixel_to_uv, sensor_length
from vanishcam.core.vanishing import Corner
from vanishcam.core.world import AxisAssignment

SCENE_SCHEMA = "vanishcam.scene.v0"


class SceneValidationError(ValueError):
    pass


@dataclass(frozen=True)
class SensorMeta:
    width_mm: float
    height_mm: float

    @property
    def length_mm(self) -> float:
        return sensor_length(self.width_mm, self.height_mm)


@dataclass(frozen=True)
class ImageMeta:
    width_px: int
    height_px: int


@dataclass(frozen=True)
class Scene:
    """Everything one calibration needs, with all points in UV units."""

    sensor: SensorMeta
    corners: tuple[Corner, Corner]
    axes: AxisAssignment
    origin: tuple[float, float] = (0.0, 0.0)
    distance: float | None = None
    image: ImageMeta | None = None


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise SceneValidationError(msg)


def _point(raw: Any, name: str) -> tuple[float, float]:
    _require(isinstance(raw, (list, tuple)) and len(raw) == 2, f"{name} must be [u,v]")
    try:
        return float(raw[0]), float(raw[1])
    except (TypeError, ValueError) as exc:
        raise SceneValidationError(f"{name} must contain numbers") from exc


def _number(raw: Any, name: str, cast=float):
    try:
        return cast(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise SceneValidationError(f"{name} must be a number") from exc


def load_scene(path: Path) -> Scene:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_scene(data)


def parse_scene(data: dict[str, Any]) -> Scene:
    _require(isinstance(data, dict), "scene must be a JSON object")
    _require(data.get("schema_version") == SCENE_SCHEMA, f"schema_version must be {SCENE_SCHEMA}")

    units = data.get("units", "uv")
    _require(units in ("uv", "px"), "units must be 'uv' or 'px'")

    image = None
    image_raw = data.get("image")
    if image_raw is not None:
        _require(isinstance(image_raw, dict), "image must be an object")
        w_raw = image_raw.get("width_px")
        h_raw = image_raw.get("height_px")
        _require(w_raw is not None and h_raw is not None, "image.width_px and image.height_px are required")
        image = ImageMeta(
            width_px=_number(w_raw, "image.width_px", int),
            height_px=_number(h_raw, "image.height_px", int),
        )
        _require(image.width_px > 0 and image.height_px > 0, "image.width_px and image.height_px must be > 0")
    _require(units == "uv" or image is not None, "units 'px' requires image.width_px and image.height_px")

    sensor_raw = data.get("sensor", {})
    _require(isinstance(sensor_raw, dict), "sensor must be an object")
    sw_raw = sensor_raw.get("width_mm")
    sh_raw = sensor_raw.get("height_mm", sw_raw)
    _require(sw_raw is not None, "sensor.width_mm is required")
    sensor = SensorMeta(
        width_mm=_number(sw_raw, "sensor.width_mm"),
        height_mm=_number(sh_raw, "sensor.height_mm"),
    )
    _require(sensor.width_mm > 0.0 and sensor.height_mm > 0.0, "sensor dimensions must be > 0")

    def to_uv(p: tuple[float, float]) -> tuple[float, float]:
        if units == "uv":
            return p
        u, v = pixel_to_uv(p[0], p[1], image.width_px, image.height_px)
        return float(u), float(v)

    corners_raw = data.get("corners")
    _require(isinstance(corners_raw, list) and len(corners_raw) == 2, "corners must be a list of two corners")
    corners = []
    for i, c in enumerate(corners_raw):
        _require(isinstance(c, dict), f"corners[{i}] must be an object")
        corners.append(
            Corner(
                center=to_uv(_point(c.get("center"), f"corners[{i}].center")),
                point1=to_uv(_point(c.get("point1"), f"corners[{i}].point1")),
                point2=to_uv(_point(c.get("point2"), f"corners[{i}].point2")),
            )
        )

    axes_raw = data.get("axes", ["+x", "+y"])
    _require(isinstance(axes_raw, (list, tuple)) and len(axes_raw) == 2, "axes must be [axis1, axis2]")
    try:
        axes = AxisAssignment.parse(str(axes_raw[0]), str(axes_raw[1]))
    except ValueError as exc:
        raise SceneValidationError(f"axes: {exc}") from exc

    # Default origin is the image centre.
    origin_raw = data.get("origin")
    origin = (0.0, 0.0) if origin_raw is None else to_uv(_point(origin_raw, "origin"))

    distance = data.get("distance")
    if distance is not None:
        distance = _number(distance, "distance")
        _require(distance > 0.0, "distance must be > 0")

    return Scene(
        sensor=sensor,
        corners=(corners[0], corners[1]),
        axes=axes,
        origin=origin,
        distance=distance,
        image=image,
    )


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Serialize a scene (always in UV units)."""
    out: dict[str, Any] = {
        "schema_version": SCENE_SCHEMA,
        "units": "uv",
        "sensor": {"width_mm": scene.sensor.width_mm, "height_mm": scene.sensor.height_mm},
        "corners": [
            {"center": list(c.center), "point1": list(c.point1), "point2": list(c.point2)} for c in scene.corners
        ],
        "axes": list(scene.axes.labels),
        "origin": list(scene.origin),
    }
    if scene.image is not None:
        out["image"] = {"width_px": scene.image.width_px, "height_px": scene.image.height_px}
    if scene.distance is not None:
        out["distance"] = scene.distance
    return out


def default_scene() -> Scene:
    """Reference two-corner scene on a 36 mm sensor."""
    return Scene(
        sensor=SensorMeta(width_mm=36.0, height_mm=24.0),
        corners=(
            Corner(center=(-0.30, 0.07), point1=(0.04, 0.24), point2=(-0.08, -0.10)),
            Corner(center=(0.36, 0.21), point1=(0.11, -0.02), point2=(0.17, 0.27)),
        ),
        axes=AxisAssignment.parse("+x", "+y"),
        origin=(0.0, 0.0),
        distance=10.0,
    )

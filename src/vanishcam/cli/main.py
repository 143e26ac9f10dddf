from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from vanishcam.api.calibration import calibrate
from vanishcam.api.export import pose_command, result_to_dict, save_result
from vanishcam.core.geometry import image_size
from vanishcam.scene import default_scene, parse_scene, scene_to_dict


def _summary(result) -> dict:
    data = result_to_dict(result)
    data["field_of_view_degrees"] = result.field_of_view_degrees
    data["euler_rotation_degrees"] = (
        None if result.euler_rotation_degrees is None else list(result.euler_rotation_degrees)
    )
    return data


def run_solve(
    scene_path: Path,
    *,
    image_path: Path | None = None,
    distance: float | None = None,
    out: Path | None = None,
    command: bool = False,
) -> int:
    data = json.loads(Path(scene_path).read_text(encoding="utf-8"))
    if image_path is not None:
        w, h = image_size(image_path)
        data["image"] = {"width_px": w, "height_px": h}
    scene = parse_scene(data)

    result = calibrate(
        scene.corners,
        scene.axes,
        scene.sensor.length_mm,
        origin_distance=distance if distance is not None else scene.distance,
        origin=scene.origin,
    )
    print(json.dumps(_summary(result), indent=2, sort_keys=True))

    if out is not None:
        save_result(out, result)
        print(f"Wrote {out}")
    if command and result.has_pose and result.location is not None:
        print(pose_command(result))
    return 0 if result.has_pose else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="vanishcam")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log intermediate stages (DEBUG).")
    sub = parser.add_subparsers(dest="cmd", required=True)

    solve = sub.add_parser("solve", help="Calibrate a camera from a two-corner scene file.")
    solve.add_argument("scene", type=Path)
    solve.add_argument(
        "--image",
        type=Path,
        default=None,
        help="Image the scene was drawn on; its size is used for pixel-unit scenes.",
    )
    solve.add_argument("--distance", type=float, default=None, help="Override the camera-to-origin distance.")
    solve.add_argument("--out", type=Path, default=None, help="Write the full result as JSON.")
    solve.add_argument("--command", action="store_true", help="Also print the camera placement command.")

    example = sub.add_parser("example-scene", help="Write the reference scene file.")
    example.add_argument("--out", type=Path, required=True)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "solve":
        try:
            return run_solve(
                args.scene,
                image_path=args.image,
                distance=args.distance,
                out=args.out,
                command=args.command,
            )
        except ValueError as exc:
            logging.getLogger(__name__).error("invalid scene %s: %s", args.scene, exc)
            return 2

    if args.cmd == "example-scene":
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(json.dumps(scene_to_dict(default_scene()), indent=2), encoding="utf-8")
        print(f"Wrote {args.out}")
        return 0

    raise AssertionError(f"Unhandled cmd: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line entry point: compute an edge path and its control markers."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from edge_editor.config import load_settings
from edge_editor.geometry_core import Point
from edge_editor.model.edge_model import ActivePoint, Algorithm, Side, SideHints, new_point_id
from edge_editor.path import compute_control_points, compute_path
from edge_editor.path.sampling import label_anchor

logger = logging.getLogger(__name__)


def parse_point(text: str) -> Point:
    try:
        x_text, y_text = text.split(",")
        return float(x_text), float(y_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid point {text!r}, expected X,Y") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute an editable edge path")
    parser.add_argument(
        "--points",
        required=True,
        type=lambda raw: [parse_point(part) for part in raw.split()],
        help='Space separated X,Y pairs, endpoints included (e.g. "0,0 100,0 100,100").',
    )
    parser.add_argument(
        "--algorithm",
        choices=[algorithm.value for algorithm in Algorithm],
        default=None,
        help="Path algorithm. Defaults to the configured default algorithm.",
    )
    parser.add_argument(
        "--from-side",
        choices=[side.value for side in Side],
        default=Side.LEFT.value,
    )
    parser.add_argument(
        "--to-side",
        choices=[side.value for side in Side],
        default=Side.RIGHT.value,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings INI file. Defaults to EDGE_EDITOR_CONFIG or edge_editor.ini.",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument(
        "--log-level",
        default=os.getenv("EDGE_EDITOR_LOG_LEVEL", "WARNING"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to EDGE_EDITOR_LOG_LEVEL "
            "environment variable or WARNING."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("EDGE_EDITOR_LOG_PATH"),
        help="Optional log file path. Defaults to EDGE_EDITOR_LOG_PATH.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> None:
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_path:
        handlers.insert(0, logging.FileHandler(log_path, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def build_report(args: argparse.Namespace) -> dict[str, object]:
    settings = load_settings(args.config)
    algorithm = Algorithm(args.algorithm) if args.algorithm else settings.default_algorithm
    sides = SideHints(Side(args.from_side), Side(args.to_side))

    coords = list(args.points)
    if len(coords) >= 2:
        interior = tuple(ActivePoint(new_point_id(), x, y) for x, y in coords[1:-1])
        path_points = [coords[0], *interior, coords[-1]]
    else:
        path_points = coords

    path = compute_path(path_points, algorithm, sides)
    markers = compute_control_points(
        path_points, algorithm, sides, settings.midpoint_min_segment_length
    )
    anchor = None
    if len(coords) >= 2:
        anchor = label_anchor(path, coords[0], coords[-1])
    return {
        "algorithm": algorithm.value,
        "path": path.to_svg(),
        "markers": [
            {"x": m.x, "y": m.y, "active": m.active, "id": m.id} for m in markers
        ],
        "label_anchor": list(anchor) if anchor is not None else None,
    }


def format_report(report: dict[str, object]) -> str:
    lines = [f"algorithm: {report['algorithm']}", f"path: {report['path']}"]
    for marker in report["markers"]:
        state = "active" if marker["active"] else "inactive"
        lines.append(f"marker: {marker['x']:.2f},{marker['y']:.2f} ({state})")
    anchor = report["label_anchor"]
    if anchor is not None:
        lines.append(f"label: {anchor[0]:.2f},{anchor[1]:.2f}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.debug else args.log_level, args.log_file)
    logger.debug("Computing path for %d points", len(args.points))

    report = build_report(args)
    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Path generation and control-point synthesis for editable edges.

``compute_path`` and ``compute_control_points`` are pure: the same points,
algorithm and side hints always produce the same output. Malformed input
(fewer than two points or non-finite coordinates) produces an empty path and
no markers; callers treat that as "nothing to draw".
"""
from __future__ import annotations

import logging
from typing import Sequence

from edge_editor.geometry_core import is_finite_point, to_xy
from edge_editor.model.edge_model import Algorithm, ControlPoint, SideHints
from edge_editor.path.catmull_rom import get_catmull_rom_control_points, get_catmull_rom_path
from edge_editor.path.commands import (
    EMPTY_PATH,
    CurveTo,
    LineTo,
    MoveTo,
    PathCommand,
    PathDescription,
)
from edge_editor.path.linear import MIN_SEGMENT_LENGTH, get_linear_control_points, get_linear_path

logger = logging.getLogger(__name__)


def _is_drawable(points: Sequence[object]) -> bool:
    if len(points) < 2:
        return False
    if not all(is_finite_point(to_xy(p)) for p in points):
        logger.debug("Ignoring path input with non-finite coordinates")
        return False
    return True


def compute_path(
    points: Sequence[object],
    algorithm: Algorithm | None = None,
    sides: SideHints | None = None,
) -> PathDescription:
    if not _is_drawable(points):
        return EMPTY_PATH
    algorithm = Algorithm(algorithm) if algorithm is not None else Algorithm.LINEAR
    sides = sides or SideHints()
    if algorithm == Algorithm.LINEAR:
        return get_linear_path(points, sides)
    return get_catmull_rom_path(points, sides, algorithm)


def compute_control_points(
    points: Sequence[object],
    algorithm: Algorithm | None = None,
    sides: SideHints | None = None,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    id_prefix: str = "",
) -> tuple[ControlPoint, ...]:
    if not _is_drawable(points):
        return ()
    algorithm = Algorithm(algorithm) if algorithm is not None else Algorithm.LINEAR
    sides = sides or SideHints()
    if algorithm == Algorithm.LINEAR:
        return get_linear_control_points(points, sides, min_segment_length, id_prefix)
    return get_catmull_rom_control_points(
        points, sides, algorithm, min_segment_length, id_prefix
    )


__all__ = [
    "compute_path",
    "compute_control_points",
    "PathDescription",
    "PathCommand",
    "MoveTo",
    "LineTo",
    "CurveTo",
    "MIN_SEGMENT_LENGTH",
]

"""Orthogonal (right-angle) routing for linear connectors.

Consecutive points that differ in both axes are joined through a single
corner. The corner orientation is picked per segment: the first segment leaves
the source along its side's axis, the last segment arrives perpendicular to
the target side, and interior segments go horizontal first.
"""
from __future__ import annotations

import logging
from typing import Iterator, Sequence

from edge_editor.geometry_core import Point, distance, midpoint, points_equal, to_xy
from edge_editor.model.edge_model import (
    ActivePoint,
    ControlPoint,
    SideHints,
    SynthesizedPoint,
    is_horizontal_side,
)
from edge_editor.path.commands import EMPTY_PATH, LineTo, MoveTo, PathDescription

logger = logging.getLogger(__name__)

SubSegment = tuple[Point, Point]

# Sub-segments shorter than this get no midpoint marker.
MIN_SEGMENT_LENGTH = 25.0


def orth_segments(p1: Point, p2: Point, prefer_horizontal_first: bool) -> list[SubSegment]:
    if points_equal(p1, p2):
        return []
    if p1[0] == p2[0] or p1[1] == p2[1]:
        return [(p1, p2)]
    if prefer_horizontal_first:
        corner = (p2[0], p1[1])
    else:
        corner = (p1[0], p2[1])
    return [(p1, corner), (corner, p2)]


def prefer_horizontal_first(segment_index: int, segment_count: int, sides: SideHints) -> bool:
    if segment_index == 0:
        return is_horizontal_side(sides.from_side)
    if segment_index == segment_count - 1:
        return not is_horizontal_side(sides.to_side)
    return True


def iter_segments(
    points: Sequence[Point], sides: SideHints
) -> Iterator[tuple[int, list[SubSegment]]]:
    """Yield ``(segment_index, sub_segments)`` for each consecutive pair."""
    segment_count = len(points) - 1
    for index in range(segment_count):
        horizontal_first = prefer_horizontal_first(index, segment_count, sides)
        yield index, orth_segments(points[index], points[index + 1], horizontal_first)


def get_linear_path(points: Sequence[object], sides: SideHints | None = None) -> PathDescription:
    if len(points) < 2:
        return EMPTY_PATH
    sides = sides or SideHints()
    coords = [to_xy(p) for p in points]

    commands: list = [MoveTo(coords[0])]
    for _index, sub_segments in iter_segments(coords, sides):
        for _start, end in sub_segments:
            commands.append(LineTo(end))
    return PathDescription(tuple(commands))


def get_linear_control_points(
    points: Sequence[object],
    sides: SideHints | None = None,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    id_prefix: str = "",
) -> tuple[ControlPoint, ...]:
    """Active points interleaved with midpoint markers for every long enough sub-segment.

    Marker ids are unique within one edge; ``id_prefix`` scopes them across edges.
    """
    if len(points) < 2:
        return ()
    sides = sides or SideHints()
    coords = [to_xy(p) for p in points]

    control_points: list[ControlPoint] = []
    active_count = 0
    last_active_id: str | None = None
    for index, sub_segments in iter_segments(coords, sides):
        head = points[index]
        if isinstance(head, ActivePoint):
            control_points.append(head)
            active_count += 1
            last_active_id = head.id

        for sub_index, (start, end) in enumerate(sub_segments):
            length = distance(start, end)
            if length < min_segment_length:
                logger.debug(
                    "Skipping midpoint for short sub-segment %s -> %s (length %.2f)",
                    start,
                    end,
                    length,
                )
                continue
            mx, my = midpoint(start, end)
            control_points.append(
                SynthesizedPoint(
                    id=f"{id_prefix}spline-{index}-{sub_index}",
                    x=mx,
                    y=my,
                    prev=last_active_id,
                    insertion_index=active_count,
                )
            )
    if isinstance(points[-1], ActivePoint):
        control_points.append(points[-1])
    return tuple(control_points)

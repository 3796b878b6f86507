"""Smooth connectors through every control point.

Both variants build a cubic Hermite spline and emit it as Bézier segments.
The tangent at an interior point is shared by the two spans that meet there,
so the curve is C1 continuous. End tangents follow the attachment sides: the
curve leaves the source along the outward normal of its side and enters the
target against the outward normal of the target side.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

from edge_editor.geometry_core import Point, distance, points_equal, to_xy
from edge_editor.model.edge_model import (
    ActivePoint,
    Algorithm,
    ControlPoint,
    SideHints,
    SynthesizedPoint,
    side_vector,
)
from edge_editor.path.commands import EMPTY_PATH, CurveTo, MoveTo, PathDescription
from edge_editor.path.linear import MIN_SEGMENT_LENGTH

logger = logging.getLogger(__name__)

BezierSpan = tuple[Point, Point, Point, Point]


def _collapse(points: Sequence[object]) -> list[tuple[Point, list[object]]]:
    """Group consecutive coincident points; each group keeps its original members."""
    groups: list[tuple[Point, list[object]]] = []
    for point in points:
        xy = to_xy(point)
        if groups and points_equal(groups[-1][0], xy):
            groups[-1][1].append(point)
        else:
            groups.append((xy, [point]))
    return groups


def _interior_tangent(prev: Point, here: Point, nxt: Point, algorithm: Algorithm) -> Point:
    dx = nxt[0] - prev[0]
    dy = nxt[1] - prev[1]
    if algorithm == Algorithm.CATMULL_ROM:
        return dx / 2, dy / 2

    mag = math.hypot(dx, dy)
    if mag <= 0:
        return 0.0, 0.0
    scale = min(distance(prev, here), distance(here, nxt)) / mag
    return dx * scale, dy * scale


def _tangents(pts: Sequence[Point], sides: SideHints, algorithm: Algorithm) -> list[Point]:
    last = len(pts) - 1
    start_dir = side_vector(sides.from_side)
    end_dir = side_vector(sides.to_side)
    first_chord = distance(pts[0], pts[1])
    last_chord = distance(pts[last - 1], pts[last])

    tangents: list[Point] = [(start_dir[0] * first_chord, start_dir[1] * first_chord)]
    for i in range(1, last):
        tangents.append(_interior_tangent(pts[i - 1], pts[i], pts[i + 1], algorithm))
    tangents.append((-end_dir[0] * last_chord, -end_dir[1] * last_chord))
    return tangents


def bezier_spans(
    pts: Sequence[Point], sides: SideHints, algorithm: Algorithm
) -> list[BezierSpan]:
    """Cubic Bézier ``(p0, c1, c2, p3)`` for each span between distinct points."""
    if len(pts) < 2:
        return []
    tangents = _tangents(pts, sides, algorithm)
    spans: list[BezierSpan] = []
    for i in range(len(pts) - 1):
        p0, p3 = pts[i], pts[i + 1]
        t0, t1 = tangents[i], tangents[i + 1]
        c1 = (p0[0] + t0[0] / 3, p0[1] + t0[1] / 3)
        c2 = (p3[0] - t1[0] / 3, p3[1] - t1[1] / 3)
        spans.append((p0, c1, c2, p3))
    return spans


def evaluate_bezier(span: BezierSpan, t: float) -> Point:
    p0, c1, c2, p3 = span
    mt = 1 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t
    return (
        a * p0[0] + b * c1[0] + c * c2[0] + d * p3[0],
        a * p0[1] + b * c1[1] + c * c2[1] + d * p3[1],
    )


def get_catmull_rom_path(
    points: Sequence[object],
    sides: SideHints | None = None,
    algorithm: Algorithm = Algorithm.CATMULL_ROM,
) -> PathDescription:
    if len(points) < 2:
        return EMPTY_PATH
    sides = sides or SideHints()
    pts = [xy for xy, _members in _collapse(points)]

    commands: list = [MoveTo(pts[0])]
    for _p0, c1, c2, p3 in bezier_spans(pts, sides, algorithm):
        commands.append(CurveTo(c1, c2, p3))
    return PathDescription(tuple(commands))


def get_catmull_rom_control_points(
    points: Sequence[object],
    sides: SideHints | None = None,
    algorithm: Algorithm = Algorithm.CATMULL_ROM,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
    id_prefix: str = "",
) -> tuple[ControlPoint, ...]:
    if len(points) < 2:
        return ()
    sides = sides or SideHints()
    groups = _collapse(points)
    spans = bezier_spans([xy for xy, _members in groups], sides, algorithm)

    control_points: list[ControlPoint] = []
    active_count = 0
    last_active_id: str | None = None
    for index, (_xy, members) in enumerate(groups):
        for member in members:
            if isinstance(member, ActivePoint):
                control_points.append(member)
                active_count += 1
                last_active_id = member.id

        if index >= len(spans):
            continue
        span = spans[index]
        chord = distance(span[0], span[3])
        if chord < min_segment_length:
            logger.debug("Skipping midpoint for short span %d (chord %.2f)", index, chord)
            continue
        mx, my = evaluate_bezier(span, 0.5)
        control_points.append(
            SynthesizedPoint(
                id=f"{id_prefix}spline-{index}-0",
                x=mx,
                y=my,
                prev=last_active_id,
                insertion_index=active_count,
            )
        )
    return tuple(control_points)

from __future__ import annotations

import math
from typing import Sequence

Point = tuple[float, float]


def to_xy(p) -> Point:
    """Return ``p`` as an ``(x, y)`` tuple; accepts tuples or objects with ``x``/``y``."""
    if isinstance(p, (tuple, list)):
        return float(p[0]), float(p[1])
    return float(p.x), float(p.y)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def midpoint(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) / 2, (a[1] + b[1]) / 2


def points_equal(a: Point, b: Point) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def points_close(a: Point, b: Point, tol: float = 1e-6) -> bool:
    return distance(a, b) <= tol


def is_finite_point(p: Point) -> bool:
    return math.isfinite(p[0]) and math.isfinite(p[1])


def cumulative_lengths(points: Sequence[Point]) -> list[float]:
    """Running polyline length at each vertex, starting at 0."""
    lengths: list[float] = []
    acc = 0.0
    for index, point in enumerate(points):
        if index > 0:
            acc += distance(points[index - 1], point)
        lengths.append(acc)
    return lengths


def nearest_index(points: Sequence[Point], target: Point) -> int:
    """Index of the point closest to ``target``; the first one wins ties."""
    best_index = 0
    best_dist = distance(target, points[0])
    for index in range(1, len(points)):
        d = distance(target, points[index])
        if d < best_dist:
            best_dist = d
            best_index = index
    return best_index

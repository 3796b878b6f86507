"""Functional updates applied to an edge's active point sequence.

Each factory returns a ``PointsUpdate``: a callable taking the current tuple of
active points and returning a new tuple. The previous tuple is never mutated.
Updates are handed to the owning store, which applies them in event order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Sequence

from edge_editor.geometry_core import Point
from edge_editor.model.edge_model import (
    ActivePoint,
    ControlPoint,
    SynthesizedPoint,
    new_point_id,
)

NUDGE_STEP = 5.0

UpdateKind = Literal["activate", "move", "delete"]

_ARROW_OFFSETS = {
    "ArrowLeft": (-1.0, 0.0),
    "ArrowRight": (1.0, 0.0),
    "ArrowUp": (0.0, -1.0),
    "ArrowDown": (0.0, 1.0),
}
ARROW_KEYS = frozenset(_ARROW_OFFSETS)


@dataclass(frozen=True)
class PointsUpdate:
    kind: UpdateKind
    point_id: str
    apply: Callable[[tuple[ActivePoint, ...]], tuple[ActivePoint, ...]]

    def __call__(self, points: Sequence[ActivePoint]) -> tuple[ActivePoint, ...]:
        return self.apply(tuple(points))


def _resolve_insert_at(points: Sequence[ActivePoint], point: SynthesizedPoint) -> int:
    if point.prev:
        for index, candidate in enumerate(points):
            if candidate.id == point.prev:
                return index + 1
    return max(0, min(point.insertion_index or 0, len(points)))


def activate_or_move(point: ControlPoint, pos: Point) -> PointsUpdate:
    """Activate an inactive marker at ``pos``, or move an active point in place.

    Activation creates a new active point with a fresh id; ``PointsUpdate.point_id``
    carries that id so the caller can keep dragging the new point. Applying the
    same update twice only moves the point.
    """
    x, y = float(pos[0]), float(pos[1])
    point_id = new_point_id() if isinstance(point, SynthesizedPoint) else point.id

    def _move(points: tuple[ActivePoint, ...]) -> tuple[ActivePoint, ...]:
        return tuple(ActivePoint(p.id, x, y) if p.id == point_id else p for p in points)

    if not isinstance(point, SynthesizedPoint):
        return PointsUpdate("move", point_id, _move)

    def _activate(points: tuple[ActivePoint, ...]) -> tuple[ActivePoint, ...]:
        if any(p.id == point_id for p in points):
            return _move(points)
        insert_at = _resolve_insert_at(points, point)
        return points[:insert_at] + (ActivePoint(point_id, x, y),) + points[insert_at:]

    return PointsUpdate("activate", point_id, _activate)


def delete_point(point_id: str) -> PointsUpdate:
    def _delete(points: tuple[ActivePoint, ...]) -> tuple[ActivePoint, ...]:
        return tuple(p for p in points if p.id != point_id)

    return PointsUpdate("delete", point_id, _delete)


def nudged_position(point: ControlPoint, key: str, step: float = NUDGE_STEP) -> Point:
    dx, dy = _ARROW_OFFSETS[key]
    return point.x + dx * step, point.y + dy * step


def nudge(point: ControlPoint, key: str, step: float = NUDGE_STEP) -> PointsUpdate:
    """Move an active point ``step`` units in the direction of an arrow key."""
    return activate_or_move(point, nudged_position(point, key, step))


def preceding_active_id(points: Sequence[ActivePoint], point_id: str) -> str | None:
    """Id of the active point right before ``point_id``, if any."""
    for index, point in enumerate(points):
        if point.id == point_id:
            return points[index - 1].id if index > 0 else None
    return None

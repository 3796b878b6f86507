from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from edge_editor.geometry_core import Point
from edge_editor.model.edge_model import ActivePoint, ControlPoint
from edge_editor.model.point_updates import (
    ARROW_KEYS,
    NUDGE_STEP,
    PointsUpdate,
    activate_or_move,
    delete_point,
    nudge,
    nudged_position,
    preceding_active_id,
)

logger = logging.getLogger(__name__)

ACTIVATE_KEYS = frozenset({"Enter", " "})
DELETE_KEYS = frozenset({"Backspace", "Delete"})


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class PointerEvent:
    pos: tuple[float, float]
    button: Optional[str] = "left"


@dataclass
class ControlPointUpdate:
    handled: bool = False
    repaint: bool = False
    deleted: bool = False
    prevent_default: bool = False
    focus_point_id: str | None = None


class ControlPointController:
    """Interaction state for one rendered control point marker.

    All changes are committed through ``set_control_points``, the owning
    edge's update funnel. Pointer positions are mapped with ``map_to_canvas``
    before use.
    """

    def __init__(
        self,
        point: ControlPoint,
        set_control_points: Callable[[PointsUpdate], object],
        *,
        map_to_canvas: Callable[[Point], Point] | None = None,
        end_interaction: Callable[[], None] | None = None,
        nudge_step: float = NUDGE_STEP,
    ) -> None:
        self._point = point
        self._set_control_points = set_control_points
        self._map_to_canvas = map_to_canvas or (lambda pos: pos)
        self._end_interaction = end_interaction
        self._nudge_step = nudge_step
        self._state = DragState.IDLE

    @property
    def point(self) -> ControlPoint:
        return self._point

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragging(self) -> bool:
        return self._state is DragState.DRAGGING

    @property
    def active(self) -> bool:
        return self._point.active

    def sync(self, point: ControlPoint) -> None:
        """Take the marker produced by the latest recomputation."""
        self._point = point

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------
    def _commit_position(self, pos: Point) -> None:
        update = activate_or_move(self._point, pos)
        self._set_control_points(update)
        if update.kind == "activate":
            logger.debug("Activated marker %s as point %s", self._point.id, update.point_id)
        self._point = ActivePoint(update.point_id, float(pos[0]), float(pos[1]))

    def _commit_delete(self) -> str | None:
        point_id = self._point.id
        base = delete_point(point_id)
        focus: list[str | None] = [None]

        def _delete(points):
            focus[0] = preceding_active_id(points, point_id)
            return base.apply(points)

        self._set_control_points(PointsUpdate("delete", point_id, _delete))
        self._state = DragState.IDLE
        return focus[0]

    def _finish_drag(self) -> None:
        self._state = DragState.IDLE
        if self._end_interaction is not None:
            self._end_interaction()

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------
    def handle_pointer_down(self, event: PointerEvent) -> ControlPointUpdate:
        if event.button == "right":
            return ControlPointUpdate()
        if self._end_interaction is not None:
            # A drag never merges into earlier keyboard nudges.
            self._end_interaction()
        was_active = self._point.active
        self._commit_position(self._point.position)
        self._state = DragState.DRAGGING
        return ControlPointUpdate(handled=True, repaint=True, prevent_default=not was_active)

    def handle_pointer_move(self, event: PointerEvent) -> ControlPointUpdate:
        if not self.dragging or not self._point.active:
            return ControlPointUpdate()
        self._commit_position(self._map_to_canvas(event.pos))
        return ControlPointUpdate(handled=True, repaint=True)

    def handle_pointer_up(self, event: PointerEvent) -> ControlPointUpdate:
        if not self.dragging:
            return ControlPointUpdate()
        self._commit_position(self._map_to_canvas(event.pos))
        self._finish_drag()
        return ControlPointUpdate(handled=True, repaint=True)

    def handle_pointer_leave(self, event: PointerEvent) -> ControlPointUpdate:
        return self.handle_pointer_up(event)

    def handle_context_menu(self) -> ControlPointUpdate:
        if not self._point.active:
            return ControlPointUpdate(prevent_default=True)
        focus = self._commit_delete()
        return ControlPointUpdate(
            handled=True, repaint=True, deleted=True, prevent_default=True, focus_point_id=focus
        )

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_key_press(self, key: str) -> ControlPointUpdate:
        if key in ACTIVATE_KEYS:
            was_active = self._point.active
            self._commit_position(self._point.position)
            return ControlPointUpdate(handled=True, repaint=True, prevent_default=not was_active)

        if key in DELETE_KEYS:
            if not self._point.active:
                return ControlPointUpdate(handled=True)
            focus = self._commit_delete()
            return ControlPointUpdate(
                handled=True, repaint=True, deleted=True, focus_point_id=focus
            )

        if key in ARROW_KEYS:
            if not self._point.active:
                return ControlPointUpdate()
            self._set_control_points(nudge(self._point, key, self._nudge_step))
            x, y = nudged_position(self._point, key, self._nudge_step)
            self._point = ActivePoint(self._point.id, x, y)
            return ControlPointUpdate(handled=True, repaint=True)

        return ControlPointUpdate()

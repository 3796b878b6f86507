# preview/connection_preview.py
#
# Connection previews are ephemeral. The points gathered here only become
# edge data through ``ConnectionPreviewSession.commit``; nothing else should
# store them.
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from edge_editor.geometry_core import Point, cumulative_lengths, distance, nearest_index, to_xy
from edge_editor.model.edge_model import (
    ALGORITHM_COLORS,
    DEFAULT_ALGORITHM,
    Algorithm,
    Edge,
    HandleType,
    Side,
    SideHints,
)
from edge_editor.model.edge_store import EdgeNotReconnectableError, build_connection_edge
from edge_editor.path import compute_path
from edge_editor.path.commands import PathDescription

logger = logging.getLogger(__name__)

# Minimum cursor travel before free drawing adds another point.
FREE_DRAW_MIN_DISTANCE = 25.0

FREE_DRAW_KEY = " "


def choose_interior_orientation(
    interior: Sequence[Point],
    from_pos: Point,
    to_pos: Point,
    handle_type: HandleType | None = None,
) -> list[Point]:
    """Order ``interior`` so the preview does not snap backwards.

    With a known handle type the end nearer to the fixed anchor goes first
    (source) or last (target). Otherwise the interior point nearest to
    ``from_pos`` decides: the sequence is reversed only when that point is
    strictly closer, by path length, to the far end.
    """
    points = list(interior)
    if len(points) <= 1:
        return points

    if handle_type == HandleType.SOURCE:
        d_first = distance(from_pos, points[0])
        d_last = distance(from_pos, points[-1])
        return points if d_first <= d_last else points[::-1]

    if handle_type == HandleType.TARGET:
        d_first = distance(to_pos, points[0])
        d_last = distance(to_pos, points[-1])
        return points if d_last <= d_first else points[::-1]

    nearest = nearest_index(points, from_pos)
    lengths = cumulative_lengths(points)
    from_first = lengths[nearest]
    from_last = lengths[-1] - lengths[nearest]
    return points[::-1] if from_last < from_first else points


@dataclass(frozen=True)
class ConnectionPreviewFrame:
    points: tuple[Point, ...]
    path: PathDescription
    color: str
    animated: bool


class ConnectionPreviewSession:
    """Live state of one connect or reconnect gesture.

    ``start`` at gesture begin, ``update`` on every pointer tick, then
    ``commit`` or ``teardown`` at gesture end.
    """

    def __init__(self, free_draw_min_distance: float = FREE_DRAW_MIN_DISTANCE) -> None:
        self._free_draw_min_distance = free_draw_min_distance
        self._active = False
        self._free_drawing = False
        self._path: list[Point] = []
        self._reconnecting_edge: Edge | None = None
        self._handle_type: HandleType | None = None
        self._interior: tuple[Point, ...] = ()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def free_drawing(self) -> bool:
        return self._free_drawing

    @property
    def free_draw_path(self) -> tuple[Point, ...]:
        return tuple(self._path)

    @property
    def reconnecting_edge(self) -> Edge | None:
        return self._reconnecting_edge

    @property
    def handle_type(self) -> HandleType | None:
        return self._handle_type

    @property
    def interior(self) -> tuple[Point, ...]:
        """Interior points of the latest frame, in drawing order."""
        return self._interior

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        reconnecting_edge: Edge | None = None,
        handle_type: HandleType | None = None,
    ) -> None:
        if reconnecting_edge is not None and not reconnecting_edge.reconnectable:
            raise EdgeNotReconnectableError(f"Edge {reconnecting_edge.id!r} cannot be reconnected.")
        self.reset()
        self._active = True
        self._reconnecting_edge = reconnecting_edge
        self._handle_type = HandleType(handle_type) if handle_type is not None else None
        if reconnecting_edge is not None:
            logger.debug(
                "Reconnect preview for edge %s (%s end)",
                reconnecting_edge.id,
                self._handle_type.value if self._handle_type else "unknown",
            )

    def reset(self) -> None:
        self._path = []
        self._interior = ()
        self._free_drawing = False

    def teardown(self) -> None:
        self.reset()
        self._active = False
        self._reconnecting_edge = None
        self._handle_type = None

    # ------------------------------------------------------------------
    # Free drawing
    # ------------------------------------------------------------------
    def set_free_drawing(self, enabled: bool) -> None:
        self._free_drawing = bool(enabled)

    def handle_key_press(self, key: str) -> bool:
        if key != FREE_DRAW_KEY or not self._active:
            return False
        self.set_free_drawing(True)
        return True

    def handle_key_release(self, key: str) -> bool:
        if key != FREE_DRAW_KEY or not self._active:
            return False
        self.set_free_drawing(False)
        return True

    def _accumulate(self, from_pos: Point, cursor: Point) -> None:
        if not self._free_drawing or self._reconnecting_edge is not None:
            return
        last = self._path[-1] if self._path else from_pos
        if distance(last, cursor) > self._free_draw_min_distance:
            self._path.append(cursor)
            logger.debug("Free draw point %d at %s", len(self._path), cursor)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def interior_candidates(self) -> list[Point]:
        if self._reconnecting_edge is not None:
            return [to_xy(p) for p in self._reconnecting_edge.points]
        return list(self._path)

    def update(
        self,
        from_pos: Point,
        to_pos: Point,
        sides: SideHints | None = None,
        algorithm: Algorithm = DEFAULT_ALGORITHM,
        valid: bool = False,
    ) -> ConnectionPreviewFrame:
        from_pos = to_xy(from_pos)
        to_pos = to_xy(to_pos)
        self._accumulate(from_pos, to_pos)

        self._interior = tuple(
            choose_interior_orientation(
                self.interior_candidates(), from_pos, to_pos, self._handle_type
            )
        )
        points = (from_pos, *self._interior, to_pos)
        algorithm = Algorithm(algorithm)
        return ConnectionPreviewFrame(
            points=points,
            path=compute_path(points, algorithm, sides),
            color=ALGORITHM_COLORS[algorithm],
            animated=not valid,
        )

    def commit(
        self,
        source: str,
        target: str,
        *,
        algorithm: Algorithm = DEFAULT_ALGORITHM,
        source_handle: Side | None = None,
        target_handle: Side | None = None,
    ) -> Edge:
        """Turn the preview interior into a new edge and end the session.

        The interior is taken in the order of the latest frame. Raises
        ``SelfConnectionError`` when ``source == target``; the session is left
        as it was so the gesture can continue. Reconnect gestures finish through
        ``EdgeStore.reconnect`` instead.
        """
        if self._reconnecting_edge is not None:
            raise ValueError("A reconnect gesture cannot commit a new edge.")
        interior = self._interior if self._interior else tuple(self._path)
        edge = build_connection_edge(
            source,
            target,
            interior,
            algorithm=algorithm,
            source_handle=source_handle,
            target_handle=target_handle,
        )
        logger.info("Committed connection %s with %d points", edge.id, len(edge.points))
        self.teardown()
        return edge

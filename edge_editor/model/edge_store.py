"""In-memory store of editable edges.

Every change to an edge's points goes through ``set_control_points``: the
update is applied to the current tuple, non-active points are dropped, the
result is validated and stored as a new tuple. Edges are plain frozen records,
so readers holding an older edge never observe a change.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Iterable, Sequence

from edge_editor.geometry_core import Point, to_xy
from edge_editor.model.edge_model import (
    DEFAULT_ALGORITHM,
    ActivePoint,
    Algorithm,
    Edge,
    Side,
    new_point_id,
)
from edge_editor.model.edit_commands import ReplaceEdgeCommand, replace_points_command
from edge_editor.model.edit_manager import EditManager
from edge_editor.model.point_updates import PointsUpdate

logger = logging.getLogger(__name__)

PointsSetter = Callable[..., tuple[ActivePoint, ...]]


class SelfConnectionError(ValueError):
    """Raised when a connection would join a node to itself."""


class EdgeNotReconnectableError(ValueError):
    """Raised when an edge marked ``reconnectable=False`` is asked to move its endpoints."""


def new_edge_id(source: str, target: str) -> str:
    return f"{source}-{target}-{uuid.uuid4().hex[:12]}"


def points_from_coordinates(coords: Iterable[object]) -> tuple[ActivePoint, ...]:
    """Fresh active points, in order, for plain coordinates."""
    return tuple(ActivePoint(new_point_id(), *to_xy(c)) for c in coords)


def build_connection_edge(
    source: str,
    target: str,
    interior: Iterable[Point] = (),
    *,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
    source_handle: Side | None = None,
    target_handle: Side | None = None,
) -> Edge:
    """New selected edge carrying ``interior`` as active points."""
    if source == target:
        raise SelfConnectionError(f"Cannot connect node {source!r} to itself.")
    return Edge(
        id=new_edge_id(source, target),
        source=source,
        target=target,
        algorithm=Algorithm(algorithm),
        points=points_from_coordinates(interior),
        selected=True,
        source_handle=source_handle,
        target_handle=target_handle,
    )


class EdgeStore:
    def __init__(self, edits: EditManager | None = None) -> None:
        self._edges: dict[str, Edge] = {}
        self._edits = edits or EditManager()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def edits(self) -> EditManager:
        return self._edits

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def get(self, edge_id: str) -> Edge:
        return self._edges[edge_id]

    def __contains__(self, edge_id: object) -> bool:
        return edge_id in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _write(self, edge_id: str, edge: Edge | None) -> None:
        if edge is None:
            self._edges.pop(edge_id, None)
            return
        # History replays keep the live selection.
        current = self._edges.get(edge_id)
        if current is not None and current.selected != edge.selected:
            edge = replace(edge, selected=current.selected)
        self._edges[edge_id] = edge

    def _replace(self, before: Edge | None, after: Edge | None, edge_id: str) -> Edge | None:
        command = ReplaceEdgeCommand(edge_id=edge_id, before=before, after=after, write=self._write)
        return self._edits.execute(command)

    def add_edge(self, edge: Edge) -> Edge:
        if edge.source == edge.target:
            raise SelfConnectionError(f"Cannot connect node {edge.source!r} to itself.")
        self._replace(self._edges.get(edge.id), edge, edge.id)
        logger.info(
            "Added edge %s (%s -> %s, %d points)",
            edge.id,
            edge.source,
            edge.target,
            len(edge.points),
        )
        return edge

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self._edges:
            return
        self._replace(self._edges[edge_id], None, edge_id)

    def connect(
        self,
        source: str,
        target: str,
        interior: Iterable[Point] = (),
        **kwargs,
    ) -> Edge:
        return self.add_edge(build_connection_edge(source, target, interior, **kwargs))

    def reconnect(
        self,
        edge_id: str,
        source: str,
        target: str,
        *,
        source_handle: Side | None = None,
        target_handle: Side | None = None,
    ) -> Edge:
        """Move an edge's endpoints, keeping its points and metadata."""
        if source == target:
            raise SelfConnectionError(f"Cannot connect node {source!r} to itself.")
        before = self.get(edge_id)
        if not before.reconnectable:
            raise EdgeNotReconnectableError(f"Edge {edge_id!r} cannot be reconnected.")
        after = replace(
            before,
            source=source,
            target=target,
            source_handle=source_handle if source_handle is not None else before.source_handle,
            target_handle=target_handle if target_handle is not None else before.target_handle,
        )
        self._replace(before, after, edge_id)
        logger.info("Reconnected edge %s to %s -> %s", edge_id, source, target)
        return after

    def select(self, edge_id: str, selected: bool = True) -> Edge:
        edge = self.get(edge_id)
        if edge.selected == selected:
            return edge
        # Selection is view state; it is not recorded in undo history.
        updated = replace(edge, selected=selected)
        self._edges[edge_id] = updated
        return updated

    def set_algorithm(self, edge_id: str, algorithm: Algorithm) -> Edge:
        before = self.get(edge_id)
        after = replace(before, algorithm=Algorithm(algorithm))
        self._replace(before, after, edge_id)
        return after

    def set_control_points(
        self,
        edge_id: str,
        update: Callable[[tuple[ActivePoint, ...]], Sequence[object]],
    ) -> tuple[ActivePoint, ...]:
        """Apply ``update`` to the edge's points and store the active result.

        Raises ``InvariantError`` (leaving the edge untouched) when the update
        would produce duplicate ids.
        """
        edge = self.get(edge_id)
        updated = tuple(p for p in update(edge.points) if isinstance(p, ActivePoint))
        if updated == edge.points:
            return edge.points

        merge_key = None
        if isinstance(update, PointsUpdate) and update.kind == "move":
            merge_key = (edge_id, "move", update.point_id)
        command = replace_points_command(edge, updated, self._write, merge_key=merge_key)
        self._edits.execute(command)
        return updated

    def points_setter(self, edge_id: str) -> PointsSetter:
        """The update funnel for one edge, as handed to its control points."""

        def _set(update):
            return self.set_control_points(edge_id, update)

        return _set

    def end_interaction(self) -> None:
        self._edits.seal()

    def undo(self) -> bool:
        if not self._edits.can_undo:
            return False
        self._edits.undo()
        return True

    def redo(self) -> bool:
        if not self._edits.can_redo:
            return False
        self._edits.redo()
        return True

"""Everything the host needs to draw one edge for the current frame."""
from __future__ import annotations

from dataclasses import dataclass

from edge_editor.geometry_core import Point, to_xy
from edge_editor.model.edge_model import ControlPoint, Edge, LabelDirection, SideHints
from edge_editor.path import MIN_SEGMENT_LENGTH, compute_control_points, compute_path
from edge_editor.path.commands import PathDescription
from edge_editor.path.sampling import PathSampler, label_anchor

_LABEL_ROTATION = {
    LabelDirection.UP: -90.0,
    LabelDirection.RIGHT: 0.0,
    LabelDirection.DOWN: 90.0,
}


@dataclass(frozen=True)
class EdgeRenderState:
    path: PathDescription
    markers: tuple[ControlPoint, ...]
    label_anchor: Point
    label_rotation: float
    stroke_color: str
    show_points: bool


def label_rotation(direction: LabelDirection) -> float:
    return _LABEL_ROTATION[LabelDirection(direction)]


def stroke_color(edge: Edge) -> str:
    if edge.selected:
        return "blue"
    return "black" if edge.is_connected else "red"


def build_edge_render_state(
    edge: Edge,
    source_pos: Point,
    target_pos: Point,
    sides: SideHints | None = None,
    *,
    source_selected: bool = False,
    target_selected: bool = False,
    sampler: PathSampler | None = None,
    min_segment_length: float = MIN_SEGMENT_LENGTH,
) -> EdgeRenderState:
    source_pos = to_xy(source_pos)
    target_pos = to_xy(target_pos)
    path_points = (source_pos, *edge.points, target_pos)

    path = compute_path(path_points, edge.algorithm, sides)
    markers = compute_control_points(
        path_points, edge.algorithm, sides, min_segment_length, id_prefix=f"{edge.id}:"
    )
    return EdgeRenderState(
        path=path,
        markers=markers,
        label_anchor=label_anchor(path, source_pos, target_pos, sampler),
        label_rotation=label_rotation(edge.label_direction),
        stroke_color=stroke_color(edge),
        show_points=edge.selected or source_selected or target_selected,
    )

from __future__ import annotations

import math

from edge_editor.model.edge_model import (
    ActivePoint,
    Algorithm,
    Side,
    SideHints,
    SynthesizedPoint,
)
from edge_editor.path import compute_control_points


def _markers(points, from_side=Side.LEFT, to_side=Side.RIGHT, **kwargs):
    return compute_control_points(points, Algorithm.LINEAR, SideHints(from_side, to_side), **kwargs)


def test_end_to_end_scenario_markers() -> None:
    active = ActivePoint("p1", 100, 0)

    markers = _markers([(0, 0), active, (100, 100)], Side.RIGHT, Side.BOTTOM)

    assert markers == (
        SynthesizedPoint("spline-0-0", 50.0, 0.0, prev=None, insertion_index=0),
        active,
        SynthesizedPoint("spline-1-0", 100.0, 50.0, prev="p1", insertion_index=1),
    )


def test_midpoints_need_minimum_length() -> None:
    assert _markers([(0, 0), (24.9, 0)]) == ()

    markers = _markers([(0, 0), (25, 0)])

    assert len(markers) == 1
    assert markers[0].position == (12.5, 0.0)


def test_min_segment_length_is_configurable() -> None:
    assert _markers([(0, 0), (40, 0)], min_segment_length=50.0) == ()
    assert len(_markers([(0, 0), (40, 0)], min_segment_length=10.0)) == 1


def test_corner_sub_segments_each_get_a_midpoint() -> None:
    markers = _markers([(0, 0), (100, 40)], Side.RIGHT)

    assert [m.id for m in markers] == ["spline-0-0", "spline-0-1"]
    assert [m.position for m in markers] == [(50.0, 0.0), (100.0, 20.0)]


def test_short_corner_sub_segment_is_skipped() -> None:
    markers = _markers([(0, 0), (100, 20)], Side.RIGHT)

    assert [m.id for m in markers] == ["spline-0-0"]


def test_midpoints_are_exact_sub_segment_midpoints() -> None:
    markers = _markers([(10, 10), (10, 71)], Side.TOP, Side.TOP)

    assert markers[0].position == (10.0, 40.5)


def test_active_points_keep_their_order_and_identity() -> None:
    a = ActivePoint("a", 100, 0)
    b = ActivePoint("b", 100, 100)
    c = ActivePoint("c", 200, 100)

    markers = _markers([(0, 0), a, b, c, (300, 100)], Side.RIGHT, Side.LEFT)

    actives = [m for m in markers if m.active]
    assert actives == [a, b, c]
    assert all(m is p for m, p in zip(actives, (a, b, c)))
    assert markers[-1].id.startswith("spline-3-")


def test_prev_names_nearest_preceding_active_point() -> None:
    a = ActivePoint("a", 100, 0)
    b = ActivePoint("b", 200, 0)

    markers = _markers([(0, 0), a, b, (300, 0)])

    inactive = [m for m in markers if not m.active]
    assert [(m.prev, m.insertion_index) for m in inactive] == [
        (None, 0),
        ("a", 1),
        ("b", 2),
    ]


def test_endpoints_are_never_markers() -> None:
    markers = _markers([(0, 0), (100, 0)])

    assert all(m.position not in {(0.0, 0.0), (100.0, 0.0)} for m in markers)


def test_synthesis_is_deterministic() -> None:
    points = [(0, 0), ActivePoint("a", 60, 80), (200, 10)]

    assert _markers(points, Side.BOTTOM, Side.TOP) == _markers(points, Side.BOTTOM, Side.TOP)


def test_degenerate_input_yields_no_markers() -> None:
    assert _markers([(0, 0)]) == ()
    assert _markers([(0, 0), (math.inf, 0)]) == ()


def test_curve_markers_sit_on_the_curve() -> None:
    markers = compute_control_points(
        [(0, 0), (100, 0)], Algorithm.CATMULL_ROM, SideHints(Side.RIGHT, Side.LEFT)
    )

    assert len(markers) == 1
    assert markers[0].id == "spline-0-0"
    assert math.isclose(markers[0].x, 50.0, abs_tol=1e-9)
    assert math.isclose(markers[0].y, 0.0, abs_tol=1e-9)


def test_curve_markers_interleave_with_active_points() -> None:
    a = ActivePoint("a", 100, 50)

    markers = compute_control_points(
        [(0, 0), a, (200, 0)], Algorithm.BEZIER_CATMULL_ROM, SideHints(Side.RIGHT, Side.LEFT)
    )

    assert [m.active for m in markers] == [False, True, False]
    assert markers[1] is a
    assert (markers[0].prev, markers[0].insertion_index) == (None, 0)
    assert (markers[2].prev, markers[2].insertion_index) == ("a", 1)


def test_id_prefix_scopes_marker_ids() -> None:
    markers = _markers([(0, 0), (100, 0)], id_prefix="edge-7:")

    assert [m.id for m in markers] == ["edge-7:spline-0-0"]

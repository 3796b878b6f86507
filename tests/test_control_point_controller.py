from __future__ import annotations

from edge_editor.model.edge_model import ActivePoint, Edge, SynthesizedPoint
from edge_editor.model.edge_store import EdgeStore
from edge_editor.preview.control_point_controller import (
    ControlPointController,
    DragState,
    PointerEvent,
)


def _make_store() -> EdgeStore:
    store = EdgeStore()
    store.add_edge(
        Edge(
            id="e1",
            source="a",
            target="b",
            points=(ActivePoint("p1", 50, 0), ActivePoint("p2", 100, 0)),
        )
    )
    return store


def _controller(store: EdgeStore, point, **kwargs) -> ControlPointController:
    return ControlPointController(
        point,
        store.points_setter("e1"),
        end_interaction=store.end_interaction,
        **kwargs,
    )


def _marker() -> SynthesizedPoint:
    return SynthesizedPoint("spline-2-0", 125, 0, prev="p2", insertion_index=2)


def test_pointer_down_activates_marker_and_starts_drag() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    update = controller.handle_pointer_down(PointerEvent((0, 0)))

    assert update.handled and update.prevent_default
    assert controller.state is DragState.DRAGGING
    assert controller.active
    points = store.get("e1").points
    assert [p.id for p in points[:2]] == ["p1", "p2"]
    assert points[2] == ActivePoint(controller.point.id, 125.0, 0.0)


def test_drag_moves_point_and_release_returns_to_idle() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    controller.handle_pointer_down(PointerEvent((125, 0)))
    controller.handle_pointer_move(PointerEvent((130, 10)))
    update = controller.handle_pointer_up(PointerEvent((140, 20)))

    assert update.handled
    assert controller.state is DragState.IDLE
    points = store.get("e1").points
    assert len(points) == 3
    assert points[2].position == (140.0, 20.0)


def test_pointer_positions_are_mapped_to_canvas() -> None:
    store = _make_store()
    controller = _controller(
        store, ActivePoint("p1", 50, 0), map_to_canvas=lambda pos: (pos[0] / 2, pos[1] / 2)
    )

    controller.handle_pointer_down(PointerEvent((0, 0)))
    controller.handle_pointer_move(PointerEvent((100, 40)))

    assert store.get("e1").points[0].position == (50.0, 20.0)


def test_pointer_leave_ends_drag() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0))

    controller.handle_pointer_down(PointerEvent((50, 0)))
    controller.handle_pointer_leave(PointerEvent((60, 0)))

    assert controller.state is DragState.IDLE
    assert store.get("e1").points[0].position == (60.0, 0.0)


def test_move_without_drag_is_ignored() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0))

    update = controller.handle_pointer_move(PointerEvent((70, 70)))

    assert not update.handled
    assert store.get("e1").points[0].position == (50, 0)


def test_right_button_does_not_start_drag() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    update = controller.handle_pointer_down(PointerEvent((0, 0), button="right"))

    assert not update.handled
    assert controller.state is DragState.IDLE
    assert len(store.get("e1").points) == 2


def test_drag_is_one_undo_step() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    controller.handle_pointer_down(PointerEvent((125, 0)))
    for x in (130, 140, 150):
        controller.handle_pointer_move(PointerEvent((x, 0)))
    controller.handle_pointer_up(PointerEvent((160, 0)))

    assert store.undo()
    assert store.get("e1").points[2].position == (125.0, 0.0)
    assert store.undo()
    assert [p.id for p in store.get("e1").points] == ["p1", "p2"]


def test_context_menu_deletes_active_point() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p2", 100, 0))

    update = controller.handle_context_menu()

    assert update.deleted and update.prevent_default
    assert update.focus_point_id == "p1"
    assert [p.id for p in store.get("e1").points] == ["p1"]


def test_context_menu_on_marker_does_nothing() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    update = controller.handle_context_menu()

    assert not update.deleted
    assert len(store.get("e1").points) == 2


def test_enter_and_space_activate_marker() -> None:
    for key in ("Enter", " "):
        store = _make_store()
        controller = _controller(store, _marker())

        update = controller.handle_key_press(key)

        assert update.handled
        assert controller.active
        assert len(store.get("e1").points) == 3


def test_delete_keys_remove_active_point() -> None:
    for key in ("Backspace", "Delete"):
        store = _make_store()
        controller = _controller(store, ActivePoint("p1", 50, 0))

        update = controller.handle_key_press(key)

        assert update.deleted
        assert update.focus_point_id is None
        assert [p.id for p in store.get("e1").points] == ["p2"]


def test_delete_key_on_marker_is_a_no_op() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    update = controller.handle_key_press("Delete")

    assert update.handled and not update.deleted
    assert len(store.get("e1").points) == 2


def test_arrow_keys_nudge_active_point() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0))

    controller.handle_key_press("ArrowDown")
    controller.handle_key_press("ArrowLeft")

    assert store.get("e1").points[0].position == (45.0, 5.0)
    assert controller.point.position == (45.0, 5.0)


def test_arrow_keys_ignore_markers() -> None:
    store = _make_store()
    controller = _controller(store, _marker())

    update = controller.handle_key_press("ArrowUp")

    assert not update.handled
    assert len(store.get("e1").points) == 2


def test_nudge_step_is_configurable() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0), nudge_step=1.0)

    controller.handle_key_press("ArrowRight")

    assert store.get("e1").points[0].position == (51.0, 0.0)


def test_unknown_keys_are_not_handled() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0))

    assert not controller.handle_key_press("a").handled


def test_drag_after_nudges_is_its_own_undo_step() -> None:
    store = _make_store()
    controller = _controller(store, ActivePoint("p1", 50, 0))

    controller.handle_key_press("ArrowRight")
    controller.handle_key_press("ArrowRight")
    controller.handle_pointer_down(PointerEvent((60, 0)))
    controller.handle_pointer_move(PointerEvent((150, 0)))
    controller.handle_pointer_up(PointerEvent((200, 0)))

    assert store.undo()
    assert store.get("e1").points[0].position == (60.0, 0.0)
    assert store.undo()
    assert store.get("e1").points[0].position == (50, 0)

import os
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

pytest.importorskip("PyQt5")

from PyQt5 import QtCore, QtGui, QtWidgets

from edge_editor.model.edge_model import ActivePoint, Algorithm, Edge, Side, SideHints
from edge_editor.path import compute_path
from edge_editor.path.sampling import label_anchor
from edge_editor.preview.connection_preview import ConnectionPreviewSession
from edge_editor.rendering.edge_render_state import build_edge_render_state
from edge_editor.rendering.qt_path import (
    QtPathSampler,
    draw_connection_preview,
    draw_edge,
    to_qpainter_path,
)
from edge_editor.ui.qt_events import button_name, key_event_name, key_name, pointer_event


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


def _scenario_path():
    return compute_path(
        [(0, 0), (100, 0), (100, 100)], Algorithm.LINEAR, SideHints(Side.RIGHT, Side.BOTTOM)
    )


def _blank_image() -> QtGui.QImage:
    image = QtGui.QImage(120, 40, QtGui.QImage.Format_ARGB32)
    image.fill(QtGui.QColor("white"))
    return image


def test_to_qpainter_path_follows_commands(qapp) -> None:
    qpath = to_qpainter_path(_scenario_path())

    assert qpath.elementCount() == 3
    assert qpath.currentPosition() == QtCore.QPointF(100, 100)
    assert qpath.length() == pytest.approx(200.0)


def test_curves_become_cubic_elements(qapp) -> None:
    path = compute_path([(0, 0), (90, 0)], Algorithm.CATMULL_ROM, SideHints(Side.RIGHT, Side.LEFT))

    qpath = to_qpainter_path(path)

    # move-to plus three elements for the cubic segment
    assert qpath.elementCount() == 4


def test_qt_sampler_matches_flattened_sampler(qapp) -> None:
    anchor = label_anchor(_scenario_path(), (0, 0), (100, 100), sampler=QtPathSampler())

    assert anchor == pytest.approx((100.0, 0.0), abs=1e-3)


def test_qt_sampler_rejects_empty_path(qapp) -> None:
    with pytest.raises(ValueError):
        QtPathSampler().point_at_fraction(compute_path([]), 0.5)


def test_draw_edge_strokes_path(qapp) -> None:
    edge = Edge(id="e1", source="a", target="b", selected=True)
    state = build_edge_render_state(edge, (10, 10), (110, 10))
    image = _blank_image()

    painter = QtGui.QPainter(image)
    draw_edge(painter, state)
    painter.end()

    color = image.pixelColor(50, 10)
    assert color.blue() > 200
    assert color.red() < 60


def test_draw_edge_shows_markers_when_selected(qapp) -> None:
    edge = Edge(
        id="e1", source="a", target="b", selected=True, points=(ActivePoint("p1", 60, 30),)
    )
    state = build_edge_render_state(edge, (10, 30), (110, 30))
    image = _blank_image()

    painter = QtGui.QPainter(image)
    draw_edge(painter, state)
    painter.end()

    assert state.show_points
    marker = image.pixelColor(61, 27)
    assert marker.red() < 60


def test_draw_connection_preview(qapp) -> None:
    session = ConnectionPreviewSession()
    session.start()
    frame = session.update((10, 20), (110, 20), valid=True)
    image = _blank_image()

    painter = QtGui.QPainter(image)
    draw_connection_preview(painter, frame)
    painter.end()

    assert image.pixelColor(60, 20).red() < 60


def test_qt_key_and_button_names() -> None:
    assert key_name(QtCore.Qt.Key_Return) == "Enter"
    assert key_name(QtCore.Qt.Key_Space) == " "
    assert key_name(QtCore.Qt.Key_Delete) == "Delete"
    assert key_name(QtCore.Qt.Key_Left) == "ArrowLeft"
    assert key_name(QtCore.Qt.Key_A) is None
    assert button_name(QtCore.Qt.RightButton) == "right"
    assert button_name(QtCore.Qt.LeftButton) == "left"


def test_qt_events_translate_to_controller_input(qapp) -> None:
    repeat = QtGui.QKeyEvent(
        QtCore.QEvent.KeyPress, QtCore.Qt.Key_Space, QtCore.Qt.NoModifier, " ", True
    )
    press = QtGui.QKeyEvent(QtCore.QEvent.KeyPress, QtCore.Qt.Key_Space, QtCore.Qt.NoModifier, " ")
    click = QtGui.QMouseEvent(
        QtCore.QEvent.MouseButtonPress,
        QtCore.QPointF(5, 6),
        QtCore.Qt.RightButton,
        QtCore.Qt.RightButton,
        QtCore.Qt.NoModifier,
    )

    assert key_event_name(repeat) is None
    assert key_event_name(press) == " "
    event = pointer_event(click)
    assert event.pos == (5.0, 6.0)
    assert event.button == "right"

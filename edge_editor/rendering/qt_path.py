"""Qt drawing and arc-length sampling for path descriptions."""
from __future__ import annotations

from typing import Iterable

from PyQt5 import QtCore, QtGui

from edge_editor.geometry_core import Point
from edge_editor.model.edge_model import ControlPoint
from edge_editor.path.commands import CurveTo, LineTo, MoveTo, PathDescription
from edge_editor.preview.connection_preview import ConnectionPreviewFrame
from edge_editor.rendering.edge_render_state import EdgeRenderState

ACTIVE_MARKER_RADIUS = 4.0
INACTIVE_MARKER_RADIUS = 3.0
EDGE_WIDTH = 2.0


def to_qpainter_path(path: PathDescription) -> QtGui.QPainterPath:
    qpath = QtGui.QPainterPath()
    for command in path.commands:
        if isinstance(command, MoveTo):
            qpath.moveTo(QtCore.QPointF(*command.point))
        elif isinstance(command, LineTo):
            qpath.lineTo(QtCore.QPointF(*command.point))
        elif isinstance(command, CurveTo):
            qpath.cubicTo(
                QtCore.QPointF(*command.control1),
                QtCore.QPointF(*command.control2),
                QtCore.QPointF(*command.point),
            )
        else:
            raise ValueError(f"Unsupported path command: {command!r}")
    return qpath


class QtPathSampler:
    """Samples through ``QPainterPath`` so labels match what Qt draws."""

    def point_at_fraction(self, path: PathDescription, fraction: float) -> Point:
        qpath = to_qpainter_path(path)
        if qpath.isEmpty():
            raise ValueError("Cannot sample an empty path.")
        length = qpath.length()
        if length <= 0:
            start = qpath.pointAtPercent(0.0)
            return start.x(), start.y()
        fraction = min(max(fraction, 0.0), 1.0)
        point = qpath.pointAtPercent(qpath.percentAtLength(length * fraction))
        return point.x(), point.y()


def _draw_markers(
    painter: QtGui.QPainter, markers: Iterable[ControlPoint], color: QtGui.QColor
) -> None:
    for marker in markers:
        center = QtCore.QPointF(marker.x, marker.y)
        if marker.active:
            painter.setPen(QtGui.QPen(color, 1))
            painter.setBrush(QtGui.QBrush(color))
            painter.drawEllipse(center, ACTIVE_MARKER_RADIUS, ACTIVE_MARKER_RADIUS)
        else:
            faded = QtGui.QColor(color)
            faded.setAlphaF(0.3)
            painter.setPen(QtGui.QPen(faded, 1))
            painter.setBrush(QtGui.QBrush(QtGui.QColor("white")))
            painter.drawEllipse(center, INACTIVE_MARKER_RADIUS, INACTIVE_MARKER_RADIUS)


def draw_edge(painter: QtGui.QPainter, state: EdgeRenderState) -> None:
    if state.path.is_empty:
        return
    painter.save()
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    color = QtGui.QColor(state.stroke_color)
    pen = QtGui.QPen(color, EDGE_WIDTH)
    pen.setCapStyle(QtCore.Qt.RoundCap)
    pen.setJoinStyle(QtCore.Qt.RoundJoin)
    painter.setPen(pen)
    painter.setBrush(QtCore.Qt.NoBrush)
    painter.drawPath(to_qpainter_path(state.path))

    if state.show_points:
        _draw_markers(painter, state.markers, color)
    painter.restore()


def draw_connection_preview(painter: QtGui.QPainter, frame: ConnectionPreviewFrame) -> None:
    if frame.path.is_empty:
        return
    painter.save()
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    pen = QtGui.QPen(QtGui.QColor(frame.color), EDGE_WIDTH)
    if frame.animated:
        pen.setStyle(QtCore.Qt.DashLine)
    painter.setPen(pen)
    painter.setBrush(QtCore.Qt.NoBrush)
    painter.drawPath(to_qpainter_path(frame.path))
    painter.restore()

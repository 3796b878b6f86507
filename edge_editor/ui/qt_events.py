"""Translate Qt input events into the plain values the controllers consume."""
from __future__ import annotations

from typing import Optional

from PyQt5 import QtCore, QtGui

from edge_editor.preview.control_point_controller import PointerEvent

_KEY_NAMES = {
    QtCore.Qt.Key_Return: "Enter",
    QtCore.Qt.Key_Enter: "Enter",
    QtCore.Qt.Key_Space: " ",
    QtCore.Qt.Key_Backspace: "Backspace",
    QtCore.Qt.Key_Delete: "Delete",
    QtCore.Qt.Key_Left: "ArrowLeft",
    QtCore.Qt.Key_Right: "ArrowRight",
    QtCore.Qt.Key_Up: "ArrowUp",
    QtCore.Qt.Key_Down: "ArrowDown",
}

_BUTTON_NAMES = {
    QtCore.Qt.LeftButton: "left",
    QtCore.Qt.RightButton: "right",
    QtCore.Qt.MiddleButton: "middle",
}


def key_name(key: int) -> Optional[str]:
    return _KEY_NAMES.get(key)


def key_event_name(event: QtGui.QKeyEvent) -> Optional[str]:
    # Auto-repeat of the space key would toggle free drawing on every repeat.
    if event.isAutoRepeat() and event.key() == QtCore.Qt.Key_Space:
        return None
    return key_name(event.key())


def button_name(button: int) -> Optional[str]:
    return _BUTTON_NAMES.get(button)


def pointer_event(event: QtGui.QMouseEvent) -> PointerEvent:
    pos = event.localPos()
    return PointerEvent(pos=(pos.x(), pos.y()), button=button_name(event.button()))

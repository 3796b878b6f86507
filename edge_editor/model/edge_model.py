"""Value types for editable edges and their control points."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from edge_editor.geometry_core import Point


class Side(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


class Algorithm(str, Enum):
    LINEAR = "Linear"
    CATMULL_ROM = "Catmull-Rom"
    BEZIER_CATMULL_ROM = "Bezier Catmull-Rom"


class LabelDirection(str, Enum):
    DOWN = "down"
    UP = "up"
    RIGHT = "right"


class HandleType(str, Enum):
    SOURCE = "source"
    TARGET = "target"


DEFAULT_ALGORITHM = Algorithm.LINEAR
DEFAULT_LABEL = "Default Label"

ALGORITHM_COLORS = {
    Algorithm.LINEAR: "#0375ff",
    Algorithm.BEZIER_CATMULL_ROM: "#68D391",
    Algorithm.CATMULL_ROM: "#FF0072",
}

# Outward unit normal of each node side. Canvas space: y grows downward.
_SIDE_VECTORS = {
    Side.LEFT: (-1.0, 0.0),
    Side.RIGHT: (1.0, 0.0),
    Side.TOP: (0.0, -1.0),
    Side.BOTTOM: (0.0, 1.0),
}


def side_vector(side: Side) -> Point:
    return _SIDE_VECTORS[side]


def is_horizontal_side(side: Side) -> bool:
    return side in (Side.LEFT, Side.RIGHT)


def new_point_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SideHints:
    """Attachment side of the path at each endpoint."""

    from_side: Side = Side.LEFT
    to_side: Side = Side.RIGHT


@dataclass(frozen=True)
class ActivePoint:
    id: str
    x: float
    y: float

    @property
    def active(self) -> bool:
        return True

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class SynthesizedPoint:
    """Inactive midpoint marker offered as an activation target.

    ``prev`` names the active point that precedes the marker in path order, and
    ``insertion_index`` the number of active points before it. Both are only
    used to place the point when it is activated.
    """

    id: str
    x: float
    y: float
    prev: str | None = None
    insertion_index: int = 0

    @property
    def active(self) -> bool:
        return False

    @property
    def position(self) -> Point:
        return (self.x, self.y)


ControlPoint = Union[ActivePoint, SynthesizedPoint]


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    algorithm: Algorithm = DEFAULT_ALGORITHM
    points: Tuple[ActivePoint, ...] = ()
    label: str = DEFAULT_LABEL
    label_direction: LabelDirection = LabelDirection.UP
    selected: bool = False
    source_handle: Side | None = None
    target_handle: Side | None = None
    reconnectable: bool = True

    @property
    def is_connected(self) -> bool:
        return bool(self.source) and bool(self.target)

"""Draw-command description of a connector path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from edge_editor.geometry_core import Point


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CurveTo:
    """Cubic Bézier segment from the current point to ``point``."""

    control1: Point
    control2: Point
    point: Point


PathCommand = Union[MoveTo, LineTo, CurveTo]


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class PathDescription:
    commands: Tuple[PathCommand, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.commands

    @property
    def start(self) -> Point | None:
        return self.commands[0].point if self.commands else None

    @property
    def end(self) -> Point | None:
        return self.commands[-1].point if self.commands else None

    def vertices(self) -> list[Point]:
        """End point of every command, in drawing order."""
        return [command.point for command in self.commands]

    def to_svg(self) -> str:
        parts: list[str] = []
        for command in self.commands:
            if isinstance(command, MoveTo):
                parts.append(f"M {_fmt(command.point[0])} {_fmt(command.point[1])}")
            elif isinstance(command, LineTo):
                parts.append(f"L {_fmt(command.point[0])} {_fmt(command.point[1])}")
            else:
                c1, c2, p = command.control1, command.control2, command.point
                parts.append(
                    f"C {_fmt(c1[0])} {_fmt(c1[1])}, {_fmt(c2[0])} {_fmt(c2[1])}, "
                    f"{_fmt(p[0])} {_fmt(p[1])}"
                )
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_svg()


EMPTY_PATH = PathDescription()

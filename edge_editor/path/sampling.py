"""Arc-length sampling of path descriptions.

Label placement needs the point at a given fraction of a path's length. The
host renderer may provide its own sampler (see ``rendering.qt_path``); the
default one flattens curves with numpy.
"""
from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

from edge_editor.geometry_core import Point, midpoint
from edge_editor.path.commands import CurveTo, LineTo, MoveTo, PathDescription

logger = logging.getLogger(__name__)

CURVE_SAMPLES = 32


class PathSampler(Protocol):
    def point_at_fraction(self, path: PathDescription, fraction: float) -> Point:
        ...


def flatten_path(path: PathDescription, curve_samples: int = CURVE_SAMPLES) -> np.ndarray:
    """Return an ``(N, 2)`` array of polyline vertices approximating ``path``."""
    if path.is_empty:
        raise ValueError("Cannot flatten an empty path.")
    first = path.commands[0]
    if not isinstance(first, MoveTo):
        raise ValueError("Path must start with a move-to command.")

    chunks = [np.array([first.point], dtype=float)]
    current = np.array(first.point, dtype=float)
    ts = np.linspace(0.0, 1.0, curve_samples + 1)[1:, None]
    for command in path.commands[1:]:
        if isinstance(command, LineTo):
            current = np.array(command.point, dtype=float)
            chunks.append(current[None, :])
        elif isinstance(command, CurveTo):
            c1 = np.array(command.control1, dtype=float)
            c2 = np.array(command.control2, dtype=float)
            end = np.array(command.point, dtype=float)
            mt = 1.0 - ts
            samples = (
                mt**3 * current
                + 3 * mt**2 * ts * c1
                + 3 * mt * ts**2 * c2
                + ts**3 * end
            )
            chunks.append(samples)
            current = end
        else:
            raise ValueError(f"Unsupported path command in sub-path: {command!r}")
    return np.concatenate(chunks)


class FlattenedPathSampler:
    def __init__(self, curve_samples: int = CURVE_SAMPLES) -> None:
        self._curve_samples = curve_samples

    def length(self, path: PathDescription) -> float:
        vertices = flatten_path(path, self._curve_samples)
        return float(np.hypot(*np.diff(vertices, axis=0).T).sum())

    def point_at_fraction(self, path: PathDescription, fraction: float) -> Point:
        vertices = flatten_path(path, self._curve_samples)
        seg_lengths = np.hypot(*np.diff(vertices, axis=0).T)
        cumulative = np.concatenate(([0.0], np.cumsum(seg_lengths)))
        total = cumulative[-1]
        if total <= 0:
            return float(vertices[0][0]), float(vertices[0][1])

        target = min(max(fraction, 0.0), 1.0) * total
        index = int(np.searchsorted(cumulative, target, side="left"))
        if index == 0:
            return float(vertices[0][0]), float(vertices[0][1])
        span = cumulative[index] - cumulative[index - 1]
        t = 0.0 if span <= 0 else (target - cumulative[index - 1]) / span
        point = vertices[index - 1] + (vertices[index] - vertices[index - 1]) * t
        return float(point[0]), float(point[1])


DEFAULT_SAMPLER = FlattenedPathSampler()


def label_anchor(
    path: PathDescription,
    source: Point,
    target: Point,
    sampler: PathSampler | None = None,
    fraction: float = 0.5,
) -> Point:
    """Point at ``fraction`` of the path length, or the endpoint midpoint on failure."""
    if path.is_empty:
        return midpoint(source, target)
    sampler = sampler or DEFAULT_SAMPLER
    try:
        return sampler.point_at_fraction(path, fraction)
    except Exception:
        logger.warning("Path sampling failed; using endpoint midpoint", exc_info=True)
        return midpoint(source, target)

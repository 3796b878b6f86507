"""Invariant checks for the stored control points of an edge."""

from __future__ import annotations

from typing import Sequence

from edge_editor.model.edge_model import ActivePoint


class InvariantError(ValueError):
    """Raised when an edge's point sequence violates a structural invariant."""


def assert_unique_point_ids(points: Sequence[ActivePoint]) -> None:
    """Assert no point id appears twice in the sequence."""

    seen_ids: set[str] = set()
    for index, point in enumerate(points):
        if point.id in seen_ids:
            raise InvariantError(f"Duplicate point id at index {index}: {point.id}.")
        seen_ids.add(point.id)


def assert_only_active_points(points: Sequence[object]) -> None:
    """Assert every stored point is an ``ActivePoint``.

    Synthesized markers are derived on every render and must never be stored.
    """

    for index, point in enumerate(points):
        if not isinstance(point, ActivePoint):
            raise InvariantError(
                f"Non-active point stored at index {index}: {type(point).__name__}."
            )


def validate_points(points: Sequence[ActivePoint]) -> None:
    assert_only_active_points(points)
    assert_unique_point_ids(points)

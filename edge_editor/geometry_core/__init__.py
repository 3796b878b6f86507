from .primitives import (
    Point,
    cumulative_lengths,
    distance,
    is_finite_point,
    midpoint,
    nearest_index,
    points_close,
    points_equal,
    to_xy,
)

__all__ = [
    "Point",
    "to_xy",
    "distance",
    "midpoint",
    "points_equal",
    "points_close",
    "is_finite_point",
    "cumulative_lengths",
    "nearest_index",
]

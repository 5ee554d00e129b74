# polymesh/queries.py
"""Read-only geometric queries that drive editing decisions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .curve import Vec2, as_vec2, bezier_point, v2_add, v2_dist, v2_dot, v2_len, v2_scale, v2_sub
from .polygon import Polygon
from .tessellate import edge_control


@dataclass(frozen=True)
class EdgeHit:
    edge: int
    point: Vec2
    distance: float


def nearest_vertex(points: Sequence[Vec2], target: Sequence[float]) -> Optional[int]:
    """Index of the point closest to target; the first one wins a tie."""
    target = as_vec2(target)
    best: Optional[int] = None
    best_dist = float("inf")
    for i, p in enumerate(points):
        d = v2_dist(p, target)
        if d < best_dist:
            best_dist = d
            best = i
    return best


def nearest_edge_projection(polygon: Polygon, target: Sequence[float]) -> Optional[EdgeHit]:
    """
    Closest edge to target, measured at target's projection onto each edge.

    The projection must fall between the edge's endpoints. On a curved edge
    the point is taken on the curve at the same relative parameter as the
    projection along the chord. Zero-length edges are skipped.
    """
    target = as_vec2(target)
    best: Optional[EdgeHit] = None
    for i, p in enumerate(polygon.points):
        a, b = polygon.edge(i)
        line = v2_sub(b, a)
        length = v2_len(line)
        if length == 0:
            continue
        axis = v2_scale(line, 1.0 / length)
        along = v2_dot(axis, v2_sub(target, a))
        if along < 0 or along > length:
            continue
        if p.is_curve:
            point = bezier_point(a, edge_control(polygon, i), b, along / length)
        else:
            point = v2_add(a, v2_scale(axis, along))
        d = v2_dist(point, target)
        if best is None or d < best.distance:
            best = EdgeHit(i, point, d)
    return best


# -------------------
# Rectangles, boxes
# -------------------

def point_in_rectangle(point: Sequence[float], rect_min: Sequence[float], rect_max: Sequence[float]) -> bool:
    return rect_min[0] <= point[0] <= rect_max[0] and rect_min[1] <= point[1] <= rect_max[1]


def rect_from_corners(a: Sequence[float], b: Sequence[float]) -> Tuple[Vec2, Vec2]:
    return (min(a[0], b[0]), min(a[1], b[1])), (max(a[0], b[0]), max(a[1], b[1]))


def box_select(points: Sequence[Vec2], corner_a: Sequence[float], corner_b: Sequence[float]) -> List[int]:
    lo, hi = rect_from_corners(corner_a, corner_b)
    return [i for i, p in enumerate(points) if point_in_rectangle(p, lo, hi)]


# -------------
# Hit testing
# -------------

def is_hovering(point: Sequence[float], target: Sequence[float], radius: float) -> bool:
    return v2_dist(as_vec2(point), as_vec2(target)) < radius


def hit_move_handle(center: Sequence[float], target: Sequence[float], size: float) -> bool:
    return is_hovering(center, target, size)


def hit_rotate_handle(center: Sequence[float], target: Sequence[float], size: float) -> bool:
    """The rotate handle is a ring of width size/2 around radius `size`."""
    buffer = size / 4
    d = v2_dist(as_vec2(center), as_vec2(target))
    return size - buffer < d < size + buffer


def hit_scale_handle(center: Sequence[float], target: Sequence[float], size: float) -> bool:
    return is_hovering(center, target, size)

# polymesh/tessellate.py
from __future__ import annotations

import math
from typing import List, Optional

from .curve import Vec2, bezier_point, reconstruct_control
from .polygon import Polygon, clamp_detail


def curve_sample_count(detail: float) -> int:
    """Samples per curved edge: ceil(1 / detail), detail clamped to [0.01, 1]."""
    return int(math.ceil(1.0 / clamp_detail(detail)))


def edge_control(polygon: Polygon, i: int) -> Vec2:
    a, b = polygon.edge(i)
    return reconstruct_control(a, b, polygon.points[i].curve)


def tessellate(polygon: Polygon, detail: Optional[float] = None) -> List[Vec2]:
    """
    Expand the polygon into its boundary sequence.

    Straight edges contribute their start point; curved edges contribute
    `curve_sample_count(detail)` samples for t in [0, 1). The end of every edge
    is the start of the next, so the ring is closed implicitly.
    """
    if detail is None:
        detail = polygon.curve_detail
    count = curve_sample_count(detail)
    boundary: List[Vec2] = []
    for i, p in enumerate(polygon.points):
        if not p.is_curve:
            boundary.append(p.position)
            continue
        a, b = polygon.edge(i)
        control = reconstruct_control(a, b, p.curve)
        for j in range(count):
            boundary.append(bezier_point(a, control, b, j / count))
    return boundary

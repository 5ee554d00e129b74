# polymesh/triangulate.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .curve import Vec2

logger = logging.getLogger(__name__)

Tri = Tuple[int, int, int]

# Ears whose turn is below this are treated as reflex, so collinear runs are skipped.
EPSILON = 1e-10


# -----------------------
# 2D polygon measurements
# -----------------------

def signed_area(poly: Sequence[Vec2]) -> float:
    """Signed polygon area. CCW => positive."""
    s = 0.0
    n = len(poly)
    for i in range(n):
        x0, y0 = poly[i - 1]
        x1, y1 = poly[i]
        s += x0 * y1 - x1 * y0
    return s * 0.5


def triangle_area(a: Vec2, b: Vec2, c: Vec2) -> float:
    return 0.5 * abs((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))


def triangles_area(poly: Sequence[Vec2], triangles: Sequence[Tri]) -> float:
    return sum(triangle_area(poly[a], poly[b], poly[c]) for a, b, c in triangles)


def _pt_in_tri(p: Vec2, a: Vec2, b: Vec2, c: Vec2) -> bool:
    """Same-side test against a CCW triangle. Points on an edge count as inside."""
    ax, ay = c[0] - b[0], c[1] - b[1]
    bx, by = a[0] - c[0], a[1] - c[1]
    cx, cy = b[0] - a[0], b[1] - a[1]
    apx, apy = p[0] - a[0], p[1] - a[1]
    bpx, bpy = p[0] - b[0], p[1] - b[1]
    cpx, cpy = p[0] - c[0], p[1] - c[1]

    a_cross_bp = ax * bpy - ay * bpx
    c_cross_ap = cx * apy - cy * apx
    b_cross_cp = bx * cpy - by * cpx
    return a_cross_bp >= 0.0 and b_cross_cp >= 0.0 and c_cross_ap >= 0.0


def _is_ear(poly: Sequence[Vec2], ring: List[int], u: int, v: int, w: int) -> bool:
    a, b, c = poly[ring[u]], poly[ring[v]], poly[ring[w]]
    if (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]) < EPSILON:
        return False
    for k in range(len(ring)):
        if k in (u, v, w):
            continue
        if _pt_in_tri(poly[ring[k]], a, b, c):
            return False
    return True


# --------------
# Ear clipping
# --------------

@dataclass
class Triangulation:
    """Triangles of a boundary; `complete` is False when clipping gave up early."""
    triangles: List[Tri] = field(default_factory=list)
    complete: bool = True

    def __len__(self) -> int:
        return len(self.triangles)


def triangulate(poly: Sequence[Vec2]) -> Triangulation:
    """
    Ear-clipping triangulation of a simple polygon, convex or concave.

    The ring is walked CCW whatever the input winding. Each shrink round may
    test at most 2 * remaining triples; when a round finds no ear (the input
    self-intersects or is degenerate) the triangles found so far are returned
    with `complete=False`.

    Indices refer to `poly`. The emitted index stream is reversed at the end,
    which flips every triangle to the winding the meshes are built with.
    """
    n = len(poly)
    if n < 3:
        return Triangulation([], True)

    ring = list(range(n))
    if signed_area(poly) <= 0:
        ring.reverse()

    flat: List[int] = []
    complete = True
    budget = 2 * n
    v = n - 1
    while len(ring) > 3:
        if budget <= 0:
            complete = False
            break
        budget -= 1

        nv = len(ring)
        u = v if v < nv else 0
        v = u + 1 if u + 1 < nv else 0
        w = v + 1 if v + 1 < nv else 0

        if _is_ear(poly, ring, u, v, w):
            flat.extend((ring[u], ring[v], ring[w]))
            del ring[v]
            budget = 2 * len(ring)

    # a collinear final triple is not a triangle
    if complete and len(ring) == 3 and not _is_ear(poly, ring, 0, 1, 2):
        complete = False
    if complete:
        flat.extend(ring)
    else:
        logger.warning(
            f"ear clipping stalled with {len(ring)} of {n} points left; "
            f"returning {len(flat) // 3} triangles"
        )

    flat.reverse()
    triangles: List[Tri] = [(flat[k], flat[k + 1], flat[k + 2]) for k in range(0, len(flat), 3)]
    return Triangulation(triangles, complete)


def triangulate_points(poly: Sequence[Vec2]) -> List[Tri]:
    return triangulate(poly).triangles

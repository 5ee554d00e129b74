# polymesh/curve.py
from __future__ import annotations

import math
from typing import Tuple

Vec2 = Tuple[float, float]


# --------------------------
# Small 2D vector utilities
# --------------------------

def v2_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def v2_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def v2_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def v2_dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def v2_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def v2_dist(a: Vec2, b: Vec2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def v2_norm(a: Vec2) -> Vec2:
    l = v2_len(a)
    if l == 0:
        return (0.0, 0.0)
    return (a[0] / l, a[1] / l)


def v2_lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def as_vec2(p) -> Vec2:
    """Coerce any 2+ element sequence to a float pair; z is dropped."""
    return (float(p[0]), float(p[1]))


# -----------------
# Quadratic Bezier
# -----------------

def bezier_scalar(a: float, control: float, b: float, t: float) -> float:
    c = 1.0 - t
    return a * c * c + control * 2.0 * c * t + b * t * t


def bezier_point(start: Vec2, control: Vec2, end: Vec2, t: float) -> Vec2:
    """Quadratic Bezier at t in [0, 1], evaluated per axis."""
    return (
        bezier_scalar(start[0], control[0], end[0], t),
        bezier_scalar(start[1], control[1], end[1], t),
    )


def reconstruct_control(start: Vec2, end: Vec2, bulge: Vec2) -> Vec2:
    """
    Turn an authored bulge handle into the Bezier control point of its edge.

    The bulge is projected onto the line through start/end and then pushed
    away from that projection by twice its offset, so the curve passes near
    the handle instead of being pulled toward it. A zero-length edge has no
    line to project on; the bulge is returned unchanged.
    """
    axis = v2_sub(end, start)
    if axis[0] == 0 and axis[1] == 0:
        return (bulge[0], bulge[1])
    axis = v2_norm(axis)
    along = v2_dot(axis, v2_sub(bulge, start))
    line_point = v2_add(start, v2_scale(axis, along))
    return v2_add(line_point, v2_scale(v2_sub(bulge, line_point), 2.0))

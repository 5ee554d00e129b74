# polymesh/selection.py
"""
Selection-driven transforms.

Every transform reads a baseline polygon (the state when a drag began) and
returns a new polygon; the baseline is never touched. Repeated calls with a
growing delta therefore never accumulate rounding or snapping drift.

When both ends of edge i are selected, the bulge handle of edge i moves with
them, so curved edges keep their shape under move, rotate and scale.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Iterator, Optional, Sequence, Tuple

from .curve import Vec2, as_vec2, v2_add, v2_sub
from .polygon import Polygon


# ---------
# Snapping
# ---------

def snap_value(value: Vec2, unit: float) -> Vec2:
    """Round each axis to the nearest multiple of unit. A non-positive unit disables snapping."""
    if unit <= 0:
        return value
    return (round(value[0] / unit) * unit, round(value[1] / unit) * unit)


@dataclass(frozen=True)
class SnapSettings:
    """
    enabled: snap at all
    global_snap: snap the resulting position to the grid; otherwise only the
        drag delta is snapped, keeping points at their off-grid offsets
    unit: grid spacing
    """
    enabled: bool = False
    global_snap: bool = False
    unit: float = 1.0

    def snap(self, value: Vec2) -> Vec2:
        return snap_value(value, self.unit)


NO_SNAP = SnapSettings()


# ----------
# Selection
# ----------

class Selection:
    """A set of vertex indices. Iterates in ascending order."""

    def __init__(self, indices: Iterable[int] = ()) -> None:
        self._indices = set(int(i) for i in indices)

    def __contains__(self, i: object) -> bool:
        return i in self._indices

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._indices))

    def __len__(self) -> int:
        return len(self._indices)

    def __bool__(self) -> bool:
        return bool(self._indices)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Selection):
            return self._indices == other._indices
        if isinstance(other, (set, frozenset)):
            return self._indices == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Selection({sorted(self._indices)})"

    def as_set(self) -> frozenset:
        return frozenset(self._indices)

    def add(self, i: int) -> None:
        self._indices.add(int(i))

    def discard(self, i: int) -> None:
        self._indices.discard(i)

    def clear(self) -> None:
        self._indices.clear()

    def replace(self, indices: Iterable[int]) -> None:
        self._indices = set(int(i) for i in indices)

    def select_all(self, count: int) -> None:
        self._indices = set(range(count))

    def clamp(self, count: int) -> None:
        """Drop indices that no longer exist in a polygon of `count` points."""
        self._indices = {i for i in self._indices if 0 <= i < count}

    def shift_after(self, index: int, amount: int) -> None:
        """Renumber after `amount` points were inserted right after `index`."""
        self._indices = {i + amount if i > index else i for i in self._indices}


# -----------
# Transforms
# -----------

def _indices(selection: Iterable[int]) -> AbstractSet[int]:
    if isinstance(selection, Selection):
        return selection.as_set()
    return frozenset(selection)


def _carries_curve(polygon: Polygon, selected: AbstractSet[int], i: int) -> bool:
    return polygon.next_index(i) in selected


def centroid(polygon: Polygon, selection: Iterable[int]) -> Vec2:
    selected = _indices(selection)
    if not selected:
        raise ValueError("centroid of an empty selection")
    sx = sy = 0.0
    for i in selected:
        x, y = polygon.points[i].position
        sx += x
        sy += y
    n = len(selected)
    return (sx / n, sy / n)


def translate(polygon: Polygon, selection: Iterable[int], delta: Sequence[float],
              snap: Optional[SnapSettings] = None) -> Polygon:
    """Move selected points to baseline + delta, snapping per `snap`."""
    selected = _indices(selection)
    snap = snap or NO_SNAP
    delta = as_vec2(delta)
    out = polygon.copy()

    def moved(p: Vec2) -> Vec2:
        if not snap.enabled:
            return v2_add(p, delta)
        if snap.global_snap:
            return snap.snap(v2_add(p, delta))
        return v2_add(p, snap.snap(delta))

    for i in selected:
        base = polygon.points[i]
        out.points[i].position = moved(base.position)
        if _carries_curve(polygon, selected, i):
            out.points[i].curve = moved(base.curve)
    out.sync_straight_curve_points()
    return out


def move_curve_point(polygon: Polygon, index: int, delta: Sequence[float],
                     snap: Optional[SnapSettings] = None) -> Polygon:
    """Drag the bulge handle of edge `index`; the edge becomes curved."""
    snap = snap or NO_SNAP
    out = polygon.copy()
    target = v2_add(polygon.points[index].curve, as_vec2(delta))
    if snap.enabled and snap.global_snap:
        target = snap.snap(target)
    out.set_curve_point(index, target)
    return out


def _rotate_about(p: Vec2, center: Vec2, angle: float) -> Vec2:
    ox, oy = v2_sub(p, center)
    a = math.atan2(oy, ox) + angle
    d = math.hypot(ox, oy)
    return (center[0] + math.cos(a) * d, center[1] + math.sin(a) * d)


def rotate(polygon: Polygon, selection: Iterable[int], center: Sequence[float],
           from_vector: Sequence[float], to_vector: Sequence[float]) -> Polygon:
    """Rotate selected points about center by the angle from `from_vector` to `to_vector`."""
    selected = _indices(selection)
    center = as_vec2(center)
    angle = math.atan2(to_vector[1], to_vector[0]) - math.atan2(from_vector[1], from_vector[0])
    out = polygon.copy()
    for i in selected:
        base = polygon.points[i]
        out.points[i].position = _rotate_about(base.position, center, angle)
        if _carries_curve(polygon, selected, i):
            out.points[i].curve = _rotate_about(base.curve, center, angle)
    out.sync_straight_curve_points()
    return out


def _axis_factor(v: float) -> float:
    # Dragging outward grows linearly; dragging inward shrinks toward, never to, zero.
    if v < 0:
        return 1.0 / (-v + 1.0)
    return 1.0 + v


def scale_factors(scale_vector: Sequence[float], uniform: bool = False) -> Tuple[float, float]:
    sx, sy = float(scale_vector[0]), float(scale_vector[1])
    if uniform:
        if abs(sx) > abs(sy):
            sy = sx
        else:
            sx = sy
    return _axis_factor(sx), _axis_factor(sy)


def scale(polygon: Polygon, selection: Iterable[int], center: Sequence[float],
          scale_vector: Sequence[float], uniform: bool = False) -> Polygon:
    """Scale offsets from center per axis; (0, 0) is the identity."""
    selected = _indices(selection)
    cx, cy = as_vec2(center)
    fx, fy = scale_factors(scale_vector, uniform)
    out = polygon.copy()

    def scaled(p: Vec2) -> Vec2:
        x = p[0] if fx == 1.0 else cx + (p[0] - cx) * fx
        y = p[1] if fy == 1.0 else cy + (p[1] - cy) * fy
        return (x, y)

    for i in selected:
        base = polygon.points[i]
        out.points[i].position = scaled(base.position)
        if _carries_curve(polygon, selected, i):
            out.points[i].curve = scaled(base.curve)
    out.sync_straight_curve_points()
    return out

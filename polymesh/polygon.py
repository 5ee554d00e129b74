# polymesh/polygon.py
"""
Editable closed 2D polygon.

Every vertex is a `PolyPoint` record holding the key point, the bulge handle of
the edge that starts at it, and whether that edge is curved. Edge i runs from
vertex i to vertex (i + 1) % N, so the record list is read cyclically
everywhere; `Polygon.next_index` is the one place that does the wrap.

For straight edges the bulge handle is kept at the edge midpoint so a shell can
draw and grab it. Any method that changes positions or topology ends by
re-syncing those midpoints.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .curve import Vec2, as_vec2, v2_lerp

logger = logging.getLogger(__name__)

MIN_POINTS = 3
MIN_CURVE_DETAIL = 0.01
MAX_CURVE_DETAIL = 1.0
MIN_COLLIDER_DEPTH = 0.01


@dataclass
class PolyPoint:
    position: Vec2
    curve: Vec2 = (0.0, 0.0)
    is_curve: bool = False

    def copy(self) -> "PolyPoint":
        return PolyPoint(self.position, self.curve, self.is_curve)


def _square_points(size: float = 0.5) -> List[PolyPoint]:
    corners = [(size, size), (size, -size), (-size, -size), (-size, size)]
    return [PolyPoint((float(x), float(y))) for x, y in corners]


def clamp_detail(detail: float) -> float:
    if not math.isfinite(detail):
        return MAX_CURVE_DETAIL
    return max(MIN_CURVE_DETAIL, min(MAX_CURVE_DETAIL, float(detail)))


def wrap_degrees(angle: float) -> float:
    """Wrap an angle into [-180, 180)."""
    return (float(angle) + 180.0) % 360.0 - 180.0


@dataclass
class Polygon:
    points: List[PolyPoint] = field(default_factory=_square_points)
    curve_detail: float = 0.1
    collider_depth: float = 1.0
    build_collider_edges: bool = True
    build_collider_front: bool = False
    uv_position: Vec2 = (0.0, 0.0)
    uv_scale: float = 1.0
    uv_rotation: float = 0.0

    def __post_init__(self) -> None:
        if len(self.points) < MIN_POINTS:
            raise ValueError(f"a polygon needs at least {MIN_POINTS} points (got {len(self.points)})")
        self.points = [
            PolyPoint(as_vec2(p.position), as_vec2(p.curve), bool(p.is_curve)) for p in self.points
        ]
        self.curve_detail = clamp_detail(self.curve_detail)
        self.collider_depth = max(MIN_COLLIDER_DEPTH, float(self.collider_depth))
        self.uv_position = as_vec2(self.uv_position)
        self.uv_scale = float(self.uv_scale)
        self.uv_rotation = wrap_degrees(self.uv_rotation)
        self.sync_straight_curve_points()

    # ---- construction ----
    @classmethod
    def square(cls, size: float = 0.5, **settings: Any) -> "Polygon":
        return cls(_square_points(size), **settings)

    @classmethod
    def from_parallel(cls, key_points: Sequence[Sequence[float]],
                      curve_points: Optional[Sequence[Sequence[float]]] = None,
                      is_curve: Optional[Sequence[bool]] = None, **settings: Any) -> "Polygon":
        """Build from the three lockstep sequences (key points, bulges, curve flags)."""
        n = len(key_points)
        if curve_points is None:
            curve_points = [(0.0, 0.0)] * n
        if is_curve is None:
            is_curve = [False] * n
        if len(curve_points) != n or len(is_curve) != n:
            raise ValueError(
                f"key_points, curve_points and is_curve must have equal length "
                f"(got {n}, {len(curve_points)}, {len(is_curve)})"
            )
        pts = [PolyPoint(as_vec2(k), as_vec2(c), bool(f)) for k, c, f in zip(key_points, curve_points, is_curve)]
        return cls(pts, **settings)

    def copy(self) -> "Polygon":
        kwargs = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "points"}
        return Polygon([p.copy() for p in self.points], **kwargs)

    # ---- cyclic access ----
    def __len__(self) -> int:
        return len(self.points)

    def next_index(self, i: int) -> int:
        return (i + 1) % len(self.points)

    def edge(self, i: int) -> Tuple[Vec2, Vec2]:
        return self.points[i].position, self.points[self.next_index(i)].position

    def valid_index(self, i: int) -> bool:
        return 0 <= i < len(self.points)

    # ---- parallel views ----
    @property
    def key_points(self) -> List[Vec2]:
        return [p.position for p in self.points]

    @property
    def curve_points(self) -> List[Vec2]:
        return [p.curve for p in self.points]

    @property
    def is_curve(self) -> List[bool]:
        return [p.is_curve for p in self.points]

    # ---- midpoint maintenance ----
    def _sync_edge(self, i: int) -> None:
        p = self.points[i]
        if not p.is_curve:
            a, b = self.edge(i)
            p.curve = v2_lerp(a, b, 0.5)

    def sync_straight_curve_points(self) -> None:
        for i in range(len(self.points)):
            self._sync_edge(i)

    # ---- positional edits ----
    def move_key_point(self, i: int, position: Sequence[float]) -> bool:
        if not self.valid_index(i):
            return False
        self.points[i].position = as_vec2(position)
        self._sync_edge(i)
        self._sync_edge((i - 1) % len(self.points))
        return True

    def set_curve_point(self, i: int, position: Sequence[float]) -> bool:
        """Place the bulge handle of edge i; the edge becomes curved."""
        if not self.valid_index(i):
            return False
        p = self.points[i]
        p.is_curve = True
        p.curve = as_vec2(position)
        return True

    def clear_curve(self, i: int) -> bool:
        if not self.valid_index(i):
            return False
        self.points[i].is_curve = False
        self._sync_edge(i)
        return True

    # ---- structural edits ----
    def split_edge(self, i: int, position: Sequence[float]) -> bool:
        """Insert a straight vertex on edge i. A curved edge i becomes straight."""
        if not self.valid_index(i):
            return False
        self.points.insert(i + 1, PolyPoint(as_vec2(position)))
        self.points[i].is_curve = False
        self._sync_edge(i)
        self._sync_edge(i + 1)
        logger.debug(f"split edge {i}: {len(self.points)} points")
        return True

    def extrude_edge(self, i: int) -> Optional[Tuple[int, int]]:
        """
        Duplicate both endpoints of edge i and insert them between the two.
        Returns the indices of the duplicates, which start out coincident with
        the originals so the caller can drag them away as one new edge.
        """
        if not self.valid_index(i):
            return None
        a, b = self.edge(i)
        at = i + 1
        self.points[at:at] = [PolyPoint(a), PolyPoint(b)]
        self.points[i].is_curve = False
        for k in (i, at, at + 1):
            self._sync_edge(k)
        logger.debug(f"extruded edge {i}: {len(self.points)} points")
        return (at, at + 1)

    def delete_vertices(self, indices: Iterable[int]) -> bool:
        """
        Remove the given vertices. Nothing is removed when an index is out of
        range or when fewer than three vertices would remain.
        """
        doomed = sorted(set(indices), reverse=True)
        if not doomed:
            return False
        if any(not self.valid_index(i) for i in doomed):
            return False
        if len(self.points) - len(doomed) < MIN_POINTS:
            logger.debug(f"refusing to delete {len(doomed)} of {len(self.points)} points")
            return False
        for i in doomed:
            del self.points[i]
        self.sync_straight_curve_points()
        logger.debug(f"deleted {len(doomed)} points: {len(self.points)} left")
        return True

    # ---- persistence ----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "key_points": [list(p) for p in self.key_points],
            "curve_points": [list(p) for p in self.curve_points],
            "is_curve": self.is_curve,
            "curve_detail": self.curve_detail,
            "collider_depth": self.collider_depth,
            "build_collider_edges": self.build_collider_edges,
            "build_collider_front": self.build_collider_front,
            "uv_position": list(self.uv_position),
            "uv_scale": self.uv_scale,
            "uv_rotation": self.uv_rotation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Polygon":
        try:
            key_points = data["key_points"]
        except KeyError:
            raise ValueError("polygon data has no 'key_points'") from None
        settings = {
            f.name: data[f.name] for f in fields(cls)
            if f.name != "points" and f.name in data
        }
        return cls.from_parallel(key_points, data.get("curve_points"), data.get("is_curve"), **settings)

# polymesh/session.py
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence

from .curve import Vec2, as_vec2, v2_add, v2_sub
from .polygon import Polygon
from .selection import SnapSettings, centroid, move_curve_point, rotate, scale, translate


class SessionClosedError(RuntimeError):
    pass


class DragMode(Enum):
    KEY_POINT = "key_point"
    CURVE_POINT = "curve_point"
    MOVE = "move"
    ROTATE = "rotate"
    SCALE = "scale"
    EXTRUDE = "extrude"

    @property
    def cursor(self) -> str:
        if self is DragMode.ROTATE:
            return "rotate"
        if self is DragMode.SCALE:
            return "scale"
        return "move"


_SELECTION_MODES = (DragMode.MOVE, DragMode.ROTATE, DragMode.SCALE, DragMode.EXTRUDE)


class DragSession:
    """
    One drag gesture over a snapshot of the polygon.

    `apply(delta)` recomputes the dragged polygon from the snapshot, so it can
    be called for every cursor move. `commit()` returns the final polygon and
    `cancel()` the untouched snapshot; either one closes the session. Used as
    a context manager, a session that is still open on exit is cancelled.
    """

    def __init__(self, baseline: Polygon, mode: DragMode, origin: Sequence[float],
                 selection: Iterable[int] = (), index: Optional[int] = None) -> None:
        self.baseline = baseline.copy()
        self.mode = mode
        self.origin: Vec2 = as_vec2(origin)
        self.index = index
        if mode in _SELECTION_MODES:
            self.selection = frozenset(selection)
            if not self.selection:
                raise ValueError(f"{mode.value} drag needs a non-empty selection")
            if any(not baseline.valid_index(i) for i in self.selection):
                raise ValueError(f"selection {sorted(self.selection)} out of range for {len(baseline)} points")
        else:
            if index is None or not baseline.valid_index(index):
                raise ValueError(f"{mode.value} drag needs a valid point index (got {index})")
            self.selection = frozenset((index,))
        self.center: Optional[Vec2] = None
        if mode in (DragMode.ROTATE, DragMode.SCALE):
            self.center = centroid(self.baseline, self.selection)
        self.current = self.baseline.copy()
        self.delta: Vec2 = (0.0, 0.0)
        self.closed = False

    # ---- context manager ----
    def __enter__(self) -> "DragSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self.closed:
            self.cancel()
        return False

    # ---- state ----
    @property
    def cursor(self) -> str:
        return self.mode.cursor

    @property
    def moved(self) -> bool:
        return self.delta != (0.0, 0.0)

    def _check_open(self) -> None:
        if self.closed:
            raise SessionClosedError(f"{self.mode.value} drag session is already closed")

    # ---- drag ----
    def apply(self, delta: Sequence[float], snap: Optional[SnapSettings] = None,
              uniform: bool = False) -> Polygon:
        self._check_open()
        delta = as_vec2(delta)
        mode = self.mode
        if mode in (DragMode.MOVE, DragMode.EXTRUDE, DragMode.KEY_POINT):
            result = translate(self.baseline, self.selection, delta, snap)
        elif mode is DragMode.CURVE_POINT:
            result = move_curve_point(self.baseline, self.index, delta, snap)
        elif mode is DragMode.ROTATE:
            start = v2_sub(self.origin, self.center)
            result = rotate(self.baseline, self.selection, self.center, start, v2_add(start, delta))
        else:
            result = scale(self.baseline, self.selection, self.center, delta, uniform)
        self.delta = delta
        self.current = result
        return result

    def apply_cursor(self, cursor: Sequence[float], snap: Optional[SnapSettings] = None,
                     uniform: bool = False) -> Polygon:
        return self.apply(v2_sub(as_vec2(cursor), self.origin), snap, uniform)

    def commit(self) -> Polygon:
        self._check_open()
        self.closed = True
        return self.current

    def cancel(self) -> Polygon:
        self._check_open()
        self.closed = True
        self.current = self.baseline.copy()
        return self.current


def begin_drag(polygon: Polygon, mode: DragMode, origin: Sequence[float],
               selection: Iterable[int] = (), index: Optional[int] = None) -> DragSession:
    return DragSession(polygon, mode, origin, selection, index)

# polymesh/editor.py
"""
Intent-level editing of one polygon.

A shell projects the mouse into the polygon's plane and forwards discrete
intents: hover, press, drag, release, select all, split, delete, box select.
The editor picks the gesture the hovered handle implies, runs it through a
`DragSession`, and rebuilds the front and collision meshes when an edit lands.
It never draws; `hover()` returns the cursor the shell should show.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import FrozenSet, Optional, Sequence, Tuple

from .config import EditorConfig
from .curve import Vec2, as_vec2
from .mesh import Mesh, build_meshes
from .polygon import Polygon
from .queries import (
    EdgeHit,
    box_select,
    hit_move_handle,
    hit_rotate_handle,
    hit_scale_handle,
    is_hovering,
    nearest_edge_projection,
    nearest_vertex,
)
from .selection import Selection, centroid
from .session import DragMode, DragSession

logger = logging.getLogger(__name__)

CURSOR_DEFAULT = "default"


class Tool(Enum):
    MOVE = "move"
    ROTATE = "rotate"
    SCALE = "scale"


class PolyEditor:
    def __init__(self, polygon: Optional[Polygon] = None, config: Optional[EditorConfig] = None) -> None:
        self.polygon = polygon if polygon is not None else Polygon()
        self.config = config or EditorConfig()
        self.selection = Selection()
        self.nearest_edge: Optional[EdgeHit] = None
        self.session: Optional[DragSession] = None
        self._box_origin: Optional[Vec2] = None
        self._restore: Optional[Tuple[Polygon, FrozenSet[int]]] = None
        self._extrude_built = False
        self.front_mesh, self.collider_mesh = build_meshes(self.polygon)

    # ---- meshes ----
    def rebuild(self, polygon: Optional[Polygon] = None) -> Tuple[Mesh, Mesh]:
        self.front_mesh, self.collider_mesh = build_meshes(polygon if polygon is not None else self.polygon)
        return self.front_mesh, self.collider_mesh

    @property
    def live_polygon(self) -> Polygon:
        """The polygon as currently displayed, including an uncommitted drag."""
        if self.session is not None:
            return self.session.current
        return self.polygon

    # ---- hover ----
    def _hovered(self, points: Sequence[Vec2], cursor: Vec2) -> Optional[int]:
        i = nearest_vertex(points, cursor)
        if i is not None and is_hovering(points[i], cursor, self.config.size("click_radius")):
            return i
        return None

    def _handle_mode(self, cursor: Vec2, tool: Tool) -> Optional[DragMode]:
        if not self.selection:
            return None
        center = centroid(self.polygon, self.selection)
        if tool is Tool.MOVE and hit_move_handle(center, cursor, self.config.size("move_handle_size")):
            return DragMode.MOVE
        if tool is Tool.ROTATE and hit_rotate_handle(center, cursor, self.config.size("rotate_handle_size")):
            return DragMode.ROTATE
        if tool is Tool.SCALE and hit_scale_handle(center, cursor, self.config.size("scale_handle_size")):
            return DragMode.SCALE
        return None

    def update_nearest_edge(self, cursor: Sequence[float]) -> Optional[EdgeHit]:
        self.nearest_edge = nearest_edge_projection(self.live_polygon, cursor)
        return self.nearest_edge

    def hover(self, cursor: Sequence[float], tool: Tool = Tool.MOVE) -> str:
        cursor = as_vec2(cursor)
        self.update_nearest_edge(cursor)
        if self.session is not None:
            return self.session.cursor
        mode = self._handle_mode(cursor, tool)
        if mode is not None:
            return mode.cursor
        if tool is Tool.MOVE:
            if self._hovered(self.polygon.curve_points, cursor) is not None:
                return DragMode.MOVE.cursor
            if self._hovered(self.polygon.key_points, cursor) is not None:
                return DragMode.MOVE.cursor
        return CURSOR_DEFAULT

    # ---- key intents ----
    def select_all(self) -> Selection:
        self.selection.select_all(len(self.polygon))
        return self.selection

    def split(self, cursor: Optional[Sequence[float]] = None) -> bool:
        """Insert a vertex at the projection on the nearest edge."""
        if self.session is not None:
            return False
        if cursor is not None:
            self.update_nearest_edge(cursor)
        hit = self.nearest_edge
        if hit is None or not self.polygon.valid_index(hit.edge):
            return False
        if not self.polygon.split_edge(hit.edge, hit.point):
            return False
        self.selection.shift_after(hit.edge, 1)
        self.nearest_edge = None
        self.rebuild()
        return True

    def delete(self, cursor: Optional[Sequence[float]] = None) -> bool:
        """
        Delete the selected vertices. With nothing selected, a hovered curve
        handle of the nearest edge straightens that edge instead.
        """
        if self.session is not None:
            return False
        if self.selection:
            if not self.polygon.delete_vertices(self.selection):
                return False
            self.selection.clear()
            self.nearest_edge = None
            self.rebuild()
            return True
        if cursor is None:
            return False
        hit = self.update_nearest_edge(cursor)
        if hit is None or not self.polygon.valid_index(hit.edge):
            return False
        p = self.polygon.points[hit.edge]
        if not p.is_curve:
            return False
        if not is_hovering(p.curve, cursor, self.config.size("click_radius")):
            return False
        self.polygon.clear_curve(hit.edge)
        self.rebuild()
        return True

    # ---- mouse intents ----
    def press(self, cursor: Sequence[float], tool: Tool = Tool.MOVE, extrude: bool = False) -> Optional[DragSession]:
        """
        Start a gesture at cursor. Priority follows the handles: the selection
        transform handle of the active tool, then edge extrusion, then a curve
        handle, then a key point. Anything else starts a box selection and
        returns None.
        """
        if self.session is not None:
            return self.session
        cursor = as_vec2(cursor)
        self.update_nearest_edge(cursor)
        self._restore = (self.polygon.copy(), self.selection.as_set())

        mode = self._handle_mode(cursor, tool)
        if mode is not None:
            return self._begin(mode, cursor, selection=self.selection.as_set())

        if tool is Tool.MOVE and extrude and self.nearest_edge is not None:
            new_pair = self.polygon.extrude_edge(self.nearest_edge.edge)
            if new_pair is not None:
                self.selection.replace(new_pair)
                self._extrude_built = False
                return self._begin(DragMode.EXTRUDE, cursor, selection=new_pair)

        if tool is Tool.MOVE:
            i = self._hovered(self.polygon.curve_points, cursor)
            if i is not None:
                return self._begin(DragMode.CURVE_POINT, cursor, index=i)
            i = self._hovered(self.polygon.key_points, cursor)
            if i is not None:
                return self._begin(DragMode.KEY_POINT, cursor, index=i)

        self._restore = None
        self._box_origin = cursor
        return None

    def _begin(self, mode: DragMode, cursor: Vec2, selection=(), index: Optional[int] = None) -> DragSession:
        self.session = DragSession(self.polygon, mode, cursor, selection, index)
        logger.debug(f"begin {mode.value} drag at {cursor}")
        return self.session

    def drag(self, cursor: Sequence[float], snap_modifier: bool = False, uniform: bool = False) -> Polygon:
        if self.session is None:
            return self.polygon
        live = self.session.apply_cursor(cursor, self.config.snap_settings(snap_modifier), uniform)
        # extruded points start coincident; build once they have separated
        if self.session.mode is DragMode.EXTRUDE and not self._extrude_built and self.session.moved:
            self.rebuild(live)
            self._extrude_built = True
        return live

    def release(self, cursor: Sequence[float], additive: bool = False) -> Polygon:
        cursor = as_vec2(cursor)
        if self.session is not None:
            self.polygon = self.session.commit()
            logger.debug(f"commit {self.session.mode.value} drag, delta {self.session.delta}")
            self.session = None
            self._restore = None
            self.nearest_edge = None
            self.selection.clamp(len(self.polygon))
            self.rebuild()
        elif self._box_origin is not None:
            self.box_select(self._box_origin, cursor, additive)
            self._box_origin = None
        return self.polygon

    def cancel(self) -> Polygon:
        """Abandon the current gesture, including an extrusion it started."""
        if self.session is not None:
            self.session.cancel()
            self.session = None
        if self._restore is not None:
            self.polygon, selected = self._restore
            self.selection.replace(selected)
            self._restore = None
            self.rebuild()
        self.nearest_edge = None
        self._box_origin = None
        return self.polygon

    def box_select(self, corner_a: Sequence[float], corner_b: Sequence[float], additive: bool = False) -> Selection:
        hits = box_select(self.polygon.key_points, corner_a, corner_b)
        if not additive:
            self.selection.clear()
        for i in hits:
            self.selection.add(i)
        return self.selection

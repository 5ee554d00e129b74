# polymesh/mesh.py
"""
Mesh synthesis for a polygon.

Two meshes come out of a polygon:

* the front mesh: the tessellated boundary as vertices (z = 0), ear-clipped
  triangles and planar UVs
* the extrusion mesh used for collision: a side wall made by offsetting the
  boundary by +-depth/2 along z, optionally followed by a copy of the front

Both are rebuilt from scratch on every call; nothing is cached between builds.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .curve import Vec2
from .polygon import MIN_COLLIDER_DEPTH, Polygon
from .tessellate import tessellate
from .triangulate import Tri, triangle_area, triangulate

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


# --------------
# Mesh container
# --------------

@dataclass
class Mesh:
    vertices: List[Vec3] = field(default_factory=list)
    faces: List[Tri] = field(default_factory=list)
    uvs: Optional[List[Vec2]] = None      # aligned 1:1 with vertices when present
    name: str = "mesh"
    complete: bool = True                  # False when triangulation gave up early

    def copy(self) -> "Mesh":
        return Mesh(self.vertices.copy(), self.faces.copy(),
                    None if self.uvs is None else self.uvs.copy(),
                    self.name, self.complete)

    def merge(self, other: "Mesh") -> "Mesh":
        offset = len(self.vertices)
        self.vertices.extend(other.vertices)
        self.faces.extend([(a + offset, b + offset, c + offset) for (a, b, c) in other.faces])
        if self.uvs is not None and other.uvs is not None:
            self.uvs.extend(other.uvs)
        else:
            self.uvs = None  # mixed state
        self.complete = self.complete and other.complete
        return self

    def is_empty(self) -> bool:
        return not self.vertices and not self.faces

    # ---- analysis ----
    def bounds(self) -> Tuple[Vec3, Vec3]:
        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        zs = [v[2] for v in self.vertices]
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def surface_area(self) -> float:
        """Area of the faces projected on the xy plane."""
        area = 0.0
        for ia, ib, ic in self.faces:
            a, b, c = self.vertices[ia], self.vertices[ib], self.vertices[ic]
            area += triangle_area((a[0], a[1]), (b[0], b[1]), (c[0], c[1]))
        return area

    # ---- hand-off ----
    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray, Optional[np.ndarray]]:
        """(vertices (N,3) float32, faces (M,3) int32, uvs (N,2) float32 or None)."""
        verts = np.asarray(self.vertices, dtype=np.float32).reshape(-1, 3)
        faces = np.asarray(self.faces, dtype=np.int32).reshape(-1, 3)
        uvs = None
        if self.uvs is not None:
            uvs = np.asarray(self.uvs, dtype=np.float32).reshape(-1, 2)
        return verts, faces, uvs


# ------------
# UV mapping
# ------------

@dataclass(frozen=True)
class UVTransform:
    """Texture placement: offset, rotation in degrees, and uniform scale."""
    position: Vec2 = (0.0, 0.0)
    rotation: float = 0.0
    scale: float = 1.0

    @classmethod
    def from_polygon(cls, polygon: Polygon) -> "UVTransform":
        return cls(polygon.uv_position, polygon.uv_rotation, polygon.uv_scale)

    def apply(self, points: Sequence[Vec2]) -> List[Vec2]:
        """Translate by -position, rotate by -rotation, then scale by 1/scale (0 stays 0)."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        pts = pts - np.asarray(self.position, dtype=np.float64)
        ang = -math.radians(self.rotation)
        c, s = math.cos(ang), math.sin(ang)
        rot = np.array([[c, -s], [s, c]])
        pts = pts @ rot.T
        factor = 1.0 / self.scale if self.scale != 0 else 0.0
        pts = pts * factor
        return [(float(u), float(v)) for u, v in pts]


# ----------------
# Mesh synthesis
# ----------------

def build_front_mesh(polygon: Polygon, detail: Optional[float] = None,
                     uv_transform: Optional[UVTransform] = None, name: str = "polymesh_front") -> Mesh:
    boundary = tessellate(polygon, detail)
    tri = triangulate(boundary)
    if uv_transform is None:
        uv_transform = UVTransform.from_polygon(polygon)
    verts: List[Vec3] = [(x, y, 0.0) for (x, y) in boundary]
    uvs = uv_transform.apply(boundary)
    return Mesh(verts, list(tri.triangles), uvs, name=name, complete=tri.complete)


def build_extrusion_mesh(boundary: Sequence[Vec2], triangles: Sequence[Tri], depth: float,
                         include_edges: bool = True, include_front: bool = False,
                         name: str = "polymesh_collider") -> Mesh:
    """
    Collision mesh for a boundary ring.

    With `include_edges`, every boundary point p yields two vertices,
    p + depth/2 and p - depth/2 along z, and every ring edge a quad of two
    triangles. With `include_front`, the front triangles follow, indexed after
    the wall vertices. With neither flag the mesh is empty.
    """
    mesh = Mesh(name=name)
    half = max(MIN_COLLIDER_DEPTH, depth) / 2.0

    if include_edges and boundary:
        for x, y in boundary:
            mesh.vertices.append((x, y, half))
            mesh.vertices.append((x, y, -half))
        count = len(mesh.vertices)
        for a in range(0, count, 2):
            b = (a + 1) % count
            c = (a + 2) % count
            d = (a + 3) % count
            mesh.faces.append((a, c, b))
            mesh.faces.append((c, d, b))

    if include_front:
        front = Mesh([(x, y, 0.0) for (x, y) in boundary], list(triangles))
        mesh.merge(front)

    return mesh


def build_meshes(polygon: Polygon, detail: Optional[float] = None) -> Tuple[Mesh, Mesh]:
    """Front mesh and collision mesh for a polygon, using its stored settings."""
    front = build_front_mesh(polygon, detail)
    boundary = [(x, y) for (x, y, _z) in front.vertices]
    collider = build_extrusion_mesh(
        boundary, front.faces, polygon.collider_depth,
        polygon.build_collider_edges, polygon.build_collider_front,
    )
    logger.debug(
        f"built meshes: front {len(front.vertices)} verts / {len(front.faces)} tris, "
        f"collider {len(collider.vertices)} verts / {len(collider.faces)} tris"
    )
    return front, collider

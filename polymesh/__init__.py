"""
polymesh: an editable closed 2D polygon with straight or quadratic-curve
edges, and the meshes built from it.

Highlights
---------
• Polygon of PolyPoint records (key point, bulge handle, curve flag)
• Structural edits: split, extrude, delete, clear curve
• Curve tessellation and ear-clipping triangulation
• Front mesh with planar UVs and an extruded collision mesh
• Selection transforms (move / rotate / scale) over drag sessions
• Nearest vertex / nearest edge queries and handle hit tests
"""
from .config import EditorConfig
from .curve import bezier_point, reconstruct_control
from .editor import PolyEditor, Tool
from .mesh import Mesh, UVTransform, build_extrusion_mesh, build_front_mesh, build_meshes
from .polygon import PolyPoint, Polygon
from .queries import EdgeHit, nearest_edge_projection, nearest_vertex, point_in_rectangle
from .selection import Selection, SnapSettings, centroid, rotate, scale, translate
from .session import DragMode, DragSession, SessionClosedError, begin_drag
from .tessellate import tessellate
from .triangulate import Triangulation, triangulate, triangulate_points

__all__ = [
    "DragMode", "DragSession", "EdgeHit", "EditorConfig", "Mesh", "PolyEditor", "PolyPoint", "Polygon",
    "Selection", "SessionClosedError", "SnapSettings", "Tool", "Triangulation", "UVTransform",
    "begin_drag", "bezier_point", "build_extrusion_mesh", "build_front_mesh", "build_meshes", "centroid",
    "nearest_edge_projection", "nearest_vertex", "point_in_rectangle", "reconstruct_control", "rotate",
    "scale", "tessellate", "translate", "triangulate", "triangulate_points",
]

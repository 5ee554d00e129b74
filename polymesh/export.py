# polymesh/export.py
from __future__ import annotations

import json
import logging
from typing import Optional

from .mesh import Mesh, build_meshes
from .polygon import Polygon

logger = logging.getLogger(__name__)


# ---------------------
# Polygon persistence
# ---------------------

def save_polygon(path: str, polygon: Polygon) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(polygon.to_dict(), f, indent=2)


def load_polygon(path: str) -> Polygon:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return Polygon.from_dict(data)


# -------------
# Mesh export
# -------------

def save_obj(path: str, mesh: Mesh) -> None:
    """Save OBJ with optional vt (assumes uvs are aligned with vertices)."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"o {mesh.name}\n")
        for x, y, z in mesh.vertices:
            f.write(f"v {x:.6f} {y:.6f} {z:.6f}\n")
        use_vt = mesh.uvs is not None
        if use_vt:
            for u, v in mesh.uvs:
                f.write(f"vt {u:.6f} {v:.6f}\n")
        for face in mesh.faces:
            # OBJ indices are 1-based
            if use_vt:
                f.write("f " + " ".join(f"{i + 1}/{i + 1}" for i in face) + "\n")
            else:
                f.write("f " + " ".join(f"{i + 1}" for i in face) + "\n")


# --------
#   CLI
# --------

_DEF_HELP = """
Examples:
  python -m polymesh --square 0.5 --out square.obj
  python -m polymesh --polygon shape.json --out front.obj --collider collider.obj
  python -m polymesh --polygon shape.json --detail 0.02 --out smooth.obj
  python -m polymesh --square 1 --save-polygon shape.json --out square.obj
"""


def _cli(argv: Optional[list] = None) -> int:
    import argparse
    p = argparse.ArgumentParser(description="polymesh: build meshes from an editable 2D polygon", epilog=_DEF_HELP,
                                formatter_class=argparse.RawTextHelpFormatter)
    src = p.add_mutually_exclusive_group()
    src.add_argument("--polygon", help="Polygon JSON file (key_points, curve_points, is_curve, settings)")
    src.add_argument("--square", type=float, default=0.5, help="Half-size of the default square polygon")
    p.add_argument("--out", required=True, help="Front mesh output path (.obj)")
    p.add_argument("--collider", help="Collision mesh output path (.obj)")
    p.add_argument("--detail", type=float, help="Curve detail override, 0.01..1")
    p.add_argument("--depth", type=float, help="Collider depth override")
    p.add_argument("--front", action="store_true", help="Include the front face in the collision mesh")
    p.add_argument("--no-edges", action="store_true", help="Leave the side walls out of the collision mesh")
    p.add_argument("--save-polygon", help="Also write the polygon as JSON")
    p.add_argument("-v", "--verbose", action="store_true")

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.polygon:
        polygon = load_polygon(args.polygon)
        logger.info(f"loaded {len(polygon)} points from {args.polygon}")
    else:
        polygon = Polygon.square(args.square)

    if args.depth is not None:
        polygon.collider_depth = max(0.01, args.depth)
    if args.front:
        polygon.build_collider_front = True
    if args.no_edges:
        polygon.build_collider_edges = False

    front, collider = build_meshes(polygon, args.detail)
    if not front.complete:
        logger.warning("polygon is not simple; the front mesh is incomplete")

    save_obj(args.out, front)
    lo, hi = front.bounds()
    logger.info(f"wrote {args.out}: {len(front.vertices)} vertices, {len(front.faces)} triangles")
    logger.info(f"front bounds x {lo[0]:.3f}..{hi[0]:.3f}, y {lo[1]:.3f}..{hi[1]:.3f}")
    if args.collider:
        save_obj(args.collider, collider)
        logger.info(f"wrote {args.collider}: {len(collider.vertices)} vertices, {len(collider.faces)} triangles")
    if args.save_polygon:
        save_polygon(args.save_polygon, polygon)
        logger.info(f"wrote {args.save_polygon}")
    return 0


if __name__ == "__main__":
    raise SystemExit(_cli())

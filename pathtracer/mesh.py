"""Triangle meshes, Wavefront OBJ loading and mesh/ray intersection."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import List, Optional, Union

from .geometry import HIT_EPSILON, BVHNode, Triangle
from .vector import AABB, Hit, Ray, Vec3

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ObjError(Exception):
    """Raised when an OBJ file cannot be read or holds no usable triangles."""


@dataclass
class Mesh:
    """Triangles in model space, placed in the world by a uniform scale and a position."""

    triangles: List[Triangle] = field(default_factory=list)
    position: Vec3 = field(default_factory=Vec3)
    scale: float = 1.0
    bvh: Optional[BVHNode] = None
    bbox: AABB = field(default_factory=AABB.empty)

    def translate(self, offset: Vec3) -> None:
        self.position = self.position + offset

    def world_triangles(self) -> List[Triangle]:
        """The triangles scaled and moved into world space."""
        return [tri.transformed(self.scale, self.position) for tri in self.triangles]

    def build_bvh(self) -> None:
        """Build the hierarchy over the world-space triangles; an empty mesh gets none."""
        world = self.world_triangles()
        if world:
            self.bvh = BVHNode(world)
            self.bbox = self.bvh.bbox


def _parse_index(token: str) -> int:
    """The vertex index at the start of a face token such as ``3/1/2``; 0 if there is none."""
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def _parse_xyz(parts: List[str]) -> Optional[Vec3]:
    if len(parts) < 3:
        return None
    try:
        return Vec3(float(parts[0]), float(parts[1]), float(parts[2]))
    except ValueError:
        return None


def load_obj(
    path: Union[str, PathLike],
    color: Vec3 = Vec3(0.9, 0.9, 0.9),
    reflective: bool = False,
) -> Mesh:
    """Read vertices and triangular faces from an OBJ file into a new mesh.

    Malformed lines are logged and skipped. Raises ObjError if the file cannot
    be opened or yields no triangles.
    """
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ObjError(f"Failed to open file: {path}") from exc

    logger.info("Loading OBJ file: %s", path)
    vertices: List[Vec3] = [Vec3()]  # OBJ indices start at 1
    mesh = Mesh()
    vertex_count = 0

    with handle:
        for line_number, line in enumerate(handle, start=1):
            parts = line.split()
            if not parts:
                continue
            keyword, args = parts[0], parts[1:]

            if keyword == "v":
                vertex = _parse_xyz(args)
                if vertex is None:
                    logger.warning("Error parsing vertex at line %d", line_number)
                    continue
                vertices.append(vertex)
                vertex_count += 1
            elif keyword == "vn":
                if _parse_xyz(args) is None:
                    logger.warning("Error parsing normal at line %d", line_number)
            elif keyword == "f":
                if len(args) < 3:
                    logger.warning("Error parsing face at line %d", line_number)
                    continue
                indices = [_parse_index(token) for token in args[:3]]
                if all(0 < index < len(vertices) for index in indices):
                    a, b, c = (vertices[index] for index in indices)
                    mesh.triangles.append(Triangle(a, b, c, color, reflective))
                else:
                    logger.warning(
                        "Invalid vertex indices at line %d: %d, %d, %d (max: %d)",
                        line_number,
                        *indices,
                        len(vertices) - 1,
                    )

    logger.info("OBJ loaded: %d vertices, %d faces", vertex_count, len(mesh.triangles))
    if not mesh.triangles:
        raise ObjError(f"No valid triangles found in OBJ file: {path}")
    return mesh


def intersect_mesh(ray: Ray, mesh: Mesh, t_max: float = math.inf) -> Optional[Hit]:
    """Closest hit on the mesh nearer than ``t_max``; None if it has no hierarchy."""
    if mesh.bvh is None:
        return None
    slab = mesh.bbox.intersect(ray)
    if slab is None or slab[1] < HIT_EPSILON or slab[0] > t_max:
        return None
    return mesh.bvh.intersect(ray, t_max)
"""Debug overlays: bounding-box and triangle wireframes projected to the screen."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .camera import Camera, project_point_to_screen
from .geometry import SphereBVH
from .mesh import Mesh
from .vector import AABB

Color = Tuple[int, int, int]
Point = Tuple[int, int]
Line = Tuple[Point, Point]

MESH_BOX_COLOR: Color = (255, 0, 0)
SPHERE_BOX_COLOR: Color = (0, 255, 0)
TRIANGLE_COLOR: Color = (0, 255, 0)

MESH_PALETTE: Tuple[Color, ...] = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (255, 0, 255),
    (0, 255, 255),
    (255, 128, 0),
    (128, 0, 255),
    (0, 128, 255),
    (255, 0, 128),
)

SPHERE_PALETTE: Tuple[Color, ...] = (
    (255, 128, 128),
    (128, 255, 128),
    (128, 128, 255),
    (255, 255, 128),
    (255, 128, 255),
    (128, 255, 255),
    (192, 192, 192),
    (128, 64, 0),
    (64, 0, 128),
    (0, 64, 128),
)

# Corner indices as given by AABB.corners: bottom face, top face, then the uprights.
BOX_EDGES = (
    (0, 1), (0, 2), (1, 3), (2, 3),
    (4, 5), (4, 6), (5, 7), (6, 7),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def _visible(point: Point) -> bool:
    return point[0] >= 0 and point[1] >= 0


def box_lines(bbox: AABB, camera: Camera, width: int, height: int) -> List[Line]:
    """Screen segments of the box's edges whose two ends both project on screen."""
    screen = [project_point_to_screen(c, camera, width, height) for c in bbox.corners()]
    return [
        (screen[a], screen[b])
        for a, b in BOX_EDGES
        if _visible(screen[a]) and _visible(screen[b])
    ]


def bvh_boxes(node, max_depth: int, palette: Sequence[Color]) -> List[Tuple[AABB, Color]]:
    """Boxes of the hierarchy down to ``max_depth``, parent before children.

    Each box is coloured by its depth, cycling through ``palette``.
    """
    boxes: List[Tuple[AABB, Color]] = []

    def visit(current, depth: int) -> None:
        if current is None or depth > max_depth:
            return
        boxes.append((current.bbox, palette[depth % len(palette)]))
        visit(current.left, depth + 1)
        visit(current.right, depth + 1)

    visit(node, 0)
    return boxes


def bounding_box_lines(
    meshes: Iterable[Mesh],
    sphere_bvh: Optional[SphereBVH],
    camera: Camera,
    width: int,
    height: int,
    bvh_depth: int,
) -> List[Tuple[Color, Line]]:
    """Coloured segments outlining every mesh and sphere hierarchy box."""
    boxes: List[Tuple[AABB, Color]] = []
    for mesh in meshes:
        if mesh.bvh is None:
            continue
        boxes.append((mesh.bbox, MESH_BOX_COLOR))
        if bvh_depth > 0:
            boxes.extend(bvh_boxes(mesh.bvh, bvh_depth, MESH_PALETTE))

    if sphere_bvh is not None:
        boxes.append((sphere_bvh.bbox, SPHERE_BOX_COLOR))
        if bvh_depth > 0:
            boxes.extend(bvh_boxes(sphere_bvh, bvh_depth, SPHERE_PALETTE))

    return [
        (color, line)
        for bbox, color in boxes
        for line in box_lines(bbox, camera, width, height)
    ]


def triangle_lines(meshes: Iterable[Mesh], camera: Camera, width: int, height: int) -> List[Line]:
    """Wireframe segments of every mesh triangle lying fully on screen."""
    lines: List[Line] = []
    for mesh in meshes:
        for tri in mesh.world_triangles():
            p0, p1, p2 = (
                project_point_to_screen(v, camera, width, height)
                for v in (tri.v0, tri.v1, tri.v2)
            )
            if _visible(p0) and _visible(p1) and _visible(p2):
                lines.extend(((p0, p1), (p1, p2), (p2, p0)))
    return lines
from pathtracer.camera import Camera
from pathtracer.geometry import BVHNode, Sphere, SphereBVH, Triangle
from pathtracer.mesh import Mesh
from pathtracer.overlay import (
    MESH_BOX_COLOR,
    MESH_PALETTE,
    SPHERE_BOX_COLOR,
    SPHERE_PALETTE,
    TRIANGLE_COLOR,
    bounding_box_lines,
    box_lines,
    bvh_boxes,
    triangle_lines,
)
from pathtracer.render import default_spheres
from pathtracer.vector import AABB, Vec3

WIDTH, HEIGHT = 200, 100


def _triangles(count):
    color = Vec3(1, 1, 1)
    return [
        Triangle(Vec3(i, 0, -5), Vec3(i + 0.5, 0, -5), Vec3(i, 0.5, -5), color)
        for i in range(count)
    ]


def test_box_in_front_gives_twelve_edges():
    camera = Camera(Vec3(0, 0, 0))
    box = AABB(Vec3(-1, -1, -6), Vec3(1, 1, -4))
    lines = box_lines(box, camera, WIDTH, HEIGHT)
    assert len(lines) == 12
    assert all(x >= 0 and y >= 0 for line in lines for x, y in line)


def test_box_behind_camera_gives_no_edges():
    camera = Camera(Vec3(0, 0, 0))
    box = AABB(Vec3(-1, -1, 4), Vec3(1, 1, 6))
    assert box_lines(box, camera, WIDTH, HEIGHT) == []


def test_bvh_boxes_respect_depth_and_palette():
    node = BVHNode(_triangles(8))
    root_only = bvh_boxes(node, 0, MESH_PALETTE)
    assert root_only == [(node.bbox, MESH_PALETTE[0])]

    two_levels = bvh_boxes(node, 1, MESH_PALETTE)
    assert [color for _, color in two_levels] == [MESH_PALETTE[0], MESH_PALETTE[1], MESH_PALETTE[1]]
    assert [box for box, _ in two_levels] == [node.bbox, node.left.bbox, node.right.bbox]


def test_sphere_boxes_only_outline_at_depth_zero():
    camera = Camera(Vec3(0, 2, 20))
    spheres = SphereBVH(default_spheres())
    lines = bounding_box_lines([], spheres, camera, WIDTH, HEIGHT, 0)
    assert len(lines) == 12
    assert all(color == SPHERE_BOX_COLOR for color, _ in lines)


def test_sphere_hierarchy_adds_node_boxes():
    camera = Camera(Vec3(0, 2, 20))
    spheres = SphereBVH(default_spheres())
    lines = bounding_box_lines([], spheres, camera, WIDTH, HEIGHT, 1)
    nodes = bvh_boxes(spheres, 1, SPHERE_PALETTE)
    assert len(lines) == 12 * (1 + len(nodes))


def test_meshes_without_hierarchy_are_skipped():
    camera = Camera(Vec3(0, 0, 0))
    mesh = Mesh(triangles=_triangles(2))
    assert bounding_box_lines([mesh], None, camera, WIDTH, HEIGHT, 2) == []
    mesh.build_bvh()
    lines = bounding_box_lines([mesh], None, camera, WIDTH, HEIGHT, 0)
    assert lines and all(color == MESH_BOX_COLOR for color, _ in lines)


def test_triangle_lines_use_mesh_placement():
    camera = Camera(Vec3(0, 0, 0))
    tri = Triangle(Vec3(0, 0, 0), Vec3(0.5, 0, 0), Vec3(0, 0.5, 0), Vec3(1, 1, 1))
    unplaced = Mesh(triangles=[tri])
    assert triangle_lines([unplaced], camera, WIDTH, HEIGHT) == []

    placed = Mesh(triangles=[tri], position=Vec3(0, 0, -5))
    lines = triangle_lines([placed], camera, WIDTH, HEIGHT)
    assert len(lines) == 3
    assert lines[0][1] == lines[1][0] and lines[1][1] == lines[2][0] and lines[2][1] == lines[0][0]
    assert TRIANGLE_COLOR == (0, 255, 0)
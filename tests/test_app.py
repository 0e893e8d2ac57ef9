import pytest

from pathtracer.app import MESH_OFFSET, build_scene
from pathtracer.vector import Ray, Vec3

OBJ_TEXT = """# one triangle
v 0 0 0
v 1 0 0
v 0 1 0
f 1 2 3
"""


def test_scene_without_model_has_only_spheres():
    scene = build_scene(None)
    assert scene.meshes == []
    assert len(list(_leaf_spheres(scene.spheres))) == 5


def _leaf_spheres(node):
    if node is None:
        return
    yield from node.spheres
    yield from _leaf_spheres(node.left)
    yield from _leaf_spheres(node.right)


def test_scene_with_model_places_mesh(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text(OBJ_TEXT)
    scene = build_scene(str(path))
    assert len(scene.meshes) == 1
    mesh = scene.meshes[0]
    assert mesh.position == MESH_OFFSET
    assert mesh.scale == 1.0
    assert mesh.bvh is not None
    assert mesh.bbox.minimum == MESH_OFFSET
    assert mesh.bbox.maximum == Vec3(1, 1, 0) + MESH_OFFSET


def test_missing_model_is_ignored(tmp_path):
    scene = build_scene(str(tmp_path / "missing.obj"))
    assert scene.meshes == []


def test_scene_hits_mirror_ball_from_above():
    scene = build_scene(None)
    hit = scene.closest_hit(Ray(Vec3(0, 5, 0), Vec3(0, -1, 0)))
    assert hit.t == pytest.approx(3.0)
    assert hit.reflective is True
"""Scene primitives, their ray intersections and bounding volume hierarchies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import reduce
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .vector import AABB, Hit, Ray, Vec3

EPSILON = 1e-7
HIT_EPSILON = 0.001
MAX_PRIMITIVES_PER_LEAF = 4
MAX_TREE_DEPTH = 20
GROUND_COLOR = Vec3(0.7, 0.7, 0.7)
GROUND_NORMAL = Vec3(0.0, 1.0, 0.0)

T = TypeVar("T")


@dataclass(frozen=True)
class Triangle:
    """A coloured triangle; its normal and bounding box follow from the vertices."""

    v0: Vec3
    v1: Vec3
    v2: Vec3
    color: Vec3
    reflective: bool = False
    normal: Vec3 = field(init=False, compare=False)
    bbox: AABB = field(init=False, compare=False)

    def __post_init__(self) -> None:
        normal = (self.v1 - self.v0).cross(self.v2 - self.v0).normalize()
        vertices = (self.v0, self.v1, self.v2)
        bbox = AABB(
            Vec3(*(min(v[axis] for v in vertices) for axis in range(3))),
            Vec3(*(max(v[axis] for v in vertices) for axis in range(3))),
        )
        object.__setattr__(self, "normal", normal)
        object.__setattr__(self, "bbox", bbox)

    def transformed(self, scale: float, offset: Vec3) -> Triangle:
        """The triangle with every vertex scaled and then moved by ``offset``."""
        return Triangle(
            self.v0 * scale + offset,
            self.v1 * scale + offset,
            self.v2 * scale + offset,
            self.color,
            self.reflective,
        )


@dataclass(frozen=True)
class Sphere:
    center: Vec3
    radius: float
    color: Vec3
    reflective: bool = False

    @property
    def bbox(self) -> AABB:
        r = Vec3.splat(self.radius)
        return AABB(self.center - r, self.center + r)


def intersect_sphere(ray: Ray, sphere: Sphere) -> Optional[Hit]:
    """Nearest hit in front of the ray; the direction must be a unit vector."""
    oc = ray.origin - sphere.center
    b = oc.dot(ray.direction)
    c = oc.dot(oc) - sphere.radius * sphere.radius
    h = b * b - c
    if h < 0:
        return None
    h = math.sqrt(h)
    t = -b - h
    if t < HIT_EPSILON:
        t = -b + h
    if t < HIT_EPSILON:
        return None
    point = ray.origin + ray.direction * t
    return Hit(
        t=t,
        normal=(point - sphere.center).normalize(),
        color=sphere.color,
        reflective=sphere.reflective,
    )


def intersect_triangle(ray: Ray, triangle: Triangle) -> Optional[Hit]:
    """Möller–Trumbore ray/triangle test."""
    edge1 = triangle.v1 - triangle.v0
    edge2 = triangle.v2 - triangle.v0
    h = ray.direction.cross(edge2)
    a = edge1.dot(h)
    if -EPSILON < a < EPSILON:
        return None  # parallel to the triangle's plane

    f = 1.0 / a
    s = ray.origin - triangle.v0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return None

    q = s.cross(edge1)
    v = f * ray.direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * edge2.dot(q)
    if t <= EPSILON:
        return None
    return Hit(t=t, normal=triangle.normal, color=triangle.color, reflective=triangle.reflective)


def intersect_ground(ray: Ray) -> Optional[Hit]:
    """Hit on the grey plane y = 0, seen only from above."""
    if ray.direction.y >= -HIT_EPSILON:
        return None
    t = -ray.origin.y / ray.direction.y
    if t < HIT_EPSILON:
        return None
    return Hit(t=t, normal=GROUND_NORMAL, color=GROUND_COLOR, reflective=False)


def _split(
    items: List[T], depth: int, key: Callable[[T, int], float]
) -> Optional[Tuple[List[T], List[T]]]:
    """Halves of ``items`` sorted along the depth's axis, or None for a leaf."""
    if len(items) <= MAX_PRIMITIVES_PER_LEAF or depth >= MAX_TREE_DEPTH:
        return None
    axis = depth % 3
    ordered = sorted(items, key=lambda item: key(item, axis))
    mid = len(ordered) // 2
    return ordered[:mid], ordered[mid:]


def _intersect_tree(node, items: Sequence[T], ray: Ray, t_max: float, hit_item) -> Optional[Hit]:
    slab = node.bbox.intersect(ray)
    if slab is None or slab[1] < HIT_EPSILON or slab[0] > t_max:
        return None

    best: Optional[Hit] = None
    if node.is_leaf():
        for item in items:
            hit = hit_item(ray, item)
            if hit is not None and hit.t < t_max:
                best, t_max = hit, hit.t
        return best

    for child in (node.left, node.right):
        if child is not None:
            hit = child.intersect(ray, t_max)
            if hit is not None:
                best, t_max = hit, hit.t
    return best


def _triangle_center(triangle: Triangle, axis: int) -> float:
    return (triangle.bbox.minimum[axis] + triangle.bbox.maximum[axis]) * 0.5


class BVHNode:
    """Bounding volume hierarchy over triangles, split at the median centroid."""

    def __init__(self, triangles: Iterable[Triangle], depth: int = 0) -> None:
        items = list(triangles)
        self.bbox: AABB = reduce(AABB.combine, (t.bbox for t in items), AABB.empty())
        self.left: Optional[BVHNode] = None
        self.right: Optional[BVHNode] = None
        self.triangles: List[Triangle] = []

        halves = _split(items, depth, _triangle_center)
        if halves is None:
            self.triangles = items
        else:
            self.left = BVHNode(halves[0], depth + 1)
            self.right = BVHNode(halves[1], depth + 1)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def intersect(self, ray: Ray, t_max: float = math.inf) -> Optional[Hit]:
        """Closest triangle hit nearer than ``t_max``, or None."""
        return _intersect_tree(self, self.triangles, ray, t_max, intersect_triangle)


class SphereBVH:
    """Bounding volume hierarchy over spheres, split at the median centre."""

    def __init__(self, spheres: Iterable[Sphere], depth: int = 0) -> None:
        items = list(spheres)
        self.bbox: AABB = reduce(AABB.combine, (s.bbox for s in items), AABB.empty())
        self.left: Optional[SphereBVH] = None
        self.right: Optional[SphereBVH] = None
        self.spheres: List[Sphere] = []

        halves = _split(items, depth, lambda sphere, axis: sphere.center[axis])
        if halves is None:
            self.spheres = items
        else:
            self.left = SphereBVH(halves[0], depth + 1)
            self.right = SphereBVH(halves[1], depth + 1)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def intersect(self, ray: Ray, t_max: float = math.inf) -> Optional[Hit]:
        """Closest sphere hit nearer than ``t_max``, or None."""
        return _intersect_tree(self, self.spheres, ray, t_max, intersect_sphere)
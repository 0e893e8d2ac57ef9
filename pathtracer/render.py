"""Monte Carlo path tracing of the scene into an accumulating pixel buffer."""

from __future__ import annotations

import math
import os
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from .camera import Camera
from .geometry import Sphere, SphereBVH, intersect_ground
from .mesh import Mesh, intersect_mesh
from .vector import Hit, Ray, Vec3

MAX_DEPTH = 5
FAR = 1e9
BOUNCE_OFFSET = 0.001
SKY_COLOR = Vec3(0.2, 0.3, 0.6)
GAMMA = 2.2


def default_spheres() -> List[Sphere]:
    """The built-in scene: one mirror ball and four coloured diffuse balls."""
    return [
        Sphere(Vec3(0, 1.0, 0), 1.0, Vec3(1, 1.0, 1.0), True),
        Sphere(Vec3(-2, 1, -2), 1.0, Vec3(1, 0.2, 0.2), False),
        Sphere(Vec3(-3, 1, -6), 1.0, Vec3(0.2, 1, 0.2), False),
        Sphere(Vec3(4, 1, -4), 1.0, Vec3(0.2, 0.2, 1), False),
        Sphere(Vec3(3, 1, -6), 0.5, Vec3(1, 1, 0.2), False),
    ]


@dataclass
class Scene:
    """Spheres in a hierarchy, any number of meshes, and the ground plane."""

    spheres: SphereBVH = field(default_factory=lambda: SphereBVH([]))
    meshes: List[Mesh] = field(default_factory=list)

    def closest_hit(self, ray: Ray) -> Optional[Hit]:
        """Nearest hit among spheres, meshes and ground, or None for the sky."""
        best = self.spheres.intersect(ray, FAR)
        t_max = best.t if best is not None else FAR
        for mesh in self.meshes:
            hit = intersect_mesh(ray, mesh, t_max)
            if hit is not None and hit.t < t_max:
                best, t_max = hit, hit.t
        ground = intersect_ground(ray)
        if ground is not None and ground.t < t_max:
            best = ground
        return best


def _cosine_direction(normal: Vec3, rng: random.Random) -> Vec3:
    """A random direction over the hemisphere of ``normal``, cosine weighted."""
    r1 = rng.random()
    r2 = rng.random()
    phi = 2 * math.pi * r1
    r = math.sqrt(r2)
    x, y, z = r * math.cos(phi), r * math.sin(phi), math.sqrt(1 - r2)
    helper = Vec3(0, 1, 0) if abs(normal.x) > 0.1 else Vec3(1, 0, 0)
    u = normal.cross(helper).normalize()
    v = normal.cross(u)
    return (u * x + v * y + normal * z).normalize()


def trace(ray: Ray, scene: Scene, rng: random.Random, depth: int = 0) -> Vec3:
    """Radiance arriving along ``ray``, following up to MAX_DEPTH bounces."""
    if depth >= MAX_DEPTH:
        return Vec3()

    hit = scene.closest_hit(ray)
    if hit is None:
        return SKY_COLOR

    point = ray.origin + ray.direction * hit.t
    if hit.reflective:
        reflected = ray.direction - hit.normal * 2.0 * ray.direction.dot(hit.normal)
        bounce = Ray(point + reflected * BOUNCE_OFFSET, reflected.normalize())
        return trace(bounce, scene, rng, depth + 1) * hit.color

    direction = _cosine_direction(hit.normal, rng)
    bounce = Ray(point + direction * BOUNCE_OFFSET, direction)
    return hit.color * trace(bounce, scene, rng, depth + 1)


def _channel(value: float) -> int:
    return int(min(max(value, 0.0), 1.0) ** (1 / GAMMA) * 255)


def tone_map(color: Vec3) -> int:
    """Clamp, gamma-correct and pack a colour as 0xRRGGBB."""
    return (_channel(color.x) << 16) | (_channel(color.y) << 8) | _channel(color.z)


class Renderer:
    """Progressive renderer that averages one sample per pixel per frame."""

    def __init__(self, width: int, height: int, workers: Optional[int] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        self.workers = workers or os.cpu_count() or 1
        self.accum: List[Vec3] = []
        self.pixels: List[int] = [0] * (width * height)
        self.frame_count = 1
        self.reset()

    def reset(self) -> None:
        """Discard the accumulated samples and start again from frame one."""
        self.accum = [Vec3()] * (self.width * self.height)
        self.frame_count = 1

    def render_rows(
        self,
        camera: Camera,
        scene: Scene,
        start_y: int,
        end_y: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Add one sample to every pixel of rows ``start_y`` up to ``end_y``."""
        rng = rng or random.Random()
        width, height = self.width, self.height
        aspect = width / height
        scale = 1.0 / self.frame_count
        for y in range(start_y, end_y):
            for x in range(width):
                u = ((x + rng.random()) / width * 2 - 1) * aspect
                v = (y + rng.random()) / height * 2 - 1
                color = trace(camera.get_ray(u, -v), scene, rng)
                index = y * width + x
                total = self.accum[index] + color
                self.accum[index] = total
                self.pixels[index] = tone_map(total * scale)

    def render_frame(self, camera: Camera, scene: Scene) -> List[int]:
        """Render one frame in row blocks, advance the frame count and return the pixels."""
        blocks = self.workers
        block_size = self.height // blocks
        seed = time.monotonic_ns() // 1_000_000
        ranges = []
        for i in range(blocks):
            start = i * block_size
            end = self.height if i == blocks - 1 else start + block_size
            ranges.append((start, end))

        with ThreadPoolExecutor(max_workers=blocks) as pool:
            futures = [
                pool.submit(
                    self.render_rows, camera, scene, start, end, random.Random(seed + start)
                )
                for start, end in ranges
            ]
            for future in futures:
                future.result()

        self.frame_count += 1
        return self.pixels
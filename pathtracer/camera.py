"""A yaw/pitch camera and perspective projection onto the screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

from .vector import Ray, Vec3

MIN_PITCH = -89.0
MAX_PITCH = 89.0
NEAR_PLANE = 0.1
WORLD_UP = Vec3(0.0, 1.0, 0.0)
OFF_SCREEN = (-1, -1)


@dataclass
class Camera:
    """Position plus yaw and pitch in degrees; the basis vectors follow from them."""

    position: Vec3 = field(default_factory=Vec3)
    yaw: float = -90.0
    pitch: float = 0.0
    forward: Vec3 = field(init=False)
    right: Vec3 = field(init=False)
    up: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        self.update_vectors()

    def update_vectors(self) -> None:
        """Recompute forward, right and up from yaw and pitch."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.forward = Vec3(
            math.cos(pitch) * math.cos(yaw),
            math.sin(pitch),
            math.cos(pitch) * math.sin(yaw),
        ).normalize()
        self.right = WORLD_UP.cross(self.forward).normalize()
        self.up = self.forward.cross(self.right)

    def move(self, offset: Vec3) -> None:
        self.position = self.position + offset

    def rotate(self, delta_yaw: float, delta_pitch: float) -> None:
        """Turn the camera; pitch is held within ±89 degrees."""
        self.yaw += delta_yaw
        self.pitch = min(max(self.pitch + delta_pitch, MIN_PITCH), MAX_PITCH)
        self.update_vectors()

    def get_ray(self, px: float, py: float) -> Ray:
        """Ray through the image-plane point (px, py) one unit in front."""
        direction = self.forward + self.right * px + self.up * py
        return Ray(self.position, direction.normalize())


def project_point_to_screen(point: Vec3, camera: Camera, width: int, height: int) -> Tuple[int, int]:
    """Pixel coordinates of ``point``, or (-1, -1) when it is too close or behind."""
    relative = point - camera.position
    depth = relative.dot(camera.forward)
    if depth <= NEAR_PLANE:
        return OFF_SCREEN

    screen_x = relative.dot(camera.right) / depth
    screen_y = relative.dot(camera.up) / depth

    x = int((screen_x + 1.0) * 0.5 * width)
    y = int((1.0 - (screen_y + 1.0) * 0.5) * height)
    return x, y
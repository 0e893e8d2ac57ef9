"""Keyboard and mouse control of the camera."""

from __future__ import annotations

from typing import Collection

from .camera import Camera
from .vector import Vec3

MOVE_SPEED = 0.1
MOUSE_SENSITIVITY = 0.1

FORWARD = "w"
BACKWARD = "s"
LEFT = "a"
RIGHT = "d"
UP = "space"
DOWN = "lctrl"

_WORLD_UP = Vec3(0.0, 1.0, 0.0)


def move_direction(camera: Camera, pressed: Collection[str]) -> Vec3:
    """Sum of the directions asked for by the pressed keys, not normalised."""
    direction = Vec3()
    if FORWARD in pressed:
        direction = direction + camera.forward
    if BACKWARD in pressed:
        direction = direction - camera.forward
    if LEFT in pressed:
        direction = direction - camera.right
    if RIGHT in pressed:
        direction = direction + camera.right
    if UP in pressed:
        direction = direction + _WORLD_UP
    if DOWN in pressed:
        direction = direction - _WORLD_UP
    return direction


def move_camera(camera: Camera, pressed: Collection[str]) -> bool:
    """Step the camera at MOVE_SPEED along the pressed keys' direction.

    Returns True if the camera moved.
    """
    direction = move_direction(camera, pressed)
    if direction.length() > 0:
        camera.move(direction.normalize() * MOVE_SPEED)
        return True
    return False


def rotate_camera(camera: Camera, xrel: float, yrel: float) -> None:
    """Turn the camera by a relative mouse motion in pixels."""
    camera.rotate(-xrel * MOUSE_SENSITIVITY, -(yrel * MOUSE_SENSITIVITY))
import pytest

from pathtracer.camera import Camera
from pathtracer.controller import (
    BACKWARD,
    DOWN,
    FORWARD,
    LEFT,
    MOUSE_SENSITIVITY,
    MOVE_SPEED,
    RIGHT,
    UP,
    move_camera,
    move_direction,
    rotate_camera,
)
from pathtracer.vector import Vec3


def test_forward_direction_is_camera_forward():
    camera = Camera(Vec3(0, 2, 0))
    assert move_direction(camera, {FORWARD}) == camera.forward


def test_opposite_keys_cancel():
    camera = Camera(Vec3(0, 2, 0))
    direction = move_direction(camera, {FORWARD, BACKWARD, LEFT, RIGHT, UP, DOWN})
    assert direction.length() == pytest.approx(0.0)


def test_no_keys_does_not_move():
    camera = Camera(Vec3(0, 2, 0))
    assert move_camera(camera, set()) is False
    assert camera.position == Vec3(0, 2, 0)


def test_up_moves_by_move_speed():
    camera = Camera(Vec3(0, 2, 0))
    assert move_camera(camera, {UP}) is True
    assert camera.position.y == pytest.approx(2 + MOVE_SPEED)
    assert camera.position.x == pytest.approx(0.0)


def test_diagonal_step_has_move_speed_length():
    camera = Camera(Vec3(1, 1, 1))
    move_camera(camera, {FORWARD, RIGHT, UP})
    step = camera.position - Vec3(1, 1, 1)
    assert step.length() == pytest.approx(MOVE_SPEED)


def test_rotate_follows_mouse_motion():
    camera = Camera(Vec3(0, 2, 0))
    rotate_camera(camera, 10, 5)
    assert camera.yaw == pytest.approx(-90.0 - 10 * MOUSE_SENSITIVITY)
    assert camera.pitch == pytest.approx(-5 * MOUSE_SENSITIVITY)


def test_rotate_clamps_pitch():
    camera = Camera(Vec3(0, 2, 0))
    rotate_camera(camera, 0, -10000)
    assert camera.pitch == pytest.approx(89.0)
"""Interactive window: progressive path tracing with a free-flying camera."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import pygame

from .camera import Camera
from .controller import BACKWARD, DOWN, FORWARD, LEFT, RIGHT, UP, move_camera, rotate_camera
from .geometry import SphereBVH
from .mesh import ObjError, load_obj
from .overlay import TRIANGLE_COLOR, bounding_box_lines, triangle_lines
from .render import Renderer, Scene, default_spheres
from .vector import Vec3

WINDOW_WIDTH = 1080
WINDOW_HEIGHT = 720
MESH_COLOR = Vec3(0.9, 0.9, 0.9)
MESH_OFFSET = Vec3(0, 1.0, -5.0)
CAMERA_START = Vec3(0, 2, 0)
MAX_BVH_DEPTH = 10

logger = logging.getLogger(__name__)


def build_scene(obj_path: Optional[str] = None) -> Scene:
    """The default spheres, plus the OBJ model at ``obj_path`` when it loads."""
    scene = Scene(spheres=SphereBVH(default_spheres()))
    if obj_path:
        try:
            mesh = load_obj(obj_path, MESH_COLOR, False)
        except ObjError as exc:
            logger.error("%s", exc)
        else:
            mesh.scale = 1.0
            mesh.translate(MESH_OFFSET)
            mesh.build_bvh()
            scene.meshes.append(mesh)
            print(f"Loaded OBJ with {len(mesh.triangles)} triangles")
    return scene


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pathtracer", description="Interactive path tracer.")
    parser.add_argument("obj", nargs="?", help="Wavefront OBJ model to place in the scene")
    parser.add_argument("--width", type=int, default=WINDOW_WIDTH)
    parser.add_argument("--height", type=int, default=WINDOW_HEIGHT)
    return parser.parse_args(argv)


def _pixels_to_bytes(pixels: List[int]) -> bytes:
    return bytes(
        channel
        for p in pixels
        for channel in ((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF)
    )


def _pressed_keys() -> set:
    state = pygame.key.get_pressed()
    keymap = {
        FORWARD: pygame.K_w,
        BACKWARD: pygame.K_s,
        LEFT: pygame.K_a,
        RIGHT: pygame.K_d,
        UP: pygame.K_SPACE,
        DOWN: pygame.K_LCTRL,
    }
    return {name for name, code in keymap.items() if state[code]}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the window and render until it is closed or Escape is pressed."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    width, height = args.width, args.height

    scene = build_scene(args.obj)
    camera = Camera(CAMERA_START)
    renderer = Renderer(width, height)

    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Path Tracer")

        mouse_grabbed = False
        show_bvh = False
        show_triangles = False
        bvh_depth = 2
        running = True

        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    key = event.key
                    if key == pygame.K_ESCAPE:
                        running = False
                    elif key == pygame.K_r:
                        renderer.reset()
                    elif key == pygame.K_b:
                        show_bvh = not show_bvh
                    elif key == pygame.K_t:
                        show_triangles = not show_triangles
                    elif key in (pygame.K_PLUS, pygame.K_EQUALS):
                        bvh_depth = min(MAX_BVH_DEPTH, bvh_depth + 1)
                        print(f"BVH Visualization Depth: {bvh_depth}")
                    elif key == pygame.K_MINUS:
                        bvh_depth = max(0, bvh_depth - 1)
                        print(f"BVH Visualization Depth: {bvh_depth}")
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    pygame.event.set_grab(True)
                    pygame.mouse.set_visible(False)
                    mouse_grabbed = True
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    pygame.event.set_grab(False)
                    pygame.mouse.set_visible(True)
                    mouse_grabbed = False
                elif event.type == pygame.MOUSEMOTION and mouse_grabbed:
                    rotate_camera(camera, event.rel[0], event.rel[1])
                    renderer.reset()

            if move_camera(camera, _pressed_keys()):
                renderer.reset()

            pixels = renderer.render_frame(camera, scene)
            image = pygame.image.frombuffer(_pixels_to_bytes(pixels), (width, height), "RGB")
            screen.blit(image, (0, 0))

            if show_bvh:
                for color, (start, end) in bounding_box_lines(
                    scene.meshes, scene.spheres, camera, width, height, bvh_depth
                ):
                    pygame.draw.line(screen, color, start, end)

            if show_triangles:
                for start, end in triangle_lines(scene.meshes, camera, width, height):
                    pygame.draw.line(screen, TRIANGLE_COLOR, start, end)

            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
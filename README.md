# pathtracer

An interactive, progressive path tracer. It renders a small scene of five
spheres (one mirror ball and four coloured diffuse balls) standing on a grey
ground plane under a blue sky. You can also add a triangle mesh loaded from a
Wavefront OBJ file. Each frame adds one sample per pixel to a running average,
so the image gets cleaner over time. The average starts over whenever the
camera moves or turns.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
pathtracer
pathtracer model.obj
pathtracer model.obj --width 640 --height 480
```

The window is 1080×720 unless you set `--width` and `--height`. The camera
starts at `(0, 2, 0)`.

Pass the path of an OBJ file to add it to the scene. The mesh is placed at
`(0, 1, -5)` at its original scale and drawn in light grey. Only `v` and `f`
lines are used. A face takes its first three vertex indices and ignores any
`/texture/normal` parts. Malformed lines are logged and skipped. If the file
cannot be opened or has no valid triangles, an error is logged and the scene
is shown without it.

## Controls

| Input                  | Action                                      |
|------------------------|---------------------------------------------|
| `W` / `S`              | move forward / backward                     |
| `A` / `D`              | strafe left / right                         |
| `Space` / `Left Ctrl`  | move up / down                              |
| hold left mouse + drag | look around (pitch stays within ±89°)       |
| `R`                    | restart sample accumulation                 |
| `B`                    | toggle the bounding-box (BVH) overlay       |
| `T`                    | toggle the triangle wireframe overlay       |
| `+` / `-`              | change how many BVH levels the overlay shows (0–10, starts at 2) |
| `Esc`                  | quit                                        |

## Using it as a library

Build a scene, render a frame and read back the pixels:

```python
from pathtracer.app import build_scene
from pathtracer.camera import Camera
from pathtracer.render import Renderer
from pathtracer.vector import Vec3

scene = build_scene(None)
camera = Camera(Vec3(0, 2, 0))
renderer = Renderer(160, 120)
pixels = renderer.render_frame(camera, scene)  # list of 0xRRGGBB ints, row by row
```

`Renderer.render_frame` splits the rows into blocks and renders them on a
thread pool. `Renderer.reset` throws away the accumulated samples.
`pathtracer.render.trace` follows a single ray through a `Scene` for up to five
bounces. `tone_map` clamps a colour, applies gamma 2.2 and packs it as
`0xRRGGBB`.

The modules:

- `pathtracer.vector`: `Vec3`, `Ray`, `Hit` and `AABB` (slab test, combine,
  corners).
- `pathtracer.geometry`: `Sphere` and `Triangle`, `intersect_sphere`,
  `intersect_triangle` and `intersect_ground`, and the two bounding-volume
  hierarchies `BVHNode` (triangles) and `SphereBVH` (spheres).
- `pathtracer.camera`: the yaw/pitch `Camera` and `project_point_to_screen`.
- `pathtracer.mesh`: `Mesh`, `load_obj` and `intersect_mesh`. `load_obj`
  raises `ObjError` if the file cannot be read or holds no valid triangles.
- `pathtracer.controller`: `move_camera` and `rotate_camera`, which turn
  pressed keys and mouse motion into camera movement.
- `pathtracer.overlay`: the screen-space line segments for the bounding-box
  and triangle wireframe overlays.
- `pathtracer.app`: `build_scene` and the `main` entry point behind the
  `pathtracer` command.

## Limitations

Rendering is done in pure Python, so even a small window takes a long time per
frame. Use `--width` and `--height` to keep it usable. There is no way to save
an image to a file, and only one OBJ mesh can be loaded. Materials are limited
to a diffuse colour or a perfect mirror.
"""Progressive path tracer with BVH-accelerated spheres and triangle meshes, OBJ loading and a pygame viewer."""

__version__ = "0.1.0"
__all__ = ["app", "camera", "controller", "geometry", "mesh", "overlay", "render", "vector"]
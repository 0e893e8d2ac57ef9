[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pathtracer"
version = "0.1.0"
description = "Interactive progressive path tracer with sphere and triangle-mesh BVHs and OBJ loading"
requires-python = ">=3.10"
keywords = ["path tracing", "ray tracing", "bvh", "rendering", "obj"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pathtracer = "pathtracer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pathtracer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

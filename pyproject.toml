[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "streamstart"
version = "0.1.0"
description = "Building blocks for a pre-stream countdown screen: typing animations, 4x4 transforms and OBJ mesh loading"
requires-python = ">=3.10"
dependencies = []
keywords = ["countdown", "animation", "obj", "wavefront", "matrix", "stream"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["streamstart"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

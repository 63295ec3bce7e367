[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gardenray"
version = "1.0.0"
description = "Grid-maze raycaster with texture-mapped, light-sourced walls, floors and ceilings, plus PCX and lighting-table tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "raycasting",
    "raycaster",
    "maze",
    "texture mapping",
    "lighting",
    "pcx",
    "palette",
    "software rendering",
]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gardenray-makelite = "gardenray.lighting:main"
gardenray-demo = "gardenray.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["gardenray"]

[tool.hatch.build.targets.sdist]
include = ["gardenray", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true

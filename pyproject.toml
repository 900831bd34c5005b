[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "detectkit"
version = "0.1.0"
description = "Object detection datasets, labels, image filters, accuracy metrics and training-sample generation"
requires-python = ">=3.10"
keywords = [
    "object detection",
    "computer vision",
    "bounding box",
    "intersection over union",
    "image filtering",
    "clahe",
    "dataset augmentation",
    "cascade classifier",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
    "pillow",
]

[project.scripts]
detectkit-generate = "detectkit.generate:main"

[tool.hatch.build.targets.wheel]
packages = ["detectkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true

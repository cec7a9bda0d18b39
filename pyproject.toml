[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mvskit"
version = "0.1.0"
description = "Calendar and time conversion, key-ordered record chains, and 3270 full-screen panel building for TSO-style terminals"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "3270",
    "tso",
    "mvs",
    "full-screen",
    "strftime",
    "calendar",
    "ordered-list",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Terminals",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mvskit"]

[tool.pytest.ini_options]
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

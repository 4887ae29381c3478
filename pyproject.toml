[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bibliotheque"
version = "0.1.0"
description = "Small library management on SQLite: books, members, loans, loan history and subscription accounting."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "books", "loans", "members", "sqlite", "catalogue", "csv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: French",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bibliotheque = "bibliotheque.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bibliotheque"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

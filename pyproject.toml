[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lnnodes"
version = "0.1.0"
description = "Small HTTP service that mirrors Lightning Network node rankings into SQLite and serves them as JSON"
requires-python = ">=3.10"
dependencies = []
keywords = ["lightning", "bitcoin", "nodes", "sqlite", "http", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lnnodes = "lnnodes.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lnnodes"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

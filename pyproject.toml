[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vulnreach"
version = "0.1.0"
description = "Reachability of known vulnerabilities through import and call graphs, with OSV advisory filtering"
requires-python = ">=3.10"
dependencies = []
keywords = ["vulnerability", "osv", "semver", "call-graph", "import-graph", "security"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vulnreach"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ofituner"
version = "0.1.0"
description = "Cost-model selection of collective algorithms and protocols for multi-node GPU communication, with region geometry and registration-key helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "collectives",
    "allreduce",
    "tuning",
    "hpc",
    "distributed",
    "cost-model",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ofituner"]

[tool.hatch.build.targets.sdist]
include = ["ofituner", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
files = ["ofituner"]

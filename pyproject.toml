[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fpconv"
version = "0.1.0"
description = "Correctly rounded parsing of decimal strings into IEEE-754 binary32/binary64 values, with conversion policies and benchmark drivers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ieee-754",
    "floating-point",
    "parsing",
    "decimal",
    "rounding",
    "from_chars",
    "benchmark",
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
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fpconv-bench-to-chars = "fpconv.benchmark:main_to_chars_fixed_precision"
fpconv-bench-from-chars = "fpconv.benchmark:main_from_chars_unlimited_precision"

[tool.hatch.build.targets.wheel]
packages = ["fpconv"]

[tool.hatch.build.targets.sdist]
include = ["fpconv", "tests", "pyproject.toml", "README.md"]

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
warn_unused_ignores = true
warn_redundant_casts = true

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "numutil"
version = "0.1.0"
description = "Numeric utilities: fixed-point arithmetic, congruence rings, linear systems, special-function coefficients and sequence concatenation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fixed-point",
    "modular arithmetic",
    "linear algebra",
    "determinant",
    "bernoulli numbers",
    "stirling numbers",
    "gamma function",
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
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["numutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dcauction"
version = "0.1.0"
description = "Price and supply computations for product-mix auctions with positive and negative bids"
requires-python = ">=3.10"
keywords = ["auction", "product-mix", "linear programming", "min-cost flow", "optimization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dcauction = "dcauction.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dcauction"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

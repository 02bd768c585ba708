[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "streamkzg"
version = "0.5.0"
description = "Space- and time-efficient KZG polynomial commitments over BLS12-381 in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["cryptography", "commitments", "kzg", "pairing", "polynomial", "bls12-381"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["streamkzg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "correctfec"
version = "0.1.0"
description = "Forward error correction: convolutional codes with Viterbi decoding and GF(2^8) arithmetic"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fec",
    "forward error correction",
    "convolutional code",
    "viterbi",
    "galois field",
    "soft decision",
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
    "Topic :: Communications",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["correctfec"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true

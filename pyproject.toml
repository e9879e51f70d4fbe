[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bb84link"
version = "0.1.0"
description = "BB84 key sifting, block-parity correction and QBER measurement between two hosts over TCP"
requires-python = ">=3.10"
keywords = ["bb84", "qkd", "quantum key distribution", "qber", "sifting", "parity"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bb84-alice = "bb84link.alice:main"
bb84-bob = "bb84link.bob:main"

[tool.hatch.build.targets.wheel]
packages = ["bb84link"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "eqminer"
version = "0.1.0"
description = "Pure-Python Equihash solver and verifier with BLAKE2b, SHA-256, RIPEMD-160 and 256-bit arithmetic helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "equihash",
    "proof-of-work",
    "blake2b",
    "sha256",
    "ripemd160",
    "uint256",
    "compact-target",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["eqminer*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

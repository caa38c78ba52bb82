[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sealkit"
version = "0.1.0"
description = "Cluster image utilities: cluster and image types, CIDR and IP list helpers, layer archiving, layer mounting and a small command-line tool"
requires-python = ">=3.10"
keywords = ["kubernetes", "cluster", "image", "layers", "tar", "overlay", "cidr"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
seautil = "sealkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sealkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

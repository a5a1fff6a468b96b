[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubeutil"
version = "0.1.0"
description = "Small utilities for IP addresses and sets, ebtables, nsenter, tracing, paths and temporary directories"
requires-python = ">=3.10"
dependencies = []
keywords = ["ip", "cidr", "ipset", "ebtables", "nsenter", "trace", "utilities"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kubeutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

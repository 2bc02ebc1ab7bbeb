[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyproto"
version = "0.1.0"
description = "Building blocks for small framed serial protocols: FCS-16, FCS-32 and checksum helpers, error codes, an intrusive list, event groups, mutexes and a replaceable timing layer."
requires-python = ">=3.10"
dependencies = []
keywords = ["hdlc", "crc", "fcs", "checksum", "serial", "protocol", "framing"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tinyproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

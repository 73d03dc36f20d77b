[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rrcp"
version = "0.1.0"
description = "Asyncio client for the RRCP robot control protocol: framed MessagePack requests over pooled bidirectional streams"
requires-python = ">=3.10"
keywords = ["robotics", "protocol", "msgpack", "asyncio", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Communications",
]
dependencies = [
    "msgpack",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["rrcp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "g42net"
version = "0.1.0"
description = "Building blocks for a mesh IPv6 overlay node: TUN devices, UDP transport, frame helpers, traffic counters and checked integers"
requires-python = ">=3.10"
dependencies = []
keywords = ["tun", "tap", "utun", "ipv6", "udp", "mesh", "networking", "overflow"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["g42net"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

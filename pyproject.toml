[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "udpwindow"
version = "0.1.0"
description = "Sliding-window file transfer over UDP with simulated packet loss"
requires-python = ">=3.10"
dependencies = []
keywords = ["udp", "file transfer", "sliding window", "arq", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
udpwindow-client = "udpwindow.client:main"
udpwindow-server = "udpwindow.server:main"

[tool.hatch.build.targets.wheel]
packages = ["udpwindow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

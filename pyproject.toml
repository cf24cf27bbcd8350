[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "waysensor"
version = "0.1.0"
description = "Waybar output formatting, RON configuration and Linux hardware discovery for status-bar sensors"
requires-python = ">=3.10"
dependencies = []
keywords = ["waybar", "sensors", "monitoring", "hardware", "wayland", "status-bar", "ron"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
waysensor-discover = "waysensor.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["waysensor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

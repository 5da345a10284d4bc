[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "healthprobe"
version = "0.1.0"
description = "Building blocks for health probes: text checks, host metric parsing, HTTP trace timing and client data specifications"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["monitoring", "health-check", "probe", "host", "metrics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["healthprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

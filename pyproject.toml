[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tcgins"
version = "0.1.0"
description = "GNSS/INS building blocks: F2B0 message records, rotation helpers, IMU motion detection and BDS single point positioning"
requires-python = ">=3.10"
keywords = ["gnss", "ins", "imu", "beidou", "bds", "navigation", "rotation", "positioning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tcgins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

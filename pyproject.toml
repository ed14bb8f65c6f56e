[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "avialog"
version = "0.1.0"
description = "HTTP API for a pilot's logbook: flights, aircraft, contacts and user profiles"
requires-python = ">=3.10"
keywords = ["aviation", "logbook", "pilot", "flights", "rest-api", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["avialog"]

[tool.hatch.build.targets.sdist]
include = ["avialog", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

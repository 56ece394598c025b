[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "domkit"
version = "0.1.0"
description = "A small DOM-style event model: events, event targets, abort signals, nodes and a window"
requires-python = ">=3.10"
dependencies = []
keywords = ["dom", "events", "event-target", "abort-signal", "custom-event"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["domkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

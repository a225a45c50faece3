[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bomgraph"
version = "0.1.0"
description = "Bill-of-materials data model, in-memory repository and graph engine with cycle detection and traversal"
requires-python = ">=3.10"
dependencies = []
keywords = ["bom", "bill of materials", "manufacturing", "erp", "plm", "graph"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bomgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

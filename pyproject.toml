[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dbmeta"
version = "0.1.0"
description = "Database metadata discovery: product detection, dialects and information-schema queries"
requires-python = ">=3.10"
keywords = ["database", "metadata", "information-schema", "sql", "dialect", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dbmeta"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

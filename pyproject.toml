[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agentnose"
version = "0.1.0"
description = "Hook management, JSONL event capture and activity statistics for coding agents"
requires-python = ">=3.10"
dependencies = []
keywords = ["agents", "observability", "hooks", "jsonl", "monitoring"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
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
test = ["pytest"]

[project.scripts]
nose = "agentnose.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["agentnose"]

[tool.pytest.ini_options]
addopts = "-ra"

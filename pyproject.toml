[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "projectdb"
version = "0.1.0"
description = "Records for project database data, and the rules for project storage quota and expiry alerts"
requires-python = ">=3.10"
keywords = ["graphql", "project database", "storage quota", "alerts", "bookings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["projectdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "studentsapi"
version = "0.1.0"
description = "A small HTTP API for managing student records stored in SQLite"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["students", "rest", "api", "sqlite", "flask", "crud", "swagger"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
studentsapi = "studentsapi.api:main"

[tool.hatch.build.targets.wheel]
packages = ["studentsapi"]

[tool.pytest.ini_options]
addopts = "-ra"

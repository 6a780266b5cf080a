[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "biblioteca"
version = "0.1.0"
description = "A small JSON web API for managing a library's users, books, loans and returns"
requires-python = ">=3.10"
keywords = ["library", "books", "loans", "rest", "api", "flask", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: Flask",
    "Intended Audience :: Education",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
    "bcrypt",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
biblioteca = "biblioteca.app:main"

[tool.hatch.build.targets.wheel]
packages = ["biblioteca"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

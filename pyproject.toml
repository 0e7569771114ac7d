[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsontree"
version = "0.1.0"
description = "A JSON value tree with a comment-preserving reader and compact and styled writers"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "serialization", "comments", "pretty-print"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jsontree-testrunner = "jsontree.testrunner:main"

[tool.hatch.build.targets.wheel]
packages = ["jsontree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdbook"
version = "0.5.0a1"
description = "Book tree, book.toml configuration model and text and filesystem helpers for building books from Markdown files"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["book", "markdown", "documentation", "toml", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mdbook"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

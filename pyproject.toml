[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ccmenu"
version = "0.1.0"
description = "Text-terminal menu model, unit-specification parser and terminal vocabulary"
requires-python = ">=3.10"
dependencies = []
keywords = ["menu", "terminal", "curses", "units", "tui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ccmenu-demo = "ccmenu.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["ccmenu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

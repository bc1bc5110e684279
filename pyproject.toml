[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "staffdesk"
version = "0.1.0"
description = "Terminal employee records manager: enter, import, export, sort, search and browse staff profiles."
requires-python = ">=3.10"
keywords = ["employees", "staff", "records", "terminal", "tui", "sorting", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
staffdesk = "staffdesk.app:main"

[tool.hatch.build.targets.wheel]
packages = ["staffdesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jogo"
version = "0.1.0"
description = "A small terminal maze game with patrolling enemies, blinking traps and fleeting portals"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "terminal", "curses", "maze", "arcade"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jogo = "jogo.main:main"

[tool.hatch.build.targets.wheel]
packages = ["jogo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spbuild"
version = "0.1.0"
description = "Generate Ninja or Makefile build files for C programs from a small build description"
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "ninja", "makefile", "build-system", "generator", "c"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spbuild = "spbuild.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["spbuild"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

"""Generate Ninja or Makefile build files for C programs from a small build description."""

__version__ = "0.1.0"
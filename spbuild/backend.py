"""Output backends of the build generator."""

from __future__ import annotations

from enum import Enum


class BuildError(Exception):
    """Raised when the build description cannot be turned into a build file."""


class BackendType(Enum):
    NINJA = "Ninja"
    MAKEFILE = "Makefile"


def parse_backend_type(name: str) -> BackendType:
    """Map a backend name given on the command line to a backend."""
    try:
        return BackendType(name)
    except ValueError:
        raise BuildError(f"unexpected backend {name!r}") from None


def build_var(backend_type: BackendType, name: str) -> str:
    """Return the syntax that references variable ``name`` in the backend."""
    if backend_type is BackendType.NINJA:
        return f"${name}"
    if backend_type is BackendType.MAKEFILE:
        return f"$({name})"
    raise BuildError("unknown backend")


def output_filename(backend_type: BackendType) -> str:
    """Return the name of the file the backend writes."""
    if backend_type is BackendType.NINJA:
        return "build.ninja"
    if backend_type is BackendType.MAKEFILE:
        return "Makefile"
    raise BuildError(f"unexpected build system : {backend_type}")
"""Command-line entry point: read a build script and write a build file."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from spbuild.backend import BackendType, BuildError, parse_backend_type
from spbuild.build import gen_build
from spbuild.files import file_exists, read_file
from spbuild.lexer import LexError, lex
from spbuild.parser import parse

DEFAULT_SCRIPT = "build.sp"


def _parse_args(args: Sequence[str]) -> tuple[str, str]:
    backend = ""
    filename = DEFAULT_SCRIPT
    remaining = iter(args)
    for arg in remaining:
        if arg == "-G":
            backend = next(remaining, None)
            if backend is None:
                raise BuildError("missing backend after -G")
        else:
            filename = arg
    return backend, filename


def main(argv: Sequence[str] | None = None) -> int:
    """Run the generator; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        backend_name, filename = _parse_args(args)
        backend_type = parse_backend_type(backend_name) if backend_name else BackendType.NINJA
        if not file_exists(filename):
            print(f"ERROR : File {filename} not found", file=sys.stderr)
            return 1
        content = read_file(filename)
        print(content)
        build = parse(lex(content))
        gen_build(build, backend_type)
    except (BuildError, LexError) as exc:
        print(f"ERROR : {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Build description and its evaluation into a build file."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from spbuild.backend import BackendType, BuildError, output_filename
from spbuild.expr import Array, Expr, String, downcast_expr
from spbuild.files import wildcard_files
from spbuild.generate import TargetRegistry, build_prelude, makefile_clean
from spbuild.lang import Language
from spbuild.tasks import (
    Executable,
    HeaderCheck,
    ParallelTask,
    TaskFailedError,
    get_thread_nb,
    launch_thread_pool,
)

_E = TypeVar("_E", bound=Expr)


@dataclass
class Var:
    """A variable assigned in the build script."""

    name: str
    val: Expr


@dataclass
class Build:
    """Everything collected from a build script."""

    vars: dict[str, Var] = field(default_factory=dict)
    compiler_paths: dict[Language, str] = field(default_factory=dict)
    executables: list[Executable] = field(default_factory=list)
    parallel_tasks: deque[ParallelTask] = field(default_factory=deque)
    targets: TargetRegistry = field(default_factory=TargetRegistry)


def _arg(args: Sequence[Expr], index: int, cls: type[_E], function_name: str) -> _E:
    if index >= len(args):
        raise BuildError(f"{function_name} : missing argument {index + 1}")
    value = downcast_expr(args[index], cls)
    if value is None:
        raise BuildError(
            f"{function_name} : argument {index + 1} must be of type {cls.__name__}"
        )
    return value


def interpret_toplevel_function_call(
    build: Build, function_name: str, args: Sequence[Expr]
) -> None:
    """Apply a statement-level function call of the script to ``build``."""
    if function_name == "exe":
        output = _arg(args, 0, String, function_name)
        sources = _arg(args, 1, Array, function_name)
        libraries = _arg(args, 2, Array, function_name).arr if len(args) >= 3 else []
        exe = Executable(output.s, list(sources.arr), list(libraries))
        build.parallel_tasks.append(exe)
        build.executables.append(exe)
    elif function_name == "cc":
        build.compiler_paths[Language.C] = _arg(args, 0, String, function_name).s
    elif function_name == "check_header":
        header = _arg(args, 0, String, function_name)
        define = _arg(args, 1, String, function_name).s if len(args) > 1 else ""
        build.parallel_tasks.append(HeaderCheck(header.s, define))
    else:
        raise BuildError(f"unknown toplevel function name {function_name}")


def parse_wildcard_format(pattern: str) -> tuple[str, str]:
    """Split a ``folder/*.ext`` pattern into its folder and its extension."""
    slash_pos = pattern.rfind("/")
    if slash_pos == -1:
        raise BuildError(f"missing '/' in wildcard format {pattern!r}")
    folder = pattern[:slash_pos]
    rest = pattern[slash_pos + 1 :]
    if not rest.startswith("*"):
        raise BuildError("missing '*' in wildcard format")
    extension = rest[1:]
    if not extension.startswith("."):
        raise BuildError("missing '.' in wildcard format extension")
    return folder, extension


def interpret_expr_function_call(function_name: str, args: Sequence[Expr]) -> Expr:
    """Evaluate a function call used as an expression."""
    if function_name == "wildcard":
        pattern = _arg(args, 0, String, function_name)
        folder, extension = parse_wildcard_format(pattern.s)
        return Array(wildcard_files(folder, extension))
    raise BuildError(f"unknown function name {function_name}")


def run_build_tasks(build: Build, backend_type: BackendType) -> tuple[str, list[str]]:
    """Run all queued tasks; return the generated text and the produced files."""
    if len(build.parallel_tasks) >= 2:
        return launch_thread_pool(build, backend_type, get_thread_nb())
    parts: list[str] = []
    objects: list[str] = []
    errors: list[str] = []
    while build.parallel_tasks:
        out = build.parallel_tasks.popleft().run(build, backend_type)
        if not out.succeeded:
            errors.append(out.error or "task failed")
            continue
        parts.append(out.text)
        objects.extend(out.objects)
    if errors:
        raise TaskFailedError(errors)
    return "".join(parts), objects


def render_build(build: Build, backend_type: BackendType) -> str:
    """Return the full content of the build file for ``build``."""
    prelude = build_prelude(build.compiler_paths, build.executables, backend_type)
    text, objects = run_build_tasks(build, backend_type)
    content = prelude + text
    if backend_type is BackendType.MAKEFILE:
        content += makefile_clean(objects)
    return content


def gen_build(build: Build, backend_type: BackendType, directory: str | Path = ".") -> Path:
    """Write the build file for ``build`` into ``directory`` and return its path."""
    content = render_build(build, backend_type)
    path = Path(directory) / output_filename(backend_type)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    return path
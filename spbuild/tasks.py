"""Tasks run while generating a build file, possibly on several threads."""

from __future__ import annotations

import os
import sys
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from spbuild.backend import BackendType, BuildError
from spbuild.files import append_path, delete_file, get_tmp_directory, strip_file_extension
from spbuild.generate import gen_build_exe
from spbuild.lang import Language, compiler_path
from spbuild.shell import run_cmd

_print_lock = threading.Lock()


def _locked_print(text: str) -> None:
    with _print_lock:
        sys.stdout.write(text)
        sys.stdout.flush()


class TaskFailedError(BuildError):
    """Raised when one or more build tasks failed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


@dataclass
class TaskOutput:
    succeeded: bool
    text: str = ""
    objects: list[str] = field(default_factory=list)
    error: str | None = None


class ParallelTask(ABC):
    """A unit of work producing part of the build file."""

    @abstractmethod
    def run(self, build: Any, backend_type: BackendType) -> TaskOutput:
        """Do the work and report its result."""


@dataclass
class HeaderCheck(ParallelTask):
    """Check that a header can be preprocessed with the configured C compiler."""

    header_name: str
    header_define: str = ""

    def run(self, build: Any, backend_type: BackendType) -> TaskOutput:
        _locked_print(f"-- checking {self.header_name}        \n")
        compiler = compiler_path(build.compiler_paths, Language.C)
        src_path = append_path(
            get_tmp_directory(), strip_file_extension(self.header_name) + ".cpp"
        )
        with open(src_path, "w", encoding="utf-8") as handle:
            handle.write(f"#include <{self.header_name}>\n")
        try:
            status, _ = run_cmd(f"{compiler} -E {src_path}", True)
        finally:
            delete_file(src_path)
        if status != 0:
            return TaskOutput(False, error=f"header {self.header_name} not found")
        return TaskOutput(True)


@dataclass
class Executable(ParallelTask):
    """An executable linked from source files."""

    output_file: str
    sources: list[str] = field(default_factory=list)
    libraries: list[str] = field(default_factory=list)

    def run(self, build: Any, backend_type: BackendType) -> TaskOutput:
        text, objects = gen_build_exe(backend_type, self, build.targets)
        return TaskOutput(True, text, objects)


def get_thread_nb() -> int:
    """Return the number of worker threads to use."""
    return os.cpu_count() or 1


def launch_thread_pool(
    build: Any, backend_type: BackendType, thread_nb: int
) -> tuple[str, list[str]]:
    """Run and drain ``build.parallel_tasks`` on worker threads.

    Returns the generated text and the produced files, in task order.
    Raises TaskFailedError if any task failed.
    """
    tasks = list(build.parallel_tasks)
    build.parallel_tasks.clear()
    if not tasks:
        return "", []
    workers = max(1, min(len(tasks), thread_nb))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        outputs = list(pool.map(lambda task: task.run(build, backend_type), tasks))

    errors = [out.error or "task failed" for out in outputs if not out.succeeded]
    for error in errors:
        _locked_print(f"ERROR : {error}\n")
    if errors:
        raise TaskFailedError(errors)

    text = "".join(out.text for out in outputs)
    objects = [obj for out in outputs for obj in out.objects]
    return text, objects
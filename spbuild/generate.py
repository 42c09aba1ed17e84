"""Text generation for build-file targets and rules."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from spbuild.backend import BackendType, build_var
from spbuild.files import exe_is_in_path, strip_file_extension
from spbuild.lang import Language, language_support


class TargetRegistry:
    """Thread-safe set of targets already written, so each is emitted once."""

    def __init__(self) -> None:
        self._names: set[str] = set()
        self._lock = threading.Lock()

    def add(self, name: str) -> bool:
        """Record ``name``; return False if it was already recorded."""
        with self._lock:
            if name in self._names:
                return False
            self._names.add(name)
            return True

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)


def object_files(sources: Iterable[str]) -> list[str]:
    """Return the object file produced for each source file."""
    return [source + ".o" for source in sources]


def _set_var(name: str, value: str) -> str:
    return f"{name} = {value}\n\n"


def _linker_var(backend_type: BackendType) -> str:
    return build_var(backend_type, "cc")


def build_prelude(
    compiler_paths: Mapping[Language, str],
    executables: Iterable[Any],
    backend_type: BackendType,
    use_mold: bool | None = None,
) -> str:
    """Return the text placed before any target: compiler, flags and global rules.

    ``use_mold`` of None means: use the mold linker if it is found on PATH.
    """
    if use_mold is None:
        use_mold = exe_is_in_path("mold")
    parts = [language_support(compiler_paths, backend_type, Language.C)]
    ldflags = " " + ("-fuse-ld=mold " if use_mold else "")
    parts.append(_set_var("ldflags_global", ldflags))
    if backend_type is BackendType.MAKEFILE:
        outputs = "".join(f"{exe.output_file} " for exe in executables)
        parts.append(f"all: {outputs}\n\n")
    else:
        parts.append(
            f"rule ld\n  command = {_linker_var(backend_type)} -o $out $in $ldflags\n\n"
        )
    return "".join(parts)


def exe_target(
    backend_type: BackendType,
    output_file: str,
    objs: Sequence[str],
    libraries: Sequence[str],
    targets: TargetRegistry,
) -> str:
    """Return the link target for an executable, or "" if already emitted.

    ``libraries`` is accepted for the link step but adds no flags of its own;
    every executable links with the global linker flags.
    """
    if not targets.add(output_file):
        return ""
    flags_name = "ldflags_" + strip_file_extension(output_file)
    flags_value = build_var(backend_type, "ldflags_global") + " "
    obj_list = "".join(f"{obj} " for obj in objs)
    parts = [_set_var(flags_name, flags_value)]
    if backend_type is BackendType.NINJA:
        parts.append(f"build {output_file}: ld {obj_list}\n")
        parts.append(f"  ldflags = ${flags_name}\n\n")
    else:
        parts.append(f"{output_file}: {obj_list}\n")
        parts.append(
            f"\t{_linker_var(backend_type)} $({flags_name}) -o {output_file} {obj_list} \n\n"
        )
    return "".join(parts)


def source_target(
    backend_type: BackendType,
    source_file: str,
    object_file: str,
    targets: TargetRegistry,
) -> str:
    """Return the compile target for one source file, or "" if already emitted."""
    if not targets.add(object_file):
        return ""
    if backend_type is BackendType.NINJA:
        return f"build {object_file}: cc {source_file}\n\n"
    return f"{object_file}:\n\t$(cc) $(CFLAGS) -c -o {object_file} {source_file} \n\n"


def makefile_clean(files: Iterable[str]) -> str:
    """Return a Makefile ``clean`` target removing ``files``."""
    listed = "".join(f"{name} " for name in files)
    return f"clean:\n\trm -f {listed}\n\n"


def gen_build_exe(
    backend_type: BackendType, exe: Any, targets: TargetRegistry
) -> tuple[str, list[str]]:
    """Return the targets for an executable and the files it produces."""
    objs = object_files(exe.sources)
    parts = [exe_target(backend_type, exe.output_file, objs, exe.libraries, targets)]
    parts.extend(
        source_target(backend_type, source, obj, targets)
        for source, obj in zip(exe.sources, objs)
    )
    return "".join(parts), [exe.output_file, *objs]
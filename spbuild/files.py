"""Filesystem helpers used while reading build scripts and generating build files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path, PurePath

_TMP_ENV_VARS = ("TMPDIR", "TMP", "TEMP")


def read_file(filename: str | os.PathLike[str]) -> str:
    """Return the whole content of a text file."""
    with open(filename, encoding="utf-8") as handle:
        return handle.read()


def file_exists(filename: str | os.PathLike[str]) -> bool:
    """Tell whether a path exists."""
    return os.path.exists(filename)


def get_extension(filename: str) -> str:
    """Return the extension of ``filename`` including the dot.

    Names starting with a dot (hidden files) and names without a dot have
    no extension.
    """
    if not filename or filename.startswith("."):
        return ""
    dot_pos = filename.rfind(".")
    if dot_pos == -1:
        return ""
    return filename[dot_pos:]


def wildcard_files(folder: str, extension: str) -> list[str]:
    """List the regular files of ``folder`` whose extension is ``extension``.

    The returned paths include the folder, e.g. ``["src/main.c", "src/test.c"]``.
    """
    with os.scandir(folder) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if entry.is_file() and get_extension(entry.name) == extension
        )
    return [os.path.join(folder, name) for name in names]


def exe_is_in_path(program: str) -> bool:
    """Tell whether a regular file named ``program`` lives in a ``PATH`` directory."""
    for directory in os.environ.get("PATH", "").split(os.pathsep):
        if not directory or not os.path.isdir(directory):
            continue
        with os.scandir(directory) as entries:
            if any(entry.name == program and entry.is_file() for entry in entries):
                return True
    return False


def strip_file_extension(filename: str) -> str:
    """Return the file name without its directory and its last extension."""
    return PurePath(filename).stem


def get_tmp_directory() -> str:
    """Return the directory used for temporary files."""
    for var in _TMP_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value
    if os.name == "posix":
        return "/tmp"
    return tempfile.gettempdir()


def append_path(path: str, add_path: str) -> str:
    """Join two path components."""
    return os.path.join(path, add_path)


def delete_file(path: str | os.PathLike[str]) -> bool:
    """Remove a file; return whether something was removed."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True
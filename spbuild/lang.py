"""Per-language compiler settings written into generated build files."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from spbuild.backend import BackendType

_DEFAULT_COMPILERS = {"C": "cc"}


class Language(Enum):
    C = "C"


def compiler_path(compiler_paths: Mapping[Language, str], lang: Language) -> str:
    """Return the compiler configured for ``lang``, or the default one."""
    if lang in compiler_paths:
        return compiler_paths[lang]
    return _DEFAULT_COMPILERS.get(lang.value, "cc")


def _c_rules(backend_type: BackendType) -> str:
    if backend_type is BackendType.NINJA:
        return "rule cc\n  command = $cc $cflags -c -o $out $in\n\n"
    return ""


def language_support(
    compiler_paths: Mapping[Language, str],
    backend_type: BackendType,
    lang: Language,
) -> str:
    """Return the build-file text that declares the compiler and rules for ``lang``."""
    path = compiler_path(compiler_paths, lang)
    if lang is Language.C:
        return f"cc = {path}\n\n" + _c_rules(backend_type)
    return ""
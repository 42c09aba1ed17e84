"""Values produced by evaluating build-script expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar


class Expr:
    """Base of all expression values."""


@dataclass
class String(Expr):
    s: str


@dataclass
class Array(Expr):
    arr: list[str] = field(default_factory=list)


_E = TypeVar("_E")


def downcast_expr(expr: object, cls: type[_E]) -> _E | None:
    """Return ``expr`` if it is an instance of ``cls``, otherwise ``None``."""
    if isinstance(expr, cls):
        return expr
    return None
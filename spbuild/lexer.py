"""Tokenizer for build scripts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class LexError(ValueError):
    """Raised when the script holds text that cannot be tokenized."""


class TokenType(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    STRING = "string"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    EQUAL = "="
    OPEN_SQUARE_BRACK = "["
    CLOSE_SQUARE_BRACK = "]"
    COMMA = ","


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str | int | None = None

    @classmethod
    def number(cls, value: int) -> Token:
        return cls(TokenType.NUMBER, value)

    @classmethod
    def identifier(cls, name: str) -> Token:
        return cls(TokenType.IDENTIFIER, name)

    @classmethod
    def string(cls, text: str) -> Token:
        return cls(TokenType.STRING, text)


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>[ \t]+)
    | (?P<newline>\n)
    | (?P<comment>(?:\#|//)[^\n]*\n?)
    | (?P<number>[0-9]+)
    | (?P<string>['"][^'"]*['"])
    | (?P<identifier>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<special>[=()\[\],])
    """,
    re.VERBOSE,
)


def lex(text: str) -> list[Token]:
    """Split a build script into tokens."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            char = text[pos]
            if char in "'\"":
                raise LexError(f"unterminated string at position {pos}")
            raise LexError(f"unknown char : {char!r} (code : {ord(char)})")
        kind = match.lastgroup
        lexeme = match.group()
        if kind == "number":
            tokens.append(Token.number(int(lexeme)))
        elif kind == "string":
            tokens.append(Token.string(lexeme[1:-1]))
        elif kind == "identifier":
            tokens.append(Token.identifier(lexeme))
        elif kind == "special":
            tokens.append(Token(TokenType(lexeme)))
        pos = match.end()
    return tokens
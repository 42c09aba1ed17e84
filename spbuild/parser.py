"""Parser turning build-script tokens into a build description."""

from __future__ import annotations

from collections.abc import Iterable

from spbuild.backend import BuildError
from spbuild.build import (
    Build,
    Var,
    interpret_expr_function_call,
    interpret_toplevel_function_call,
)
from spbuild.expr import Array, Expr, String
from spbuild.lexer import Token, TokenType


class ParseError(BuildError):
    """Raised when the tokens do not form a valid build script."""


def _unexpected(token: Token | None) -> ParseError:
    if token is None:
        return ParseError("unexpected end of input")
    return ParseError(f"unexpected token {token.type.value!r}")


class _Parser:
    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0
        self.build = Build()

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, token_type: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type is token_type

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise _unexpected(None)
        self._pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._next()
        if token.type is not token_type:
            raise _unexpected(token)
        return token

    def _skip_comma(self) -> None:
        if self._at(TokenType.COMMA):
            self._pos += 1

    def _function_args(self) -> list[Expr]:
        args: list[Expr] = []
        while not self._at(TokenType.CLOSE_PAREN):
            if self._peek() is None:
                raise _unexpected(None)
            args.append(self._expr())
            self._skip_comma()
        self._expect(TokenType.CLOSE_PAREN)
        return args

    def _expr(self) -> Expr:
        token = self._next()
        if token.type is TokenType.OPEN_SQUARE_BRACK:
            items: list[str] = []
            while not self._at(TokenType.CLOSE_SQUARE_BRACK):
                items.append(str(self._expect(TokenType.STRING).value))
                self._skip_comma()
            self._expect(TokenType.CLOSE_SQUARE_BRACK)
            return Array(items)
        if token.type is TokenType.STRING:
            return String(str(token.value))
        if token.type is TokenType.IDENTIFIER:
            self._expect(TokenType.OPEN_PAREN)
            args = self._function_args()
            return interpret_expr_function_call(str(token.value), args)
        raise _unexpected(token)

    def _statement(self) -> None:
        name = str(self._expect(TokenType.IDENTIFIER).value)
        token = self._next()
        if token.type is TokenType.EQUAL:
            value = self._expr()
            if not isinstance(value, Array):
                raise ParseError("expected array of string after equal")
            self.build.vars[name] = Var(name, value)
        elif token.type is TokenType.OPEN_PAREN:
            print(f"got toplevel function call : {name}")
            args = self._function_args()
            interpret_toplevel_function_call(self.build, name, args)
        else:
            raise _unexpected(token)

    def parse(self) -> Build:
        while self._peek() is not None:
            self._statement()
        return self.build


def parse(tokens: Iterable[Token]) -> Build:
    """Parse a token sequence into a :class:`Build`."""
    return _Parser(tokens).parse()
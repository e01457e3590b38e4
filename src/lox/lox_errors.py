"""
Exception types raised or collected by the lox pipeline.

Each stage owns one error kind:

    - LexicalError: unexpected character or unterminated string. Collected by
      the scanner rather than raised, so that every lexical problem in a
      source is reported in one pass.
    - ParseError: the token stream does not match the expression grammar.
      Raised by the parser; fatal to the current parse.
    - EvaluationError: evaluation could not finish, for instance because the
      tree is nested deeper than the interpreter can recurse. Raised by the
      interpreter; fatal to the current evaluation.
    - RuntimeTypeError: an EvaluationError for an operator applied to operand
      kinds it does not support.

All of them derive from `LoxError`, so drivers can stop the pipeline at a stage
boundary with a single `except LoxError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lox.lox_constants import TokenKind

if TYPE_CHECKING:  # pragma: no cover
    from lox.lox_lexer import Token


class LoxError(Exception):
    """Base class for all user-facing lox errors.

    Attributes:
        message (str): Human-readable description, without location.
        line (int): 1-based source line the error is attributed to.
    """

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class LexicalError(LoxError):
    """An unrecognized character or an unterminated string literal."""


class ParseError(LoxError):
    """A syntax error at a specific token.

    Attributes:
        token (Token): The token the parser was looking at when it failed.
    """

    def __init__(self, message: str, token: Token):
        super().__init__(message, token.line)
        self.token = token

    def __str__(self) -> str:
        if self.token.kind is TokenKind.EOF:
            where = "at end"
        else:
            where = f"at '{self.token.lexeme}'"
        return f"[line {self.line}] Error {where}: {self.message}"


class EvaluationError(LoxError):
    """A failure while evaluating an expression tree."""


class RuntimeTypeError(EvaluationError):
    """An operator was applied to values of kinds it does not support.

    Attributes:
        operator (str): Canonical symbol of the offending operator (e.g. "+", "neg").
        operand_kinds (tuple[str, ...]): Lox kind names of the operands it received.
    """

    def __init__(
        self, message: str, operator: str, operand_kinds: tuple[str, ...], line: int = 0
    ):
        super().__init__(message, line)
        self.operator = operator
        self.operand_kinds = operand_kinds


__all__ = [
    "EvaluationError",
    "LexicalError",
    "LoxError",
    "ParseError",
    "RuntimeTypeError",
]

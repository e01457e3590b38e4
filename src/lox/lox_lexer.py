"""
Lexical analyzer for the lox expression language.

This module converts raw source text into an ordered list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line tracking.
    Token: Immutable lexical unit with kind, lexeme, literal payload and line.
    Scanner: Converts source text into tokens, collecting lexical errors.
    ScanResult: The token list together with every lexical error found.

Features:
    - Skips whitespace and `//` line comments
    - Maximal munch for `!=`, `==`, `>=`, `<=`
    - Recognizes:
        * Identifiers and the reserved words in `keyword_tokens`
        * Numbers (digits with an optional fractional part, always float)
        * Strings (double-quoted, no escapes, may span lines)
        * Punctuation and operators
    - Never stops early: unexpected characters and unterminated strings are
      recorded as `LexicalError` and scanning carries on.
    - The token list always ends with exactly one EOF token.

Example:
    >>> result = scan("1 + 2")
    >>> [str(tok.kind) for tok in result.tokens]
    ['NUMBER', 'PLUS', 'NUMBER', 'EOF']
    >>> result.had_error
    False
"""

from dataclasses import dataclass
from typing import NamedTuple

from lox.lox_constants import (
    TokenKind,
    keyword_tokens,
    single_char_tokens,
    two_char_tokens,
)
from lox.lox_errors import LexicalError

LiteralValue = float | str | None


class CharacterStream:
    """
    A utility for reading characters from a string source with line tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        A consumed newline advances the line counter.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        lexeme (str): The exact source slice the token was scanned from.
        literal (float | str | None): Parsed payload for numbers, strings and
            identifiers; None for everything else.
        line (int): The 1-based line the token was created on.
    """

    kind: TokenKind
    lexeme: str
    literal: LiteralValue = None
    line: int = 0

    def __repr__(self) -> str:
        if self.literal is None:
            return f"Token({self.kind}, {self.lexeme!r})"
        return f"Token({self.kind}, {self.lexeme!r}, {self.literal!r})"

    def __str__(self) -> str:
        if self.literal is None:
            return f"{self.kind} {self.lexeme}"
        return f"{self.kind} {self.lexeme} {self.literal!r}"


def is_digit(ch: str) -> bool:
    # ASCII only; str.isdigit() accepts characters float() rejects
    return len(ch) == 1 and "0" <= ch <= "9"


class Scanner:
    """Lexical analyzer for lox.

    A Scanner is single-use: it owns its cursor, token buffer and error list.

    Attributes:
        source (str): The text being scanned.
        stream (CharacterStream): Cursor over `source`.
        tokens (list[Token]): Tokens produced so far.
        errors (list[LexicalError]): Every lexical error found so far.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.stream = CharacterStream(source)
        self.start = 0
        self.tokens: list[Token] = []
        self.errors: list[LexicalError] = []

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.advance()
        return True

    def lexeme(self) -> str:
        return self.source[self.start : self.stream.position]

    def add_token(self, kind: TokenKind, literal: LiteralValue = None) -> None:
        self.tokens.append(Token(kind, self.lexeme(), literal, self.stream.line))

    def error(self, message: str, line: int | None = None) -> None:
        self.errors.append(
            LexicalError(message, self.stream.line if line is None else line)
        )

    def scan_tokens(self) -> list[Token]:
        """Scans the whole source and returns the token list, EOF included.

        Returns:
            list[Token]: Tokens in source order; the last one is always EOF.
        """
        if self.tokens and self.tokens[-1].kind is TokenKind.EOF:
            return self.tokens
        while not self.stream.end_of_file():
            self.start = self.stream.position
            self.scan_token()
        self.tokens.append(Token(TokenKind.EOF, "", None, self.stream.line))
        return self.tokens

    def scan_token(self) -> None:
        ch = self.advance()

        if ch in single_char_tokens:
            self.add_token(single_char_tokens[ch])
        elif ch in two_char_tokens:
            second, long_kind, short_kind = two_char_tokens[ch]
            self.add_token(long_kind if self.match(second) else short_kind)
        elif ch == "/":
            if self.match("/"):
                self.skip_comment()
            else:
                self.add_token(TokenKind.SLASH)
        elif ch == '"':
            self.string()
        elif is_digit(ch):
            self.number()
        elif ch.isalpha():
            self.identifier()
        elif ch.isspace():
            pass
        else:
            self.error(f"Unexpected character {ch!r}.")

    def skip_comment(self) -> None:
        """Advances up to, but not over, the newline ending a `//` comment."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def string(self) -> None:
        start_line = self.stream.line
        while not self.stream.end_of_file() and self.peek() != '"':
            self.advance()

        if self.stream.end_of_file():
            self.error("Unterminated string.", start_line)
            return

        self.advance()  # closing quote
        value = self.source[self.start + 1 : self.stream.position - 1]
        self.add_token(TokenKind.STRING, value)

    def consume_digits(self) -> None:
        while is_digit(self.peek()):
            self.advance()

    def number(self) -> None:
        self.consume_digits()

        # a trailing dot stays a DOT token unless a digit follows it
        if self.peek() == "." and is_digit(self.peek(1)):
            self.advance()
            self.consume_digits()

        self.add_token(TokenKind.NUMBER, float(self.lexeme()))

    def identifier(self) -> None:
        while self.peek().isalpha():
            self.advance()

        text = self.lexeme()
        kind = keyword_tokens.get(text)
        if kind is not None:
            self.add_token(kind)
        else:
            self.add_token(TokenKind.IDENTIFIER, text)


class ScanResult(NamedTuple):
    """Output of `scan`: the token list plus all lexical errors."""

    tokens: list[Token]
    errors: list[LexicalError]

    @property
    def had_error(self) -> bool:
        return bool(self.errors)


def scan(source: str) -> ScanResult:
    """Scans `source` into tokens.

    Args:
        source (str): Complete source text.

    Returns:
        ScanResult: Tokens ending in EOF, and the lexical errors encountered.
    """
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return ScanResult(tokens, scanner.errors)


__all__ = ["CharacterStream", "ScanResult", "Scanner", "Token", "is_digit", "scan"]

"""
Token kinds and lexeme lookup tables for the lox scanner and parser.

Exports:
    - TokenKind: closed enumeration of every token the scanner can produce.
    - single_char_tokens: one-character punctuation that never extends.
    - two_char_tokens: operators whose one-character form may be followed by
      a second character producing a longer token (maximal munch).
    - keyword_tokens: reserved words, looked up after an identifier is scanned.
    - statement_starts: keywords that begin a statement-level construct,
      used by the parser's synchronization routine.
"""

from enum import Enum


class TokenKind(Enum):
    # single-character punctuation
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    COMMA = "COMMA"
    DOT = "DOT"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SEMICOLON = "SEMICOLON"
    SLASH = "SLASH"
    STAR = "STAR"

    # one- or two-character operators
    BANG = "BANG"
    BANG_EQUAL = "BANG_EQUAL"
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    # literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # keywords
    AND = "AND"
    CLASS = "CLASS"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FUN = "FUN"
    FOR = "FOR"
    IF = "IF"
    NIL = "NIL"
    OR = "OR"
    PRINT = "PRINT"
    RETURN = "RETURN"
    SUPER = "SUPER"
    THIS = "THIS"
    TRUE = "TRUE"
    VAR = "VAR"
    WHILE = "WHILE"

    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


single_char_tokens: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char -> (second char, two-char kind, one-char kind)
two_char_tokens: dict[str, tuple[str, TokenKind, TokenKind]] = {
    "!": ("=", TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": ("=", TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    ">": ("=", TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    "<": ("=", TokenKind.LESS_EQUAL, TokenKind.LESS),
}

keyword_tokens: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "fun": TokenKind.FUN,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}

statement_starts: frozenset[TokenKind] = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)

__all__ = [
    "TokenKind",
    "keyword_tokens",
    "single_char_tokens",
    "statement_starts",
    "two_char_tokens",
]

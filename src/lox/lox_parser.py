"""
lox Expression Parser

Parses a token list produced by `lox.lox_lexer` into a single `Expr` tree.

Grammar
-------
Recursive descent over this precedence ladder, lowest to highest:

    expression -> equality
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Binary levels fold left-associatively in a loop; unary recurses on itself so
prefixes stack (`--x`, `!!x`).

Parser Behavior
---------------
- Strict mode (default) requires the root expression to be followed by EOF.
  Non-strict mode returns the first complete expression and ignores the rest.
- A missing `)` or a token that cannot start a primary raises `ParseError`
  carrying the offending token and its line.
- Trees deeper than `max_depth` (and inputs nested past what Python can
  recurse through) raise `ParseError("Expression nested too deeply.")`, so
  every tree the parser returns can be rendered and evaluated.
- `synchronize()` implements panic-mode recovery to the next statement
  boundary. Expression parsing never calls it; it is there for callers that
  layer statements over expressions.

Entry Points
------------
- `parse(tokens, strict=True, max_depth=MAX_DEPTH)`: Parse a token list into
  one `Expr`.
- `Parser(tokens).parse(strict=True)`: Same, on an explicit parser instance.
"""

from __future__ import annotations

from collections.abc import Callable

from lox.lox_ast import Binary, BinaryOp, Expr, Grouping, Literal, Unary, UnaryOp
from lox.lox_constants import TokenKind, statement_starts
from lox.lox_errors import ParseError
from lox.lox_lexer import Token

# Evaluating or rendering a tree recurses about twice per level.
MAX_DEPTH = 200

# TOKEN MAPPINGS (PARSER)

equality_ops: dict[TokenKind, BinaryOp] = {
    TokenKind.BANG_EQUAL: BinaryOp.NOT_EQUAL,
    TokenKind.EQUAL_EQUAL: BinaryOp.EQUAL,
}

comparison_ops: dict[TokenKind, BinaryOp] = {
    TokenKind.GREATER: BinaryOp.GREATER,
    TokenKind.GREATER_EQUAL: BinaryOp.GREATER_EQUAL,
    TokenKind.LESS: BinaryOp.LESS,
    TokenKind.LESS_EQUAL: BinaryOp.LESS_EQUAL,
}

term_ops: dict[TokenKind, BinaryOp] = {
    TokenKind.MINUS: BinaryOp.SUBTRACT,
    TokenKind.PLUS: BinaryOp.ADD,
}

factor_ops: dict[TokenKind, BinaryOp] = {
    TokenKind.SLASH: BinaryOp.DIVIDE,
    TokenKind.STAR: BinaryOp.MULTIPLY,
}

unary_ops: dict[TokenKind, UnaryOp] = {
    TokenKind.BANG: UnaryOp.NOT,
    TokenKind.MINUS: UnaryOp.NEGATE,
}

keyword_literals: dict[TokenKind, bool | None] = {
    TokenKind.FALSE: False,
    TokenKind.TRUE: True,
    TokenKind.NIL: None,
}


class Parser:
    """
    lox Parser Class

    Transforms a token list into a single expression tree. A Parser owns its
    cursor and is meant to parse one token list.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream, normally ending in EOF.
    position : int
        Current index into the token stream.
    max_depth : int
        Deepest tree the parser will build.

    Raises
    ------
    ParseError
        When the tokens do not form a valid expression.
    """

    def __init__(self, tokens: list[Token], max_depth: int = MAX_DEPTH) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.max_depth = max_depth

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        line = self.tokens[-1].line if self.tokens else 1
        return Token(TokenKind.EOF, "", None, line)

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def at_end(self) -> bool:
        return self.current().kind is TokenKind.EOF

    def advance(self) -> Token:
        """Consumes the current token (never moving past EOF) and returns it."""
        tok = self.current()
        if not self.at_end():
            self.position += 1
        return tok

    def check(self, *kinds: TokenKind) -> bool:
        return self.current().kind in kinds

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.check(*kinds):
            return self.advance()
        return None

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(message, self.current())

    def parse(self, strict: bool = True) -> Expr:
        """Parse the token list into one expression.

        Args:
            strict: If True, anything left after the root expression other
                than EOF is a syntax error.
        """
        try:
            expr = self.expression()
        except RecursionError:
            raise ParseError("Expression nested too deeply.", self.current()) from None
        if strict and not self.at_end():
            raise ParseError("Expect end of expression.", self.current())
        return expr

    def limit_depth(self, expr: Expr, tok: Token) -> Expr:
        if expr.depth > self.max_depth:
            raise ParseError("Expression nested too deeply.", tok)
        return expr

    def expression(self) -> Expr:
        return self.equality()

    def _binary_level(
        self, ops: dict[TokenKind, BinaryOp], operand: Callable[[], Expr]
    ) -> Expr:
        expr = operand()
        tok = self.match(*ops)
        while tok is not None:
            right = operand()
            binary = Binary(ops[tok.kind], expr, right, line=tok.line)
            expr = self.limit_depth(binary, tok)
            tok = self.match(*ops)
        return expr

    def equality(self) -> Expr:
        return self._binary_level(equality_ops, self.comparison)

    def comparison(self) -> Expr:
        return self._binary_level(comparison_ops, self.term)

    def term(self) -> Expr:
        return self._binary_level(term_ops, self.factor)

    def factor(self) -> Expr:
        return self._binary_level(factor_ops, self.unary)

    def unary(self) -> Expr:
        tok = self.match(*unary_ops)
        if tok is not None:
            operand = self.unary()
            unary = Unary(unary_ops[tok.kind], operand, line=tok.line)
            return self.limit_depth(unary, tok)
        return self.primary()

    def primary(self) -> Expr:
        tok = self.match(*keyword_literals)
        if tok is not None:
            return Literal(keyword_literals[tok.kind], line=tok.line)

        tok = self.match(TokenKind.NUMBER, TokenKind.STRING)
        if tok is not None:
            return Literal(tok.literal, line=tok.line)

        tok = self.match(TokenKind.LEFT_PAREN)
        if tok is not None:
            inner = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return self.limit_depth(Grouping(inner, line=tok.line), tok)

        raise ParseError("Expect expression.", self.current())

    def synchronize(self) -> None:
        """Discard tokens until a likely statement boundary.

        Stops just after a `;`, just before a keyword that starts a statement,
        or at EOF.
        """
        self.advance()
        while not self.at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.current().kind in statement_starts:
                return
            self.advance()


def parse(
    tokens: list[Token], strict: bool = True, max_depth: int = MAX_DEPTH
) -> Expr:
    """Parse `tokens` into a single expression; see `Parser.parse`."""
    return Parser(tokens, max_depth).parse(strict=strict)


__all__ = ["MAX_DEPTH", "Parser", "parse"]

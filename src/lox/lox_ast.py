"""
Defines the abstract syntax tree (AST) for lox expressions.

Classes:
    Expr:
        Base of the four expression variants. Carries the variant `kind` and an
        informational source `line`, and provides structural equality, the
        canonical prefix rendering (`str(expr)`) and `to_dict()` serialisation.

    Literal, Unary, Binary, Grouping:
        The expression variants. Each node exclusively owns its children.

    UnaryOp, BinaryOp:
        Operator tags; each member's value is its canonical rendering symbol.

    ExprDict:
        TypedDict shape of a serialised node, suitable for JSON output.

Canonical rendering is a fully parenthesized prefix form:

    >>> str(Binary(BinaryOp.MULTIPLY,
    ...            Unary(UnaryOp.NEGATE, Literal(123.0)),
    ...            Grouping(Literal(45.67))))
    '(* (neg 123) (group 45.67))'

`line` is metadata for diagnostics only and does not take part in equality,
so a hand-built tree compares equal to the same tree produced by the parser.
"""

import math
from enum import Enum
from typing import Any, TypedDict

LiteralValue = float | str | bool | None


class UnaryOp(Enum):
    NEGATE = "neg"
    NOT = "not"


class BinaryOp(Enum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class ExprDict(TypedDict, total=False):
    """
    TypedDict representation of an Expr used for serialization.

    Fields:
        kind (str): "literal", "unary", "binary" or "grouping".
        line (int): Source line the node was parsed from (0 when hand-built).
        value (Any): Literal value (literal nodes only). Non-finite numbers are
            written as their display text ("inf", "-inf", "NaN").
        op (str): Canonical operator symbol (unary and binary nodes).
        operand (ExprDict): Unary operand.
        left (ExprDict): Binary left operand.
        right (ExprDict): Binary right operand.
        inner (ExprDict): Grouped expression.
    """

    kind: str
    line: int
    value: Any
    op: str
    operand: "ExprDict"
    left: "ExprDict"
    right: "ExprDict"
    inner: "ExprDict"


def format_number(value: float) -> str:
    """Formats a number the way lox displays it.

    Integral values drop the fractional part (`4.0` -> `4`), other finite
    values use Python's shortest round-trip form, and the non-finite values
    render as `inf`, `-inf` and `NaN`.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


class Expr:
    """Base class of all expression nodes.

    Attributes:
        kind (str): Variant name, also used for evaluator dispatch.
        line (int): Source line of the node's first token (0 when hand-built).
        depth (int): Height of the tree rooted here; a leaf has depth 1.
    """

    kind = "expr"

    def __init__(self, line: int = 0) -> None:
        self.line = line
        self.depth = 1

    def _fields(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((self.kind, self._fields()))

    def to_dict(self) -> ExprDict:
        raise NotImplementedError


class Literal(Expr):
    kind = "literal"

    def __init__(self, value: LiteralValue, line: int = 0) -> None:
        super().__init__(line)
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        self.value = value

    def _fields(self) -> tuple[Any, ...]:
        # type is part of identity: Literal(True) != Literal(1.0)
        return (type(self.value), self.value)

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"

    def __str__(self) -> str:
        if self.value is None:
            return "nil"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, float):
            return format_number(self.value)
        return f'"{self.value}"'

    def to_dict(self) -> ExprDict:
        value: Any = self.value
        # JSON has no inf or NaN
        if isinstance(value, float) and not math.isfinite(value):
            value = format_number(value)
        return {"kind": self.kind, "line": self.line, "value": value}


class Unary(Expr):
    kind = "unary"

    def __init__(self, op: UnaryOp, operand: Expr, line: int = 0) -> None:
        super().__init__(line)
        self.op = op
        self.operand = operand
        self.depth = operand.depth + 1

    def _fields(self) -> tuple[Any, ...]:
        return (self.op, self.operand)

    def __repr__(self) -> str:
        return f"Unary({self.op.name}, {self.operand!r})"

    def __str__(self) -> str:
        return f"({self.op.value} {self.operand})"

    def to_dict(self) -> ExprDict:
        return {
            "kind": self.kind,
            "line": self.line,
            "op": self.op.value,
            "operand": self.operand.to_dict(),
        }


class Binary(Expr):
    kind = "binary"

    def __init__(self, op: BinaryOp, left: Expr, right: Expr, line: int = 0) -> None:
        super().__init__(line)
        self.op = op
        self.left = left
        self.right = right
        self.depth = max(left.depth, right.depth) + 1

    def _fields(self) -> tuple[Any, ...]:
        return (self.op, self.left, self.right)

    def __repr__(self) -> str:
        return f"Binary({self.op.name}, {self.left!r}, {self.right!r})"

    def __str__(self) -> str:
        return f"({self.op.value} {self.left} {self.right})"

    def to_dict(self) -> ExprDict:
        return {
            "kind": self.kind,
            "line": self.line,
            "op": self.op.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


class Grouping(Expr):
    kind = "grouping"

    def __init__(self, inner: Expr, line: int = 0) -> None:
        super().__init__(line)
        self.inner = inner
        self.depth = inner.depth + 1

    def _fields(self) -> tuple[Any, ...]:
        return (self.inner,)

    def __repr__(self) -> str:
        return f"Grouping({self.inner!r})"

    def __str__(self) -> str:
        return f"(group {self.inner})"

    def to_dict(self) -> ExprDict:
        return {"kind": self.kind, "line": self.line, "inner": self.inner.to_dict()}


__all__ = [
    "Binary",
    "BinaryOp",
    "Expr",
    "ExprDict",
    "Grouping",
    "Literal",
    "LiteralValue",
    "Unary",
    "UnaryOp",
    "format_number",
]

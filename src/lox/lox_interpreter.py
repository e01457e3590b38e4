"""
Tree-walking evaluator for lox expressions.

Reduces an `Expr` tree to a runtime value. Runtime values are plain Python
objects:

    =========  ===============
    lox kind   Python type
    =========  ===============
    nil        None
    number     float
    boolean    bool
    string     str
    =========  ===============

Semantics:
    - Only `false` and `nil` are falsy.
    - Arithmetic and comparison operators need numbers; `+` also joins two
      strings. Division follows IEEE-754 (`1 / 0` is `inf`, `0 / 0` is `NaN`).
    - Equality never coerces: values of different kinds are never equal.
    - The left operand is evaluated before the right one.

Raises:
    RuntimeTypeError: When an operator receives operand kinds it does not support.
    EvaluationError: When the tree is nested deeper than Python can recurse.
"""

import math
import operator
from collections.abc import Callable
from typing import cast

from lox.lox_ast import (
    Binary,
    BinaryOp,
    Expr,
    Grouping,
    Literal,
    Unary,
    UnaryOp,
    format_number,
)
from lox.lox_errors import EvaluationError, RuntimeTypeError

Value = float | str | bool | None


def kind_of(value: Value) -> str:
    """Returns the lox kind name of a runtime value."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    raise TypeError(f"Not a lox value: {value!r}")


def is_number(value: Value) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Value) -> bool:
    return value is not None and value is not False


def is_equal(left: Value, right: Value) -> bool:
    """Lox equality: same kind and same value, numbers compared as IEEE floats."""
    if type(left) is not type(right):
        return False
    # NaN is the one value not equal to itself
    return left == right


def stringify(value: Value) -> str:
    """Renders a runtime value the way the REPL and CLI print it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return value


def divide(left: float, right: float) -> float:
    # Python raises on x / 0.0; lox follows IEEE-754 instead
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


arithmetic_ops: dict[BinaryOp, Callable[[float, float], float]] = {
    BinaryOp.SUBTRACT: operator.sub,
    BinaryOp.MULTIPLY: operator.mul,
    BinaryOp.DIVIDE: divide,
}

comparison_ops: dict[BinaryOp, Callable[[float, float], bool]] = {
    BinaryOp.LESS: operator.lt,
    BinaryOp.LESS_EQUAL: operator.le,
    BinaryOp.GREATER: operator.gt,
    BinaryOp.GREATER_EQUAL: operator.ge,
}


class Interpreter:
    """Evaluates expression trees.

    `evaluate` is the entry point; `_visit` dispatches each node to the
    `eval_<kind>` method matching its variant, and the `eval_*` methods
    recurse through `_visit`.
    An Interpreter holds no state between calls, so one instance can
    evaluate any number of expressions.
    """

    def evaluate(self, expr: Expr) -> Value:
        try:
            return self._visit(expr)
        except RecursionError:
            raise EvaluationError("Expression nested too deeply.", expr.line) from None

    def _visit(self, expr: Expr) -> Value:
        method_name = f"eval_{expr.kind}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No evaluator for node kind '{expr.kind}' (line {expr.line})"
            )
        result: Value = getattr(self, method_name)(expr)
        return result

    def eval_literal(self, expr: Literal) -> Value:
        return expr.value

    def eval_grouping(self, expr: Grouping) -> Value:
        return self._visit(expr.inner)

    def eval_unary(self, expr: Unary) -> Value:
        operand = self._visit(expr.operand)

        if expr.op is UnaryOp.NOT:
            return not is_truthy(operand)

        if not is_number(operand):
            raise RuntimeTypeError(
                f"Operand of '-' must be a number, got {kind_of(operand)}.",
                expr.op.value,
                (kind_of(operand),),
                expr.line,
            )
        return -cast(float, operand)

    def eval_binary(self, expr: Binary) -> Value:
        left = self._visit(expr.left)
        right = self._visit(expr.right)
        op = expr.op

        if op is BinaryOp.EQUAL:
            return is_equal(left, right)
        if op is BinaryOp.NOT_EQUAL:
            return not is_equal(left, right)

        if op is BinaryOp.ADD:
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            if is_number(left) and is_number(right):
                return cast(float, left) + cast(float, right)
            raise self._operand_error(
                expr, left, right, "must be two numbers or two strings"
            )

        if not (is_number(left) and is_number(right)):
            raise self._operand_error(expr, left, right, "must be numbers")
        lhs, rhs = cast(float, left), cast(float, right)

        if op in comparison_ops:
            return comparison_ops[op](lhs, rhs)
        return arithmetic_ops[op](lhs, rhs)

    @staticmethod
    def _operand_error(
        expr: Binary, left: Value, right: Value, requirement: str
    ) -> RuntimeTypeError:
        kinds = (kind_of(left), kind_of(right))
        got = f"got {kinds[0]} and {kinds[1]}"
        return RuntimeTypeError(
            f"Operands of '{expr.op.value}' {requirement}, {got}.",
            expr.op.value,
            kinds,
            expr.line,
        )


def evaluate(expr: Expr) -> Value:
    """Evaluate `expr` with a fresh `Interpreter`."""
    return Interpreter().evaluate(expr)


__all__ = [
    "Interpreter",
    "Value",
    "evaluate",
    "is_equal",
    "is_truthy",
    "kind_of",
    "stringify",
]

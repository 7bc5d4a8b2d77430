"""
Evaluator for the abacus calculator language.

Two mutually recursive tree walks over the syntax tree: ``value`` produces a
``Number`` and ``truth`` produces a ``bool``. Each node supports only the walk
that makes sense for it; asking a comparison for its value (or a sum for its
truth) is an ``EvaluationError``, there is no implicit conversion.

Boolean combinators evaluate both operands. Conditionals evaluate the
condition and then exactly one branch.

Left-deep chains such as ``1 + 2 + ... + n`` are folded in a loop, not by
recursion, so their length is not bounded by the interpreter stack.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Mapping

from abacus.core.errors import EvaluationError
from abacus.core.ir.syntax import (
    ARITHMETIC_OPS,
    LOGICAL_OPS,
    BinaryExpr,
    BinaryOp,
    BoolLiteral,
    Conditional,
    ExpressionStatement,
    FunctionCall,
    FunctionDef,
    Node,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
    is_condition,
)
from abacus.core.numbers import Number

logger = logging.getLogger(__name__)

Scope = Mapping[str, Node]

_ARITHMETIC: dict[BinaryOp, Callable[[Number, Number], Number]] = {
    BinaryOp.ADD: operator.add,
    BinaryOp.SUB: operator.sub,
    BinaryOp.MUL: operator.mul,
    BinaryOp.DIV: operator.truediv,
    BinaryOp.MOD: operator.mod,
}

_COMPARISON: dict[BinaryOp, Callable[[Number, Number], bool]] = {
    BinaryOp.EQ: operator.eq,
    BinaryOp.NE: operator.ne,
    BinaryOp.LT: operator.lt,
    BinaryOp.GT: operator.gt,
    BinaryOp.LE: operator.le,
    BinaryOp.GE: operator.ge,
}

_LOGICAL: dict[BinaryOp, Callable[[bool, bool], bool]] = {
    BinaryOp.AND: operator.and_,
    BinaryOp.OR: operator.or_,
    BinaryOp.XOR: operator.xor,
}


def evaluate(node: Node | FunctionDef, scope: Scope | None = None) -> Number | bool:
    """Evaluate a top-level statement to a number or a truth value.

    Args:
        node: Parsed statement or expression.
        scope: Parameter bindings; empty at the top level.

    Returns:
        ``truth(node)`` for conditions, ``value(node)`` otherwise. A
        conditional takes the shape of the branch it selects.

    Raises:
        EvaluationError: If evaluation fails.
    """
    scope = scope if scope is not None else {}
    if isinstance(node, FunctionDef):
        raise EvaluationError(f"Function definition {node.name} has no value")
    if isinstance(node, ExpressionStatement):
        return evaluate(node.expr, scope)
    if isinstance(node, Conditional):
        branch = node.then_branch if truth(node.condition, scope) else node.else_branch
        return evaluate(branch, scope)
    if isinstance(node, FunctionCall):
        return evaluate(node.function.body, _bind(node, scope))
    if is_condition(node):
        return truth(node, scope)
    return value(node, scope)


def value(node: Node, scope: Scope) -> Number:
    """Compute the numeric value of ``node``."""
    if isinstance(node, NumberLiteral):
        return node.value

    if isinstance(node, Variable):
        return value(_resolve(node, scope), {})

    if isinstance(node, UnaryExpr):
        if node.op == UnaryOp.NEG:
            return -value(node.operand, scope)
        if node.op == UnaryOp.PLUS:
            return +value(node.operand, scope)
        raise EvaluationError(f"Condition has no numeric value: {node}")

    if isinstance(node, BinaryExpr):
        if node.op not in ARITHMETIC_OPS:
            raise EvaluationError(f"Condition has no numeric value: {node}")
        spine = [node]
        left = node.left
        while isinstance(left, BinaryExpr) and left.op in ARITHMETIC_OPS:
            spine.append(left)
            left = left.left
        result = value(left, scope)
        for step in reversed(spine):
            result = _arithmetic(step, result, value(step.right, scope))
        return result

    if isinstance(node, FunctionCall):
        return value(node.function.body, _bind(node, scope))

    if isinstance(node, ExpressionStatement):
        return value(node.expr, scope)

    if isinstance(node, Conditional):
        if truth(node.condition, scope):
            return value(node.then_branch, scope)
        return value(node.else_branch, scope)

    if isinstance(node, BoolLiteral):
        raise EvaluationError(f"Boolean has no numeric value: {node}")

    raise EvaluationError(f"Unknown node type: {type(node).__name__}")


def truth(node: Node, scope: Scope) -> bool:
    """Compute the truth value of ``node``."""
    if isinstance(node, BoolLiteral):
        return node.value

    if isinstance(node, UnaryExpr):
        if node.op == UnaryOp.NOT:
            return not truth(node.operand, scope)
        raise EvaluationError(f"Number has no truth value: {node}")

    if isinstance(node, BinaryExpr):
        if node.op in LOGICAL_OPS:
            # Both sides are always evaluated
            spine = [node]
            inner = node.left
            while isinstance(inner, BinaryExpr) and inner.op in LOGICAL_OPS:
                spine.append(inner)
                inner = inner.left
            result = truth(inner, scope)
            for step in reversed(spine):
                result = _LOGICAL[step.op](result, truth(step.right, scope))
            return result

        compare = _COMPARISON.get(node.op)
        if compare is None:
            raise EvaluationError(f"Number has no truth value: {node}")
        left = value(node.left, scope)
        right = value(node.right, scope)
        try:
            return compare(left, right)
        except (TypeError, OverflowError) as e:
            raise EvaluationError(f"{_capitalize(str(e))}: {node}") from e

    if isinstance(node, Variable):
        return truth(_resolve(node, scope), {})

    if isinstance(node, FunctionCall):
        return truth(node.function.body, _bind(node, scope))

    if isinstance(node, ExpressionStatement):
        return truth(node.expr, scope)

    if isinstance(node, Conditional):
        if truth(node.condition, scope):
            return truth(node.then_branch, scope)
        return truth(node.else_branch, scope)

    if isinstance(node, NumberLiteral):
        raise EvaluationError(f"Number has no truth value: {node}")

    raise EvaluationError(f"Unknown node type: {type(node).__name__}")


def _arithmetic(node: BinaryExpr, left: Number, right: Number) -> Number:
    """Apply ``node``'s operator to operands that are already evaluated."""
    try:
        return _ARITHMETIC[node.op](left, right)
    except (ZeroDivisionError, TypeError, OverflowError) as e:
        logger.debug("Arithmetic failed for %s %s %s: %s", left, node.op, right, e)
        raise EvaluationError(f"{_capitalize(str(e))}: {left} {node.op} {right}") from e


def _resolve(node: Variable, scope: Scope) -> Node:
    """Look a variable up in the current call scope."""
    bound = scope.get(node.name)
    if bound is None:
        raise EvaluationError(f"Unresolved variable: {node.name}")
    return bound


def _bind(call: FunctionCall, scope: Scope) -> dict[str, Node]:
    """
    Build the scope a call's body runs in.

    Arguments are evaluated in the caller's scope and bound as literals, so
    the body never sees the caller's parameters.
    """
    bound: dict[str, Node] = {}
    for name, arg in call.scope.items():
        result = evaluate(arg, scope)
        if isinstance(result, bool):
            bound[name] = BoolLiteral(value=result)
        else:
            bound[name] = NumberLiteral(value=result)
    return bound


def _capitalize(message: str) -> str:
    return message[:1].upper() + message[1:]

"""Stand-in evaluator used when no external interpreter is configured.

Understands Monkey's integer and boolean expressions (``1 + 2``,
``-5 * 3``, ``!true``, ``1 < 2``), with ``;`` separating statements.
The value of the last statement is returned, formatted the way the
Monkey REPL inspects objects. Anything else raises ``EvaluationError``.

Source is parsed with Python's expression grammar and then held to
Monkey's rules: only ``true``/``false`` are booleans, ``!`` binds as
tightly as unary minus, comparisons apply left to right instead of
chaining, and mixing integers with booleans is a type mismatch.
Monkey gives ``==`` a lower precedence than ``<``; here they share one
level, so ``true == 1 < 2`` is a type mismatch rather than ``true``.
"""

from __future__ import annotations

import ast
import re


class EvaluationError(ValueError):
    pass


# Python's ``~`` sits at the same precedence as unary minus, which is where Monkey puts ``!``.
_BANG = re.compile(r"!(?!=)")
_LITERALS = {"true": True, "false": False}


def _inspect(value: int | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _truncating_div(left: int, right: int) -> int:
    if right == 0:
        raise EvaluationError("division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _bang(operand: int | bool) -> bool:
    if isinstance(operand, bool):
        return not operand
    return False


def _compare(op: ast.cmpop, left: int | bool, right: int | bool) -> bool:
    if isinstance(left, bool) != isinstance(right, bool):
        raise EvaluationError("type mismatch")
    if isinstance(op, ast.Eq):
        return left == right
    if isinstance(op, ast.NotEq):
        return left != right
    if isinstance(op, (ast.Lt, ast.Gt)) and not isinstance(left, bool):
        return left < right if isinstance(op, ast.Lt) else left > right
    raise EvaluationError("unknown operator")


def _eval_node(node: ast.AST) -> int | bool:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)

    if isinstance(node, ast.Constant) and type(node.value) is int:
        return node.value

    if isinstance(node, ast.Name) and node.id in _LITERALS:
        return _LITERALS[node.id]

    if isinstance(node, ast.UnaryOp):
        operand = _eval_node(node.operand)
        if isinstance(node.op, ast.Invert):
            return _bang(operand)
        if isinstance(node.op, ast.USub) and not isinstance(operand, bool):
            return -operand
        raise EvaluationError("unknown operator")

    if isinstance(node, ast.BinOp):
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(left, bool) != isinstance(right, bool):
            raise EvaluationError("type mismatch")
        if isinstance(left, bool):
            raise EvaluationError("unknown operator")
        if isinstance(node.op, ast.Add):
            return left + right
        if isinstance(node.op, ast.Sub):
            return left - right
        if isinstance(node.op, ast.Mult):
            return left * right
        if isinstance(node.op, ast.Div):
            return _truncating_div(left, right)
        raise EvaluationError("unknown operator")

    if isinstance(node, ast.Compare):
        result = _eval_node(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            result = _compare(op, result, _eval_node(comparator))
        return result

    raise EvaluationError(f"unsupported syntax: {type(node).__name__}")


def evaluate(source: str) -> str:
    statements = [part.strip() for part in source.split(";")]
    statements = [part for part in statements if part]
    if not statements:
        return ""

    value: int | bool = 0
    for statement in statements:
        if "~" in statement:
            raise EvaluationError("illegal token: ~")
        try:
            tree = ast.parse(_BANG.sub("~", statement), mode="eval")
        except SyntaxError as exc:
            raise EvaluationError(f"can't parse: {statement}") from exc
        value = _eval_node(tree)
    return _inspect(value)

# SymCalc SDK - Symbolic Simplification
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Algebraic simplification for SymCalc expressions.

Simplification keeps derived trees small. It does not aim at a full normal
form; it applies a fixed set of rewrites:

1. Constant folding (2 * x * 3 -> 6 * x)
2. Like-term collection in sums (2*x + 3*x -> 5*x)
3. Cancellation of identical terms (x - x -> 0)
4. Cancellation of identical factors (x * y / x -> y)

Example:
    >>> x = var('x')
    >>> simplify(2 * x * 3 - x * 6)
    const(0)
"""

from __future__ import annotations
from typing import Union

from .exceptions import ExpressionDepthError, UnsupportedNodeKindError
from .expr import (
    Add, Call, Const, Div, Expr, Formula, Mul, Neg, Sub, Variable, ZERO,
    identical_to,
)
from .terms import Term, construct_sum, deconstruct_sum, fold_constants


def simplify(e: Union[Expr, Formula]) -> Union[Expr, Formula]:
    """
    Simplify an expression (or a formula's body).

    Idempotent: simplifying a simplified tree gives an identical tree.

    Raises:
        UnsupportedNodeKindError: If the tree contains an unknown node type.
        ExpressionDepthError: If the tree is too deep to traverse.
    """
    if isinstance(e, Formula):
        return e.with_body(simplify(e.body))
    try:
        return simplify_expr(e)
    except RecursionError as exc:
        raise ExpressionDepthError("Expression is too deep to simplify") from exc


def simplify_expr(e: Expr) -> Expr:
    """Simplify without the recursion guard; used inside the engine."""
    if isinstance(e, (Add, Sub, Neg)):
        return cancel(e)

    if isinstance(e, (Mul, Div)):
        return reduce(e)

    if isinstance(e, Call):
        return Call(e.name, tuple(simplify_expr(arg) for arg in e.args))

    if isinstance(e, (Variable, Const)):
        return e

    raise UnsupportedNodeKindError(type(e).__name__, "simplify")


def cancel(e: Expr) -> Expr:
    """Cancel and collect the terms of a sum."""
    return construct_sum(deconstruct_sum(e))


def reduce(e: Expr) -> Expr:
    """Fold constants and cancel common factors of a product or quotient."""
    return fold_constants(e).to_expr()


# Simplifying combinators. The differentiator builds trees with these
# instead of the raw node constructors.

def simplified_negate(e: Expr) -> Expr:
    """Negate with simplification such as -(-x) -> x."""
    if isinstance(e, Const):
        return Const(-e.value)

    if isinstance(e, Neg):
        return simplify_expr(e.e)

    return fold_constants(e).negated().to_expr()


def simplified_add(left: Expr, right: Expr) -> Expr:
    """Add with simplification such as x + 0 -> x and 2*x + 3*x -> 5*x."""
    if isinstance(left, Const):
        if left.value == 0:
            return simplify_expr(right)
        if isinstance(right, Const):
            return Const(left.value + right.value)

    if isinstance(right, Const) and right.value == 0:
        return simplify_expr(left)

    if identical_to(left, right):
        t = fold_constants(left)
        return Term(2.0 * t.coefficient, t.body).to_expr()

    t1 = fold_constants(left)
    t2 = fold_constants(right)

    if identical_to(t1.body, t2.body):
        return Term(t1.coefficient + t2.coefficient, t1.body).to_expr()

    return Add(t1.to_expr(), t2.to_expr())


def simplified_sub(left: Expr, right: Expr) -> Expr:
    """Subtract with simplification such as x - 0 -> x and x - x -> 0."""
    if isinstance(left, Const):
        if left.value == 0:
            return simplified_negate(right)
        if isinstance(right, Const):
            return Const(left.value - right.value)

    if isinstance(right, Const) and right.value == 0:
        return simplify_expr(left)

    if identical_to(left, right):
        return ZERO

    t1 = fold_constants(left)
    t2 = fold_constants(right)

    if identical_to(t1.body, t2.body):
        return Term(t1.coefficient - t2.coefficient, t1.body).to_expr()

    return Sub(t1.to_expr(), t2.to_expr())


def simplified_mul(left: Expr, right: Expr) -> Expr:
    """Multiply with simplification such as x * 3 * x * 2 -> 6 * x * x."""
    return fold_constants(Mul(left, right)).to_expr()


def simplified_div(left: Expr, right: Expr) -> Expr:
    """Divide with simplification such as x / x -> 1."""
    return fold_constants(Div(left, right)).to_expr()

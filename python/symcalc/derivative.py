# SymCalc SDK - Symbolic Differentiation
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Exact differentiation by structural rule application.

The derivative is built with the simplifying combinators at every node, so
intermediate trees stay small, and the final result is simplified once more.

Example:
    >>> x = var('x')
    >>> differentiate(x * x, 'x')
    (const(2) * var('x'))
    >>> differentiate(formula(sin(x), 'x'))
    formula(Cos(var('x')), 'x')
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from .config import Config
from .exceptions import ExpressionDepthError, UnsupportedNodeKindError
from .expr import (
    Add, Call, Const, Div, Expr, Formula, Mul, Neg, Sub, Variable, ONE, ZERO,
    as_formula,
)
from .functions import lookup
from .simplify import (
    simplified_add,
    simplified_div,
    simplified_mul,
    simplified_negate,
    simplified_sub,
    simplify_expr,
)

logger = logging.getLogger(__name__)


def differentiate(
    f: Union[Expr, Formula],
    var: Optional[str] = None,
    config: Optional[Config] = None,
) -> Union[Expr, Formula]:
    """
    Differentiate an expression or formula.

    Without ``var`` this is the total derivative and the formula must have
    exactly one parameter (a bare expression's parameters are its free
    variables). With ``var``, every other variable is held constant; for a
    formula that does not declare ``var`` the result is const(0).

    Args:
        f: Expression or formula to differentiate.
        var: Name of the variable to differentiate with respect to.
        config: Optional configuration.

    Returns:
        The derivative, of the same kind (Expr or Formula) as ``f``.

    Raises:
        InvalidParameterCountError: If ``var`` is omitted and ``f`` does not
            have exactly one parameter.
        UnsupportedNodeKindError: If the tree contains an unknown node type.
        UnsupportedFunctionError: If a call names an unknown function/arity.
        UnsupportedDerivativeError: For f(x)^g(x) and similar.
    """
    config = config or Config()

    if isinstance(f, Formula):
        if var is None:
            var = f.param
        elif var not in f.params:
            logger.debug("'%s' is not a parameter of %s; derivative is zero", var, f)
            return f.with_body(ZERO)
        return f.with_body(_differentiate_body(f.body, var, config))

    if isinstance(f, Expr):
        if var is None:
            var = as_formula(f).param
        return _differentiate_body(f, var, config)

    raise TypeError(f"Expected Expr or Formula, got {type(f).__name__}")


def differentiate_n(
    f: Union[Expr, Formula],
    n: int,
    var: Optional[str] = None,
    config: Optional[Config] = None,
) -> Union[Expr, Formula]:
    """
    Differentiate ``n`` times, re-simplifying after each step.

    The variable is resolved once from the input, so later derivatives that
    no longer mention it (e.g. constants) are still handled.
    """
    if not isinstance(n, int) or n < 0:
        raise ValueError(f"Derivative order must be a non-negative integer, got {n!r}")

    if var is None:
        var = f.param if isinstance(f, Formula) else as_formula(f).param

    logger.debug("Differentiating %d time(s) with respect to '%s'", n, var)
    result = f
    for _ in range(n):
        result = differentiate(result, var, config)
    return result


def _differentiate_body(body: Expr, var: str, config: Config) -> Expr:
    logger.debug("Differentiating with respect to '%s'", var)
    try:
        if config.simplify_input:
            body = simplify_expr(body)
        return simplify_expr(derive(body, var))
    except RecursionError as exc:
        raise ExpressionDepthError("Expression is too deep to differentiate") from exc


def derive(e: Expr, var: str) -> Expr:
    """
    Partial derivative of ``e`` with respect to ``var``.

    This is the raw recursion; differentiate() adds parameter handling and
    the final simplification.
    """
    if isinstance(e, Const):
        return ZERO

    if isinstance(e, Variable):
        return ONE if e.name == var else ZERO

    if isinstance(e, Neg):
        return simplified_negate(derive(e.e, var))

    if isinstance(e, Add):
        return simplified_add(derive(e.e1, var), derive(e.e2, var))

    if isinstance(e, Sub):
        return simplified_sub(derive(e.e1, var), derive(e.e2, var))

    if isinstance(e, Mul):
        # (uv)' = u v' + u' v
        u, v = e.e1, e.e2
        du, dv = derive(u, var), derive(v, var)
        return simplified_add(simplified_mul(u, dv), simplified_mul(du, v))

    if isinstance(e, Div):
        # (u/v)' = (u' v - u v') / (v v)
        u, v = e.e1, e.e2
        du, dv = derive(u, var), derive(v, var)
        return simplified_div(
            simplified_sub(simplified_mul(du, v), simplified_mul(u, dv)),
            simplified_mul(v, v),
        )

    if isinstance(e, Call):
        spec = lookup(e.name, len(e.args))
        return spec.derivative(e.args, lambda sub: derive(sub, var))

    raise UnsupportedNodeKindError(type(e).__name__, "differentiate")

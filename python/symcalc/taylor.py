# SymCalc SDK - Taylor Series
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Truncated Taylor/Maclaurin series by repeated symbolic differentiation.

The n-th order expansion around ``a`` is

    sum_{i=0}^{n} f^(i)(a) / i! * (x - a)^i

where each f^(i) is computed symbolically and evaluated numerically at
``a``. Derivative values within the configured tolerance of zero become
exact zero coefficients, so floating noise does not add spurious terms.

Example:
    >>> x = var('x')
    >>> p = maclaurin_expand(formula(exp(x), 'x'), 3)
    >>> round(p(0.1), 6)
    1.105167
"""

from __future__ import annotations
import logging
import math
from typing import List, Optional, Union

from .config import Config
from .derivative import differentiate
from .exceptions import ExpressionDepthError, OrderTooLargeError
from .expr import Call, Const, Expr, Formula, Variable, as_formula
from .simplify import simplified_add, simplified_mul, simplified_sub, simplify_expr

logger = logging.getLogger(__name__)


def _check_order(n: int, config: Config) -> None:
    if not isinstance(n, int) or n < 0:
        raise ValueError(f"Expansion order must be a non-negative integer, got {n!r}")
    if n > config.max_taylor_order:
        raise OrderTooLargeError(n, config.max_taylor_order)


def taylor_coefficients(
    f: Union[Expr, Formula],
    n: int,
    a: float = 0.0,
    config: Optional[Config] = None,
) -> List[float]:
    """
    Return the ``n + 1`` coefficients f^(i)(a) / i! of the expansion.

    Raises:
        InvalidParameterCountError: If ``f`` does not have exactly one parameter.
        OrderTooLargeError: If ``n`` exceeds the configured ceiling.
    """
    config = config or Config()
    _check_order(n, config)
    fn = as_formula(f)
    var = fn.param
    a = float(a)

    logger.debug("Taylor coefficients of %s: order %d around %s", fn, n, a)

    coefficients = [float(fn(a))]
    derivative: Formula = fn
    for i in range(1, n + 1):
        derivative = differentiate(derivative, var, config)
        value = float(derivative(a))
        if math.isclose(value, 0.0, abs_tol=config.zero_tolerance):
            coefficients.append(0.0)
        else:
            coefficients.append(value / math.factorial(i))
    return coefficients


def taylor_expand(
    f: Union[Expr, Formula],
    n: int,
    a: float = 0.0,
    config: Optional[Config] = None,
) -> Union[Expr, Formula]:
    """
    Compute the n-th order Taylor expansion of ``f`` around ``a``.

    The series is built in powers of ``x - a`` for the formula's parameter
    ``x``. That shift is used whatever the outer node is, including when
    ``f`` is itself a function call of a shifted argument.

    Args:
        f: Single-parameter expression or formula.
        n: Expansion order, at most ``config.max_taylor_order``.
        a: Expansion point.
        config: Optional configuration.

    Returns:
        The polynomial, of the same kind (Expr or Formula) as ``f``.
    """
    config = config or Config()
    _check_order(n, config)
    fn = as_formula(f)
    coefficients = taylor_coefficients(fn, n, a, config)

    try:
        shift = simplified_sub(Variable(fn.param), Const(float(a)))
        result = simplify_expr(Const(coefficients[0]))
        for i, c in enumerate(coefficients[1:], start=1):
            power = Call('Pow', (shift, Const(float(i))))
            result = simplified_add(result, simplified_mul(Const(c), power))
    except RecursionError as exc:
        raise ExpressionDepthError("Taylor series is too deep to assemble") from exc

    if isinstance(f, Formula):
        return f.with_body(result)
    return result


def maclaurin_expand(
    f: Union[Expr, Formula],
    n: int,
    config: Optional[Config] = None,
) -> Union[Expr, Formula]:
    """Compute the n-th order Maclaurin expansion (Taylor around 0)."""
    return taylor_expand(f, n, 0.0, config)

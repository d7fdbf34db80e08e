# SymCalc SDK - Numeric Calculus
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Finite-difference derivatives and trapezoidal integration.

These work on plain callables as well as single-parameter expressions and
formulas. They are independent of the symbolic engine and are mostly
useful to cross-check its results.

Accuracy degrades quickly with the derivative order and for oscillating
functions.
"""

from __future__ import annotations
import logging
import math
from typing import Callable, Union

import numpy as np

from .expr import Expr, Formula, as_formula

logger = logging.getLogger(__name__)

Function = Union[Callable[[float], float], Expr, Formula]

DEFAULT_STEP = 1.0e-5


def _as_vectorized(f: Function) -> Callable[[np.ndarray], np.ndarray]:
    if isinstance(f, (Expr, Formula)):
        fn = as_formula(f)
        name = fn.param
        # A body free of the variable evaluates to a scalar
        return lambda xs: np.broadcast_to(
            np.asarray(fn.evaluate({name: xs}), dtype=float), np.shape(xs)
        )
    if callable(f):
        return lambda xs: np.array([f(float(x)) for x in xs], dtype=float)
    raise TypeError(f"Expected a callable, Expr or Formula, got {type(f).__name__}")


def numerical_derivative(f: Function, x: float, n: int = 1, h: float = DEFAULT_STEP) -> float:
    """
    Approximate the n-th derivative of f at x by central differences.

    n = 1 uses the five-point stencil, n = 2 the three-point stencil and
    higher orders the binomial central difference. For n >= 3 the step is
    widened by a factor of 10 for every second order to limit cancellation.

    Args:
        f: Function to differentiate.
        x: Point of evaluation.
        n: Derivative order (>= 1).
        h: Base step size.
    """
    if not isinstance(n, int) or n < 1:
        raise ValueError(f"Derivative order must be a positive integer, got {n!r}")
    fv = _as_vectorized(f)

    if n == 1:
        values = fv(np.array([x - 2.0 * h, x - h, x + h, x + 2.0 * h]))
        weights = np.array([1.0, -8.0, 8.0, -1.0])
        return float(np.dot(weights, values) / (12.0 * h))

    if n == 2:
        values = fv(np.array([x + h, x, x - h]))
        return float((values[0] - 2.0 * values[1] + values[2]) / (h * h))

    multiplier = 1.0
    for i in range(1, n):
        if i % 2 == 0:
            multiplier *= 10.0
    if multiplier != 1.0:
        multiplier *= 10.0
    h *= multiplier

    k = np.arange(n + 1)
    offsets = (n / 2.0 - k) * h
    weights = np.array([(-1) ** i * math.comb(n, i) for i in range(n + 1)], dtype=float)
    values = fv(x + offsets)
    logger.debug("Central difference of order %d at %s with step %g", n, x, h)
    return float(np.dot(weights, values) / h ** n)


def integrate(f: Function, a: float, b: float, n: int = 1000) -> float:
    """
    Integrate f over [a, b] with the composite trapezoidal rule.

    Args:
        f: Function to integrate.
        a: Lower bound.
        b: Upper bound.
        n: Number of sub-intervals.
    """
    if not isinstance(n, int) or n < 1:
        raise ValueError(f"Number of intervals must be a positive integer, got {n!r}")
    xs = np.linspace(a, b, n + 1)
    ys = _as_vectorized(f)(xs)
    step = (b - a) / n
    return float(step * ((ys[0] + ys[-1]) / 2.0 + ys[1:-1].sum()))

# SymCalc SDK - Elementary Function Table
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
The table of elementary functions a Call node may name.

Each entry is keyed by (name, arity) and carries both the numeric evaluator
and the chain-rule derivative, so every differentiable call is also
evaluable and vice versa.

A derivative rule receives the call's arguments and a callback that
differentiates a sub-expression with respect to the active variable. The
rule is responsible for multiplying by the inner derivative.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np

from .exceptions import UnsupportedDerivativeError, UnsupportedFunctionError
from .expr import Call, Const, Expr, ONE, ZERO, is_zero_constant
from .simplify import (
    simplified_add,
    simplified_div,
    simplified_mul,
    simplified_negate,
    simplified_sub,
)


Differentiate = Callable[[Expr], Expr]
DerivativeRule = Callable[[Tuple[Expr, ...], Differentiate], Expr]

TWO = Const(2.0)


@dataclass(frozen=True)
class FunctionSpec:
    """An elementary function: name, arity, evaluator and derivative rule."""
    name: str
    arity: int
    evaluate: Callable[..., object]
    derivative: DerivativeRule

    def __repr__(self) -> str:
        return f"FunctionSpec({self.name}/{self.arity})"


def _square(u: Expr) -> Expr:
    return Call('Pow', (u, TWO))


# Derivative rules

def _d_sin(args, d):
    return simplified_mul(d(args[0]), Call('Cos', args))


def _d_cos(args, d):
    return simplified_mul(d(args[0]), simplified_negate(Call('Sin', args)))


def _d_tan(args, d):
    cos = Call('Cos', args)
    return simplified_div(d(args[0]), simplified_mul(cos, cos))


def _d_exp(args, d):
    return simplified_mul(d(args[0]), Call('Exp', args))


def _d_log(args, d):
    return simplified_div(d(args[0]), args[0])


def _d_log_base(args, d):
    u, base = args
    if not is_zero_constant(d(base)):
        raise UnsupportedDerivativeError('Log', "the base depends on the variable")
    # d/dx log_b(u) = u' / (u ln b)
    return simplified_div(d(u), simplified_mul(u, Call('Log', (base,))))


def _d_log10(args, d):
    u = args[0]
    return simplified_div(d(u), simplified_mul(u, Call('Log', (Const(10.0),))))


def _d_pow(args, d):
    u, v = args
    du = d(u)
    dv = d(v)

    if is_zero_constant(du) and is_zero_constant(dv):
        return ZERO

    # f(x)^a: a * f(x)^(a-1) * f'(x)
    if is_zero_constant(dv):
        return simplified_mul(
            simplified_mul(v, du),
            Call('Pow', (u, simplified_sub(v, ONE))),
        )

    # a^f(x): a^f(x) * ln(a) * f'(x)
    if is_zero_constant(du):
        return simplified_mul(
            simplified_mul(Call('Pow', args), Call('Log', (u,))),
            dv,
        )

    raise UnsupportedDerivativeError(
        'Pow', "both base and exponent depend on the variable (f(x)^g(x))"
    )


def _d_sqrt(args, d):
    return d(Call('Pow', (args[0], Const(1.0 / 2.0))))


def _d_cbrt(args, d):
    return d(Call('Pow', (args[0], Const(1.0 / 3.0))))


def _d_asin(args, d):
    # u' / sqrt(1 - u^2)
    denominator = Call('Sqrt', (simplified_sub(ONE, _square(args[0])),))
    return simplified_div(d(args[0]), denominator)


def _d_acos(args, d):
    return simplified_negate(_d_asin(args, d))


def _d_atan(args, d):
    # u' / (1 + u^2)
    return simplified_div(d(args[0]), simplified_add(ONE, _square(args[0])))


def _d_sinh(args, d):
    return simplified_mul(d(args[0]), Call('Cosh', args))


def _d_cosh(args, d):
    return simplified_mul(d(args[0]), Call('Sinh', args))


def _d_tanh(args, d):
    # u' / cosh^2(u)
    return simplified_div(d(args[0]), _square(Call('Cosh', args)))


def _d_asinh(args, d):
    # u' / sqrt(1 + u^2)
    denominator = Call('Sqrt', (simplified_add(ONE, _square(args[0])),))
    return simplified_div(d(args[0]), denominator)


def _d_acosh(args, d):
    # u' / sqrt(u^2 - 1)
    denominator = Call('Sqrt', (simplified_sub(_square(args[0]), ONE),))
    return simplified_div(d(args[0]), denominator)


def _d_atanh(args, d):
    # u' / (1 - u^2)
    return simplified_div(d(args[0]), simplified_sub(ONE, _square(args[0])))


def _log_base(a, b):
    return np.log(a) / np.log(b)


_SPECS = [
    FunctionSpec('Sin', 1, np.sin, _d_sin),
    FunctionSpec('Cos', 1, np.cos, _d_cos),
    FunctionSpec('Tan', 1, np.tan, _d_tan),
    FunctionSpec('Exp', 1, np.exp, _d_exp),
    FunctionSpec('Log', 1, np.log, _d_log),
    FunctionSpec('Log', 2, _log_base, _d_log_base),
    FunctionSpec('Log10', 1, np.log10, _d_log10),
    FunctionSpec('Pow', 2, np.float_power, _d_pow),
    FunctionSpec('Sqrt', 1, np.sqrt, _d_sqrt),
    FunctionSpec('Cbrt', 1, np.cbrt, _d_cbrt),
    FunctionSpec('Asin', 1, np.arcsin, _d_asin),
    FunctionSpec('Acos', 1, np.arccos, _d_acos),
    FunctionSpec('Atan', 1, np.arctan, _d_atan),
    FunctionSpec('Sinh', 1, np.sinh, _d_sinh),
    FunctionSpec('Cosh', 1, np.cosh, _d_cosh),
    FunctionSpec('Tanh', 1, np.tanh, _d_tanh),
    FunctionSpec('Asinh', 1, np.arcsinh, _d_asinh),
    FunctionSpec('Acosh', 1, np.arccosh, _d_acosh),
    FunctionSpec('Atanh', 1, np.arctanh, _d_atanh),
]

FUNCTIONS: Dict[Tuple[str, int], FunctionSpec] = {
    (spec.name, spec.arity): spec for spec in _SPECS
}

SUPPORTED_FUNCTIONS = sorted({spec.name for spec in _SPECS})


def lookup(name: str, arity: int) -> FunctionSpec:
    """
    Find the table entry for a call.

    Raises:
        UnsupportedFunctionError: If the name is unknown, or known but not
            with this number of arguments.
    """
    spec = FUNCTIONS.get((name, arity))
    if spec is None:
        if name in SUPPORTED_FUNCTIONS:
            raise UnsupportedFunctionError(name, arity)
        raise UnsupportedFunctionError(name)
    return spec

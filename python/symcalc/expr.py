# SymCalc SDK - Symbolic Expressions
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Symbolic expression trees for SymCalc.

This module provides the immutable expression model the engine operates on.
Expressions support natural Python math syntax and evaluate numerically
against a binding of their free variables.

Example:
    >>> x = var('x')
    >>> expr = x * x + sin(x)
    >>> expr.free_vars()
    frozenset({'x'})
    >>> f = formula(expr, 'x')
    >>> f(0.0)
    0.0
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, FrozenSet, Mapping, Optional, Union

import numpy as np

from .exceptions import EvaluationError, ExpressionDepthError, InvalidParameterCountError


# Type for evaluation environment; values may be scalars or numpy arrays
EvalEnv = Mapping[str, Any]
EvalResult = Union[float, np.ndarray]

# Type alias for things that can be converted to expressions
ExprLike = Union['Expr', int, float, Fraction]


class Expr(ABC):
    """
    Base class for symbolic expressions.

    Expressions are immutable and can be composed using Python operators.
    Equality (``==``) is strict structural equality; use identical_to() for
    the engine's commutativity-aware comparison.
    """

    kind: str = 'expr'

    @abstractmethod
    def free_vars(self) -> FrozenSet[str]:
        """Return all variable names used in this expression."""
        ...

    @abstractmethod
    def evaluate(self, env: EvalEnv) -> EvalResult:
        """
        Evaluate the expression numerically.

        Arithmetic follows IEEE double semantics: division by zero and
        out-of-domain function arguments produce inf/nan instead of raising.
        Bind a variable to a numpy array to evaluate at many points at once.

        Args:
            env: Mapping from variable names to values.

        Returns:
            The value (numpy scalar or array).

        Raises:
            EvaluationError: If a required variable is not in env.
            UnsupportedFunctionError: If a Call names an unknown function.
        """
        ...

    def identical_to(self, other: Optional[Expr]) -> bool:
        """Check structural identity with another expression (see identical_to())."""
        return identical_to(self, other)

    # Operator overloading for natural math syntax
    def __neg__(self) -> Expr:
        return Neg(self)

    def __add__(self, other: ExprLike) -> Expr:
        return Add(self, _to_expr(other))

    def __radd__(self, other: ExprLike) -> Expr:
        return Add(_to_expr(other), self)

    def __sub__(self, other: ExprLike) -> Expr:
        return Sub(self, _to_expr(other))

    def __rsub__(self, other: ExprLike) -> Expr:
        return Sub(_to_expr(other), self)

    def __mul__(self, other: ExprLike) -> Expr:
        return Mul(self, _to_expr(other))

    def __rmul__(self, other: ExprLike) -> Expr:
        return Mul(_to_expr(other), self)

    def __truediv__(self, other: ExprLike) -> Expr:
        return Div(self, _to_expr(other))

    def __rtruediv__(self, other: ExprLike) -> Expr:
        return Div(_to_expr(other), self)

    def __pow__(self, other: ExprLike) -> Expr:
        return Call('Pow', (self, _to_expr(other)))

    def __rpow__(self, other: ExprLike) -> Expr:
        return Call('Pow', (_to_expr(other), self))


def _to_expr(x: ExprLike) -> Expr:
    """Convert a value to an Expr."""
    if isinstance(x, Expr):
        return x
    elif isinstance(x, (int, float, Fraction, np.number)):
        return Const(x)
    else:
        raise TypeError(f"Cannot convert {type(x).__name__} to Expr")


def _format_number(v: float) -> str:
    if v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


@dataclass(frozen=True)
class Variable(Expr):
    """A free variable reference."""
    name: str

    kind = 'var'

    def free_vars(self) -> FrozenSet[str]:
        return frozenset({self.name})

    def evaluate(self, env: EvalEnv) -> EvalResult:
        if self.name not in env:
            raise EvaluationError(f"Variable '{self.name}' not in environment")
        return env[self.name]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"var('{self.name}')"


@dataclass(frozen=True)
class Const(Expr):
    """A real constant."""
    value: float

    kind = 'const'

    def __post_init__(self):
        # Bypass frozen dataclass __setattr__
        object.__setattr__(self, 'value', float(self.value))

    def free_vars(self) -> FrozenSet[str]:
        return frozenset()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return np.float64(self.value)

    def __str__(self) -> str:
        text = _format_number(self.value)
        return f"({text})" if self.value < 0 else text

    def __repr__(self) -> str:
        return f"const({_format_number(self.value)})"


# Unary operations

@dataclass(frozen=True)
class Neg(Expr):
    """Negation: -e."""
    e: Expr

    kind = 'neg'

    def free_vars(self) -> FrozenSet[str]:
        return self.e.free_vars()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return -self.e.evaluate(env)

    def __str__(self) -> str:
        return f"(-{self.e})"

    def __repr__(self) -> str:
        return f"(-{self.e!r})"


# Binary operations

@dataclass(frozen=True)
class Add(Expr):
    """Addition: e1 + e2."""
    e1: Expr
    e2: Expr

    kind = 'add'

    def free_vars(self) -> FrozenSet[str]:
        return self.e1.free_vars() | self.e2.free_vars()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return self.e1.evaluate(env) + self.e2.evaluate(env)

    def __str__(self) -> str:
        return f"({self.e1} + {self.e2})"

    def __repr__(self) -> str:
        return f"({self.e1!r} + {self.e2!r})"


@dataclass(frozen=True)
class Sub(Expr):
    """Subtraction: e1 - e2."""
    e1: Expr
    e2: Expr

    kind = 'sub'

    def free_vars(self) -> FrozenSet[str]:
        return self.e1.free_vars() | self.e2.free_vars()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return self.e1.evaluate(env) - self.e2.evaluate(env)

    def __str__(self) -> str:
        return f"({self.e1} - {self.e2})"

    def __repr__(self) -> str:
        return f"({self.e1!r} - {self.e2!r})"


@dataclass(frozen=True)
class Mul(Expr):
    """Multiplication: e1 * e2."""
    e1: Expr
    e2: Expr

    kind = 'mul'

    def free_vars(self) -> FrozenSet[str]:
        return self.e1.free_vars() | self.e2.free_vars()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return self.e1.evaluate(env) * self.e2.evaluate(env)

    def __str__(self) -> str:
        return f"({self.e1} * {self.e2})"

    def __repr__(self) -> str:
        return f"({self.e1!r} * {self.e2!r})"


@dataclass(frozen=True)
class Div(Expr):
    """Division: e1 / e2."""
    e1: Expr
    e2: Expr

    kind = 'div'

    def free_vars(self) -> FrozenSet[str]:
        return self.e1.free_vars() | self.e2.free_vars()

    def evaluate(self, env: EvalEnv) -> EvalResult:
        # np.true_divide gives inf/nan on zero division, like IEEE doubles
        return np.true_divide(self.e1.evaluate(env), self.e2.evaluate(env))

    def __str__(self) -> str:
        return f"({self.e1} / {self.e2})"

    def __repr__(self) -> str:
        return f"({self.e1!r} / {self.e2!r})"


@dataclass(frozen=True)
class Call(Expr):
    """
    Application of a named elementary function.

    The name and arity are checked against the function table only when the
    call is evaluated or differentiated.
    """
    name: str
    args: tuple

    kind = 'call'

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError(f"Function name must be a string, got {type(self.name).__name__}")
        object.__setattr__(self, 'args', tuple(_to_expr(a) for a in self.args))

    def free_vars(self) -> FrozenSet[str]:
        result: FrozenSet[str] = frozenset()
        for arg in self.args:
            result = result | arg.free_vars()
        return result

    def evaluate(self, env: EvalEnv) -> EvalResult:
        from .functions import lookup

        spec = lookup(self.name, len(self.args))
        return spec.evaluate(*(arg.evaluate(env) for arg in self.args))

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"

    def __repr__(self) -> str:
        return f"{self.name}({', '.join(repr(a) for a in self.args)})"


@dataclass(frozen=True)
class Formula:
    """
    A function body together with its declared parameter list.

    Total derivatives and series expansions need to know which variable is
    "the" argument, which a bare expression does not record.
    """
    body: Expr
    params: tuple

    def __post_init__(self):
        object.__setattr__(self, 'body', _to_expr(self.body))
        object.__setattr__(self, 'params', tuple(self.params))
        for p in self.params:
            if not isinstance(p, str) or not p:
                raise ValueError(f"Parameter names must be non-empty strings, got {p!r}")
        if len(set(self.params)) != len(self.params):
            raise ValueError(f"Duplicate parameter names: {self.params}")

    @property
    def param(self) -> str:
        """The single parameter name."""
        if len(self.params) != 1:
            raise InvalidParameterCountError(len(self.params), self.params)
        return self.params[0]

    def with_body(self, body: Expr) -> Formula:
        """Return a formula with the same parameters and a new body."""
        return Formula(body, self.params)

    def evaluate(self, env: EvalEnv) -> EvalResult:
        return evaluate(self.body, **env)

    def __call__(self, *values: Any) -> EvalResult:
        if len(values) != len(self.params):
            raise EvaluationError(
                f"Formula takes {len(self.params)} argument(s), got {len(values)}"
            )
        return evaluate(self.body, **dict(zip(self.params, values)))

    def __str__(self) -> str:
        return f"({', '.join(self.params)}) -> {self.body}"

    def __repr__(self) -> str:
        return f"formula({self.body!r}, {', '.join(repr(p) for p in self.params)})"


def as_formula(f: Union[Formula, Expr]) -> Formula:
    """
    View an expression as a formula.

    A bare expression's parameters are its free variables in sorted order.
    """
    if isinstance(f, Formula):
        return f
    if isinstance(f, Expr):
        return Formula(f, tuple(sorted(f.free_vars())))
    raise TypeError(f"Expected Expr or Formula, got {type(f).__name__}")


# Structural identity

def identical_to(e1: Optional[Expr], e2: Optional[Expr]) -> bool:
    """
    Check whether two trees are structurally interchangeable.

    Add and Mul operands may match in either order; Sub, Div and Call
    arguments must match in order. This is a heuristic rather than full
    algebraic equivalence: ``x + 1 + y`` and ``y + 1 + x`` associate
    differently and are not identical.

    Either argument may be None (an absent term body); two absent bodies
    are identical.
    """
    if e1 is None:
        return e2 is None
    if e2 is None:
        return False

    if type(e1) is not type(e2):
        return False

    if isinstance(e1, Variable):
        return e1.name == e2.name

    if isinstance(e1, Const):
        return e1.value == e2.value

    if isinstance(e1, Neg):
        return identical_to(e1.e, e2.e)

    if isinstance(e1, (Add, Mul)):
        return (
            (identical_to(e1.e1, e2.e1) and identical_to(e1.e2, e2.e2))
            or (identical_to(e1.e1, e2.e2) and identical_to(e1.e2, e2.e1))
        )

    if isinstance(e1, (Sub, Div)):
        return identical_to(e1.e1, e2.e1) and identical_to(e1.e2, e2.e2)

    if isinstance(e1, Call):
        if e1.name != e2.name or len(e1.args) != len(e2.args):
            return False
        return all(identical_to(a, b) for a, b in zip(e1.args, e2.args))

    return False


def is_zero_constant(e: Optional[Expr]) -> bool:
    """True iff e is identical to const(0)."""
    return identical_to(e, ZERO)


def is_numeric_constant(e: Optional[Expr]) -> bool:
    """True iff e is a Const node."""
    return isinstance(e, Const)


# Evaluation

def _to_result(value: Any) -> EvalResult:
    if np.ndim(value) == 0:
        return float(value)
    return np.asarray(value, dtype=float)


def evaluate(f: Union[Expr, Formula], **bindings: Any) -> EvalResult:
    """
    Evaluate an expression or formula with keyword variable bindings.

    Scalar bindings give a float; array bindings give a numpy array.

    Example:
        >>> evaluate(var('x') * 2, x=1.5)
        3.0
    """
    body = f.body if isinstance(f, Formula) else f
    if not isinstance(body, Expr):
        raise TypeError(f"Expected Expr or Formula, got {type(f).__name__}")
    try:
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return _to_result(body.evaluate(bindings))
    except RecursionError as exc:
        raise ExpressionDepthError("Expression is too deep to evaluate") from exc


# Public constructors

def var(name: str) -> Variable:
    """Create a symbolic variable with the given name."""
    if not isinstance(name, str):
        raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Variable name cannot be empty")
    return Variable(name)


def const(value: Union[int, float, Fraction]) -> Const:
    """Create a constant expression."""
    return Const(value)


def formula(body: ExprLike, *params: str) -> Formula:
    """
    Create a formula from a body and its parameter names.

    With no parameter names, the body's free variables (sorted) are used.
    """
    body = _to_expr(body)
    if not params:
        params = tuple(sorted(body.free_vars()))
    return Formula(body, params)


ZERO = Const(0.0)
ONE = Const(1.0)


# Function constructors

def call(name: str, *args: ExprLike) -> Call:
    """Apply a function from the table by name."""
    return Call(name, tuple(_to_expr(a) for a in args))


def sin(e: ExprLike) -> Call:
    """Sine function."""
    return call('Sin', e)


def cos(e: ExprLike) -> Call:
    """Cosine function."""
    return call('Cos', e)


def tan(e: ExprLike) -> Call:
    """Tangent function."""
    return call('Tan', e)


def exp(e: ExprLike) -> Call:
    """Exponential function."""
    return call('Exp', e)


def log(e: ExprLike, base: Optional[ExprLike] = None) -> Call:
    """Natural logarithm, or logarithm to the given base."""
    if base is None:
        return call('Log', e)
    return call('Log', e, base)


def log10(e: ExprLike) -> Call:
    """Base-10 logarithm."""
    return call('Log10', e)


def pow_(base: ExprLike, exponent: ExprLike) -> Call:
    """Power base ** exponent."""
    return call('Pow', base, exponent)


def sqrt(e: ExprLike) -> Call:
    """Square root."""
    return call('Sqrt', e)


def cbrt(e: ExprLike) -> Call:
    """Cube root."""
    return call('Cbrt', e)


def asin(e: ExprLike) -> Call:
    """Arc sine."""
    return call('Asin', e)


def acos(e: ExprLike) -> Call:
    """Arc cosine."""
    return call('Acos', e)


def atan(e: ExprLike) -> Call:
    """Arc tangent."""
    return call('Atan', e)


def sinh(e: ExprLike) -> Call:
    """Hyperbolic sine."""
    return call('Sinh', e)


def cosh(e: ExprLike) -> Call:
    """Hyperbolic cosine."""
    return call('Cosh', e)


def tanh(e: ExprLike) -> Call:
    """Hyperbolic tangent."""
    return call('Tanh', e)


def asinh(e: ExprLike) -> Call:
    """Inverse hyperbolic sine."""
    return call('Asinh', e)


def acosh(e: ExprLike) -> Call:
    """Inverse hyperbolic cosine."""
    return call('Acosh', e)


def atanh(e: ExprLike) -> Call:
    """Inverse hyperbolic tangent."""
    return call('Atanh', e)

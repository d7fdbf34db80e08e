# SymCalc SDK - Exceptions
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""Exception hierarchy for SymCalc."""

from __future__ import annotations
from typing import Optional


# Node kinds the differentiator and simplifier understand
SUPPORTED_KINDS = [
    'const', 'var', 'neg', 'add', 'sub', 'mul', 'div', 'call',
]


class SymCalcError(Exception):
    """Base class for all SymCalc exceptions."""
    pass


class InvalidParameterCountError(SymCalcError):
    """Raised when a single-parameter entry point gets a formula with != 1 parameters."""

    def __init__(self, count: int, params: Optional[tuple] = None):
        message = f"Incorrect number of parameters: expected 1, got {count}"
        if params:
            message += f" ({', '.join(params)})"
        super().__init__(message)
        self.count = count
        self.params = params


class ExpressionError(SymCalcError):
    """Raised when an expression can not be handled by the engine."""

    def __init__(
        self,
        message: str,
        expression_kind: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        full_message = message
        if suggestion:
            full_message += f"\n  Suggestion: {suggestion}"
        super().__init__(full_message)
        self.expression_kind = expression_kind
        self.suggestion = suggestion


class UnsupportedNodeKindError(ExpressionError):
    """Raised when a tree contains a node type outside the supported grammar."""

    def __init__(self, kind: str, context: Optional[str] = None):
        message = f"Unsupported node kind: '{kind}'"
        if context:
            message += f" in {context}"
        suggestion = f"Supported kinds: {', '.join(SUPPORTED_KINDS)}"
        super().__init__(message, expression_kind=kind, suggestion=suggestion)


class UnsupportedFunctionError(ExpressionError):
    """Raised when a Call names an unknown function or uses an unknown arity."""

    def __init__(self, name: str, arity: Optional[int] = None):
        message = f"Unsupported function: '{name}'"
        if arity is not None:
            message += f" with {arity} argument(s)"
        suggestion = _get_suggestion_for_function(name)
        super().__init__(message, expression_kind=name, suggestion=suggestion)
        self.name = name
        self.arity = arity


class UnsupportedDerivativeError(ExpressionError):
    """Raised when a supported function has no closed derivative for its arguments."""

    def __init__(self, name: str, reason: str):
        message = f"Can not differentiate '{name}': {reason}"
        super().__init__(message, expression_kind=name)
        self.reason = reason


class OrderTooLargeError(SymCalcError):
    """Raised when a Taylor/Maclaurin order exceeds the configured ceiling."""

    def __init__(self, order: int, max_order: int):
        super().__init__(
            f"Expansion order {order} is too large; "
            f"please provide a value less than or equal to {max_order}"
        )
        self.order = order
        self.max_order = max_order


class EvaluationError(SymCalcError):
    """Raised when an expression can not be evaluated numerically."""
    pass


class ExpressionDepthError(SymCalcError):
    """Raised when an expression tree is too deep to traverse recursively."""
    pass


def _get_suggestion_for_function(name: str) -> Optional[str]:
    """Get a helpful suggestion for an unsupported function name."""
    # Lower-case spellings of supported functions
    case_fixes = {
        'sin': "Did you mean 'Sin'? Use sin(x).",
        'cos': "Did you mean 'Cos'? Use cos(x).",
        'tan': "Did you mean 'Tan'? Use tan(x).",
        'exp': "Did you mean 'Exp'? Use exp(x).",
        'log': "Did you mean 'Log'? Use log(x) or log(x, base).",
        'pow': "Did you mean 'Pow'? Use x ** y or pow_(x, y).",
        'sqrt': "Did you mean 'Sqrt'? Use sqrt(x).",
        'sinh': "Did you mean 'Sinh'? Use sinh(x).",
        'cosh': "Did you mean 'Cosh'? Use cosh(x).",
        'tanh': "Did you mean 'Tanh'? Use tanh(x).",
    }
    if name in case_fixes:
        return case_fixes[name]

    suggestions = {
        # Common alternative names
        'ln': "Did you mean 'Log'? Use log(x) for natural logarithm.",
        'log2': "log2 is not directly supported. Use log(x, 2).",
        'arcsin': "Did you mean 'Asin'? Use asin(x).",
        'arccos': "Did you mean 'Acos'? Use acos(x).",
        'arctan': "Did you mean 'Atan'? Use atan(x).",
        'arsinh': "Did you mean 'Asinh'? Use asinh(x).",
        'arcsinh': "Did you mean 'Asinh'? Use asinh(x).",
        'arccosh': "Did you mean 'Acosh'? Use acosh(x).",
        'arctanh': "Did you mean 'Atanh'? Use atanh(x).",
        'power': "Did you mean 'Pow'? Use x ** y.",
        'square': "Use x * x or x ** 2 for squaring.",
        'atan2': "atan2 is not supported. Use atan(y / x) with care about quadrants.",
        'cot': "cot is not directly supported. Use 1 / tan(x).",
        'sec': "sec is not directly supported. Use 1 / cos(x).",
        'csc': "csc is not directly supported. Use 1 / sin(x).",
        'sech': "sech is not directly supported. Use 1 / cosh(x).",
        'abs': "abs is not differentiable everywhere and is not supported.",
        'floor': "floor is not supported (discontinuous function).",
        'ceil': "ceil is not supported (discontinuous function).",
    }
    return suggestions.get(name.lower())

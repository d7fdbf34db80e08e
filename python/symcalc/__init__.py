# SymCalc SDK
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
SymCalc Python SDK - Symbolic Differentiation and Series.

This SDK represents single-variable real formulas as immutable expression
trees, differentiates them exactly, simplifies the results and builds
truncated Taylor/Maclaurin series.

Example:
    >>> import symcalc as sc
    >>> x = sc.var('x')
    >>> sc.differentiate(x * x, 'x')
    (const(2) * var('x'))
    >>> p = sc.maclaurin_expand(sc.exp(x), 3)
    >>> sc.evaluate(p, x=0.1)  # close to exp(0.1)

Key Features:
    - Frozen dataclass expression trees with natural Python syntax
    - Chain-rule table for 18 elementary functions
    - Term-collecting, factor-cancelling simplifier
    - Vectorised numpy evaluation
"""

__version__ = "0.1.0"

# Core expression types and constructors
from .expr import (
    Expr,
    Variable,
    Const,
    Neg,
    Add,
    Sub,
    Mul,
    Div,
    Call,
    Formula,
    var,
    const,
    formula,
    call,
    sin,
    cos,
    tan,
    exp,
    log,
    log10,
    pow_,
    sqrt,
    cbrt,
    asin,
    acos,
    atan,
    sinh,
    cosh,
    tanh,
    asinh,
    acosh,
    atanh,
    # Predicates and evaluation
    identical_to,
    is_zero_constant,
    is_numeric_constant,
    evaluate,
)

# Function table
from .functions import FUNCTIONS, SUPPORTED_FUNCTIONS, FunctionSpec

# Configuration
from .config import Config, MAX_TAYLOR_ORDER

# Simplification
from .simplify import (
    simplify,
    simplified_add,
    simplified_sub,
    simplified_mul,
    simplified_div,
    simplified_negate,
)

# Differentiation
from .derivative import differentiate, differentiate_n

# Series
from .taylor import taylor_expand, maclaurin_expand, taylor_coefficients

# Numeric calculus
from .numeric import numerical_derivative, integrate

# Exceptions
from .exceptions import (
    SymCalcError,
    InvalidParameterCountError,
    ExpressionError,
    UnsupportedNodeKindError,
    UnsupportedFunctionError,
    UnsupportedDerivativeError,
    OrderTooLargeError,
    EvaluationError,
    ExpressionDepthError,
    SUPPORTED_KINDS,
)

__all__ = [
    # Version
    "__version__",
    # Expression types
    "Expr",
    "Variable",
    "Const",
    "Neg",
    "Add",
    "Sub",
    "Mul",
    "Div",
    "Call",
    "Formula",
    # Expression constructors
    "var",
    "const",
    "formula",
    "call",
    "sin",
    "cos",
    "tan",
    "exp",
    "log",
    "log10",
    "pow_",
    "sqrt",
    "cbrt",
    "asin",
    "acos",
    "atan",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    # Predicates and evaluation
    "identical_to",
    "is_zero_constant",
    "is_numeric_constant",
    "evaluate",
    # Function table
    "FUNCTIONS",
    "SUPPORTED_FUNCTIONS",
    "FunctionSpec",
    # Configuration
    "Config",
    "MAX_TAYLOR_ORDER",
    # Simplification
    "simplify",
    "simplified_add",
    "simplified_sub",
    "simplified_mul",
    "simplified_div",
    "simplified_negate",
    # Differentiation
    "differentiate",
    "differentiate_n",
    # Series
    "taylor_expand",
    "maclaurin_expand",
    "taylor_coefficients",
    # Numeric calculus
    "numerical_derivative",
    "integrate",
    # Exceptions
    "SymCalcError",
    "InvalidParameterCountError",
    "ExpressionError",
    "UnsupportedNodeKindError",
    "UnsupportedFunctionError",
    "UnsupportedDerivativeError",
    "OrderTooLargeError",
    "EvaluationError",
    "ExpressionDepthError",
    "SUPPORTED_KINDS",
]

# SymCalc SDK - Term Factorization
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Sum-of-terms and product-of-factors normal forms.

A sum is flattened into a list of Terms, each a ``coefficient * body`` pair:

    4*x + y - 2*x   ->   [Term(2, x), Term(1, y)]

A product is flattened into numerator and denominator factor lists:

    x / a * y * z / b / c   ->   num = [x, y, z], den = [a, b, c]

Constants in the factor lists fold into one coefficient, and a numerator
factor identical to a denominator factor cancels against it. Every function
here builds fresh lists; nothing aliases the lists of its caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .expr import Add, Const, Div, Expr, Mul, Neg, ONE, Sub, ZERO, identical_to


@dataclass(frozen=True)
class Term:
    """A ``coefficient * body`` pair; an absent body means a bare constant."""
    coefficient: float
    body: Optional[Expr] = None

    def negated(self) -> Term:
        return Term(-self.coefficient, self.body)

    def to_expr(self) -> Expr:
        if self.coefficient == 0:
            return ZERO
        if self.body is None:
            return Const(self.coefficient)
        if self.coefficient == 1:
            return self.body
        # c * (1 / d) is written c / d
        if isinstance(self.body, Div) and self.body.e1 == ONE:
            return Div(Const(self.coefficient), self.body.e2)
        return Mul(Const(self.coefficient), self.body)


def _divide(a: float, b: float) -> float:
    # IEEE semantics, so x / 0 folds to inf rather than raising
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.true_divide(a, b))


# Sums

def deconstruct_sum(e: Expr) -> List[Term]:
    """
    Flatten nested Add/Sub/Neg into signed terms, merging identical bodies.

    Each leaf is reduced with fold_constants(); a leaf whose body is
    identical to an earlier term's body adds its coefficient to that term.
    Terms whose merged coefficient is zero are dropped. A term that ends up
    as ``1 * (a + b)`` is flattened into the surrounding sum.
    """
    terms: List[Term] = []
    _collect_sum(e, False, terms)
    terms = [t for t in terms if t.coefficient != 0]

    # Merging can leave a unit coefficient on a sum body
    while any(_is_unit_sum(t) for t in terms):
        flattened: List[Term] = []
        for t in terms:
            _collect_sum(t.to_expr(), False, flattened)
        terms = [t for t in flattened if t.coefficient != 0]
    return terms


def _is_unit_sum(term: Term) -> bool:
    return term.coefficient == 1 and isinstance(term.body, (Add, Sub, Neg))


def _collect_sum(e: Expr, minus: bool, terms: List[Term]) -> None:
    if isinstance(e, Neg):
        _collect_sum(e.e, not minus, terms)
        return
    if isinstance(e, Add):
        _collect_sum(e.e1, minus, terms)
        _collect_sum(e.e2, minus, terms)
        return
    if isinstance(e, Sub):
        _collect_sum(e.e1, minus, terms)
        _collect_sum(e.e2, not minus, terms)
        return

    term = fold_constants(e)
    if _is_unit_sum(term):
        # (x + 1) * 1 contributes x and 1, not the opaque sum
        _collect_sum(term.body, minus, terms)
        return
    if minus:
        term = term.negated()

    for i, existing in enumerate(terms):
        if identical_to(term.body, existing.body):
            terms[i] = Term(existing.coefficient + term.coefficient, existing.body)
            return
    terms.append(term)


def construct_sum(terms: List[Term]) -> Expr:
    """Rebuild a left-associated sum; the empty sum is const(0)."""
    result: Optional[Expr] = None
    for term in terms:
        if term.coefficient == 0:
            continue
        e = term.to_expr()
        result = e if result is None else Add(result, e)
    return ZERO if result is None else result


# Products

def deconstruct_product(e: Expr) -> Tuple[List[Expr], List[Expr]]:
    """
    Flatten nested Mul/Div into (numerator, denominator) factor lists.

    Non-product leaves are simplified first. A leaf that simplifies to a
    product or quotient (``c * body``, ``c / d``) contributes its factors
    instead of itself.
    """
    num: List[Expr] = []
    den: List[Expr] = []
    _collect_product(e, num, den)
    return num, den


def _collect_product(e: Expr, num: List[Expr], den: List[Expr]) -> None:
    if isinstance(e, Mul):
        _collect_product(e.e1, num, den)
        _collect_product(e.e2, num, den)
        return
    if isinstance(e, Div):
        _collect_product(e.e1, num, den)
        _collect_product(e.e2, den, num)
        return

    from .simplify import simplify_expr

    _split_factors(simplify_expr(e), num, den)


def _split_factors(e: Expr, num: List[Expr], den: List[Expr]) -> None:
    # Structural only: the leaves of a simplified tree are already simplified
    if isinstance(e, Mul):
        _split_factors(e.e1, num, den)
        _split_factors(e.e2, num, den)
    elif isinstance(e, Div):
        _split_factors(e.e1, num, den)
        _split_factors(e.e2, den, num)
    else:
        num.append(e)


def _product_body(factors: List[Expr]) -> Optional[Expr]:
    result: Optional[Expr] = None
    for f in factors:
        result = f if result is None else Mul(result, f)
    return result


def construct_product(num: List[Expr], den: List[Expr]) -> Term:
    """
    Fold constants and cancel common factors of a fraction.

    Each numerator factor cancels against the first identical denominator
    factor still present (one cancellation per pair, no search for a better
    set). The remaining factors become a left-associated product, divided
    by the left-associated product of the remaining denominator.
    """
    coefficient = 1.0
    num_rest: List[Expr] = []
    den_rest: List[Expr] = []

    for f in num:
        if isinstance(f, Const):
            coefficient *= f.value
        else:
            num_rest.append(f)
    for f in den:
        if isinstance(f, Const):
            coefficient = _divide(coefficient, f.value)
        else:
            den_rest.append(f)

    remaining: List[Expr] = []
    for f in num_rest:
        for j, g in enumerate(den_rest):
            if identical_to(f, g):
                del den_rest[j]
                break
        else:
            remaining.append(f)

    return _divide_bodies(coefficient, _product_body(remaining), _product_body(den_rest))


def _divide_bodies(c: float, numerator: Optional[Expr], denominator: Optional[Expr]) -> Term:
    if c == 0:
        return Term(0.0)
    if numerator is None:
        if denominator is None:
            return Term(c)
        # Reciprocal terms share the body 1 / d, so 1/x and 2/x collect
        return Term(c, Div(ONE, denominator))
    if denominator is None:
        return Term(c, numerator)
    if identical_to(numerator, denominator):
        return Term(c)
    return Term(c, Div(numerator, denominator))


def fold_constants(e: Expr) -> Term:
    """
    Reduce an expression to a single term.

    For example ``2 * x * 3 * x * 4`` becomes ``Term(24, x * x)``.
    """
    num, den = deconstruct_product(e)
    return construct_product(num, den)

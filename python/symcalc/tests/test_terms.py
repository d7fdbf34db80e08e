# SymCalc SDK - Term Factorization Tests
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Tests for the sum-of-terms and product-of-factors normal forms.
"""

import math

import pytest

from symcalc.expr import Add, Const, Div, Mul, ONE, ZERO, const, sin, var
from symcalc.terms import (
    Term,
    construct_product,
    construct_sum,
    deconstruct_product,
    deconstruct_sum,
    fold_constants,
)


class TestTerm:
    """Tests for Term.to_expr()."""

    def test_zero_coefficient(self):
        assert Term(0.0, var('x')).to_expr() == ZERO

    def test_bare_constant(self):
        assert Term(5.0).to_expr() == Const(5)

    def test_unit_coefficient(self):
        x = var('x')
        assert Term(1.0, x).to_expr() == x

    def test_scaled_body(self):
        x = var('x')
        assert Term(3.0, x).to_expr() == Mul(Const(3), x)

    def test_reciprocal_body(self):
        x = var('x')
        assert Term(2.0, Div(ONE, x)).to_expr() == Div(Const(2), x)

    def test_negated(self):
        x = var('x')
        assert Term(2.0, x).negated() == Term(-2.0, x)


class TestSums:
    """Tests for deconstruct_sum() and construct_sum()."""

    def test_like_terms_merge(self):
        x, y = var('x'), var('y')
        assert deconstruct_sum(4 * x + y - 2 * x) == [Term(2.0, x), Term(1.0, y)]

    def test_cancelled_terms_dropped(self):
        x = var('x')
        assert deconstruct_sum(x - x) == []

    def test_negation_flips_sign(self):
        x = var('x')
        assert deconstruct_sum(-x) == [Term(-1.0, x)]

    def test_constants_merge(self):
        x = var('x')
        assert deconstruct_sum(1 + x + 2) == [Term(3.0), Term(1.0, x)]

    def test_commuted_bodies_merge(self):
        x, y = var('x'), var('y')
        assert deconstruct_sum(x * y + 2 * (y * x)) == [Term(3.0, Mul(x, y))]

    def test_unit_coefficient_sum_leaf_flattens(self):
        x = var('x')
        assert deconstruct_sum(x + (x + 1) * 1) == [Term(2.0, x), Term(1.0)]
        assert deconstruct_sum(x - (x + 1) * x / x) == [Term(-1.0)]

    def test_scaled_sum_leaf_kept(self):
        x = var('x')
        assert deconstruct_sum(2 * (x + 1)) == [Term(2.0, Add(x, Const(1)))]

    def test_empty_sum(self):
        assert construct_sum([]) == ZERO

    def test_left_associated(self):
        x, y = var('x'), var('y')
        result = construct_sum([Term(2.0, x), Term(1.0, y), Term(4.0)])
        assert result == Add(Add(Mul(Const(2), x), y), Const(4))

    def test_zero_terms_skipped(self):
        x = var('x')
        assert construct_sum([Term(0.0, x), Term(1.0, x)]) == x


class TestProducts:
    """Tests for deconstruct_product() and construct_product()."""

    def test_flatten_chain(self):
        x, y, z = var('x'), var('y'), var('z')
        a, b, c = var('a'), var('b'), var('c')
        num, den = deconstruct_product(x / a * y * z / b / c)
        assert num == [x, y, z]
        assert den == [a, b, c]

    def test_nested_division_swaps(self):
        x, y, z = var('x'), var('y'), var('z')
        num, den = deconstruct_product(x / (y / z))
        assert num == [x, z]
        assert den == [y]

    def test_leaf_is_simplified(self):
        x = var('x')
        num, den = deconstruct_product(sin(x) * (x + x))
        assert num == [sin(x), Const(2), x]
        assert den == []

    def test_fold_constants(self):
        x = var('x')
        assert fold_constants(2 * x * 3 * x * 4) == Term(24.0, Mul(x, x))

    def test_cancel_common_factor(self):
        x, y = var('x'), var('y')
        assert fold_constants(x * y / x) == Term(1.0, y)

    def test_cancel_to_constant(self):
        x = var('x')
        assert fold_constants(x / x) == Term(1.0)

    def test_cancel_once_per_pair(self):
        x = var('x')
        assert construct_product([x, x], [x]) == Term(1.0, x)

    def test_reciprocal(self):
        x = var('x')
        assert fold_constants(3 / x) == Term(3.0, Div(ONE, x))

    def test_remaining_fraction(self):
        x, y = var('x'), var('y')
        assert fold_constants(6 * x / (2 * y)) == Term(3.0, Div(x, y))

    def test_zero_factor(self):
        x = var('x')
        assert fold_constants(x * 0) == Term(0.0)

    def test_division_by_zero_constant(self):
        t = construct_product([const(6)], [const(0)])
        assert t.body is None
        assert math.isinf(t.coefficient)

    def test_inputs_not_mutated(self):
        x = var('x')
        num, den = [x, const(2)], [x]
        construct_product(num, den)
        assert num == [x, const(2)]
        assert den == [x]

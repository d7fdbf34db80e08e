# SymCalc SDK - Simplification Tests
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""
Tests for symbolic simplification and the simplifying combinators.
"""

import math
import random

import pytest

from symcalc import (
    Add,
    Call,
    Const,
    Div,
    Expr,
    Formula,
    Mul,
    Neg,
    Sub,
    ExpressionDepthError,
    UnsupportedNodeKindError,
    const,
    evaluate,
    formula,
    identical_to,
    simplified_add,
    simplified_div,
    simplified_mul,
    simplified_negate,
    simplified_sub,
    simplify,
    sin,
    var,
)
from symcalc.expr import ZERO


class Opaque(Expr):
    """A node type the engine does not know about."""

    kind = 'opaque'

    def free_vars(self):
        return frozenset()

    def evaluate(self, env):
        return 0.0


class TestSimplification:
    """Test symbolic simplification."""

    def test_constant_folding(self):
        assert simplify(const(2) + const(3)) == Const(5)

    def test_identity_removal_add(self):
        x = var('x')
        assert simplify(x + 0) == x
        assert simplify(0 + x) == x

    def test_identity_removal_mul(self):
        x = var('x')
        assert simplify(x * 1) == x

    def test_zero_propagation(self):
        x = var('x')
        assert simplify(x * 0) == ZERO

    def test_self_subtraction(self):
        x = var('x')
        assert simplify(x - x) == ZERO

    def test_self_division(self):
        x = var('x')
        assert simplify(x / x) == Const(1)

    def test_like_terms(self):
        x = var('x')
        assert simplify(2 * x + 3 * x) == Mul(Const(5), x)

    def test_complex_cancellation(self):
        x, y = var('x'), var('y')
        assert simplify(x * y - y * x) == ZERO

    def test_factor_cancellation(self):
        x, y = var('x'), var('y')
        assert simplify(x * y / x) == y

    def test_compound_factor_cancellation(self):
        x = var('x')
        assert simplify((x + 1) / (x + 1)) == Const(1)

    def test_double_negation(self):
        x = var('x')
        assert simplify(-(-x)) == x

    def test_call_arguments(self):
        x = var('x')
        assert simplify(sin(x + x)) == Call('Sin', (Mul(Const(2), x),))

    def test_reciprocals_collect(self):
        x = var('x')
        assert simplify(1 / x - 2 / x) == Div(Const(-1), x)

    def test_constant_multiple_cancels(self):
        x = var('x')
        assert simplify(2 * x * 3 - x * 6) == ZERO

    def test_leaves_unchanged(self):
        x = var('x')
        assert simplify(x) == x
        assert simplify(const(4)) == Const(4)

    def test_formula_body(self):
        x = var('x')
        assert simplify(formula(x + 0, 'x')) == Formula(x, ('x',))

    def test_reordered_sum_cancels(self):
        x, y = var('x'), var('y')
        # The trees are not identical, but their flattened terms cancel
        assert not identical_to(x + 1 + y, y + 1 + x)
        assert simplify((x + 1 + y) - (y + 1 + x)) == ZERO

    def test_unknown_node_kind(self):
        with pytest.raises(UnsupportedNodeKindError):
            simplify(Opaque())

    def test_unknown_node_kind_nested(self):
        with pytest.raises(UnsupportedNodeKindError):
            simplify(sin(Opaque()))

    def test_too_deep(self):
        x = var('x')
        e = x
        for _ in range(5000):
            e = Add(e, x)
        with pytest.raises(ExpressionDepthError):
            simplify(e)


class TestIdempotence:
    """Simplifying a simplified tree gives an identical tree."""

    @pytest.mark.parametrize("build", [
        lambda x, y: 2 * x * 3 - x * 6,
        lambda x, y: x * y / x,
        lambda x, y: 2 * x + 3 * x + y,
        lambda x, y: 1 / x - 2 / x,
        lambda x, y: sin(x + x) * 2,
        lambda x, y: x * x + 3 * x * x,
        lambda x, y: 6 * x / (2 * y),
        lambda x, y: (x + y) * (x - y) / 4,
        lambda x, y: x + (x + 1) * 1,
        lambda x, y: x + (x + 1) * x / x,
        lambda x, y: x + ((x - 2) - x * x),
        lambda x, y: y + 2 * (x + 1) + (x + 1) * (-1),
        lambda x, y: -((x + y) * y / y) + x,
    ])
    def test_idempotent(self, build):
        e = build(var('x'), var('y'))
        once = simplify(e)
        twice = simplify(once)
        assert identical_to(once, twice)

    def test_unit_coefficient_sum_is_flattened(self):
        x = var('x')
        assert simplify(x + (x + 1) * 1) == Add(Mul(Const(2), x), Const(1))

    def test_merged_unit_coefficient_sum_is_flattened(self):
        x, y = var('x'), var('y')
        result = simplify(y + 2 * (x + 1) + (x + 1) * (-1))
        assert result == Add(Add(y, x), Const(1))

    def test_random_trees(self):
        rng = random.Random(20240611)
        x, y = var('x'), var('y')
        for _ in range(1000):
            e = _random_tree(rng, x, y, 4)
            once = simplify(e)
            before = evaluate(e, x=0.7, y=1.3)
            after = evaluate(once, x=0.7, y=1.3)
            # x / (x - x) and friends fold to inf/nan coefficients; huge
            # values come from dividing by rounding residue
            if not (math.isfinite(before) and math.isfinite(after)):
                continue
            if max(abs(before), abs(after)) > 1e6:
                continue
            assert identical_to(simplify(once), once), str(e)
            assert after == pytest.approx(before, rel=1e-6, abs=1e-9), str(e)


def _random_tree(rng, x, y, depth):
    if depth == 0 or rng.random() < 0.3:
        return rng.choice([x, y, const(1), const(2), const(3), const(0.5)])
    kind = rng.choice(['add', 'sub', 'neg', 'mul', 'div', 'call'])
    if kind == 'neg':
        return Neg(_random_tree(rng, x, y, depth - 1))
    if kind == 'call':
        return Call(rng.choice(['Sin', 'Cos']), (_random_tree(rng, x, y, depth - 1),))
    left = _random_tree(rng, x, y, depth - 1)
    right = _random_tree(rng, x, y, depth - 1)
    return {'add': Add, 'sub': Sub, 'mul': Mul, 'div': Div}[kind](left, right)


class TestCombinators:
    """Tests for the simplified_* combinators."""

    def test_add_identity(self):
        x = var('x')
        assert simplified_add(const(0), x) == x
        assert simplified_add(x, const(0)) == x

    def test_add_identity_simplifies_other_side(self):
        x = var('x')
        assert simplified_add(const(0), x + x) == Mul(Const(2), x)

    def test_add_constants(self):
        assert simplified_add(const(2), const(3)) == Const(5)

    def test_add_same_operand(self):
        x = var('x')
        assert simplified_add(x, x) == Mul(Const(2), x)
        assert simplified_add(3 * x, 3 * x) == Mul(Const(6), x)

    def test_add_like_terms(self):
        x = var('x')
        assert simplified_add(2 * x, 3 * x) == Mul(Const(5), x)

    def test_add_unrelated(self):
        x, y = var('x'), var('y')
        assert simplified_add(x, y) == Add(x, y)

    def test_sub_identity(self):
        x = var('x')
        assert simplified_sub(x, const(0)) == x

    def test_sub_from_zero(self):
        x = var('x')
        assert simplified_sub(const(0), x) == Mul(Const(-1), x)
        assert simplified_sub(const(0), const(3)) == Const(-3)

    def test_sub_constants(self):
        assert simplified_sub(const(5), const(3)) == Const(2)

    def test_sub_same_operand(self):
        x, y = var('x'), var('y')
        assert simplified_sub(x * y, y * x) == ZERO

    def test_sub_like_terms(self):
        x = var('x')
        assert simplified_sub(5 * x, 2 * x) == Mul(Const(3), x)

    def test_sub_unrelated(self):
        x, y = var('x'), var('y')
        assert simplified_sub(x, y) == Sub(x, y)

    def test_negate(self):
        x = var('x')
        assert simplified_negate(const(3)) == Const(-3)
        assert simplified_negate(-x) == x
        assert simplified_negate(-(x + x)) == Mul(Const(2), x)
        assert simplified_negate(2 * x) == Mul(Const(-2), x)

    def test_mul(self):
        x = var('x')
        assert simplified_mul(x, const(1)) == x
        assert simplified_mul(const(3), const(4)) == Const(12)
        assert simplified_mul(x * 3, x * 2) == Mul(Const(6), Mul(x, x))

    def test_div(self):
        x, y = var('x'), var('y')
        assert simplified_div(x, x) == Const(1)
        assert simplified_div(x * y, y) == x
        assert simplified_div(const(6), const(3)) == Const(2)

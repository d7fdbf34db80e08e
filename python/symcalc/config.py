# SymCalc SDK - Configuration
# Copyright (c) 2024 SymCalc Contributors. All rights reserved.

"""Configuration settings for SymCalc."""

from __future__ import annotations
from dataclasses import dataclass


# Hard ceiling on Taylor/Maclaurin order. Repeated symbolic differentiation
# grows the tree and the numeric error super-linearly beyond this.
MAX_TAYLOR_ORDER = 20

# Absolute tolerance under which a derivative value counts as exactly zero
DEFAULT_ZERO_TOLERANCE = 1e-15


@dataclass
class Config:
    """
    Configuration for differentiation and series expansion.

    Attributes:
        max_taylor_order: Largest accepted expansion order. Can be lowered,
                          but never raised above MAX_TAYLOR_ORDER.
        zero_tolerance: Derivative values with an absolute value below this
                        become exact zero coefficients in a series.
        simplify_input: Simplify the formula body before differentiating it.
    """
    max_taylor_order: int = MAX_TAYLOR_ORDER
    zero_tolerance: float = DEFAULT_ZERO_TOLERANCE
    simplify_input: bool = True

    def __post_init__(self):
        if not isinstance(self.max_taylor_order, int) or self.max_taylor_order < 0:
            raise ValueError(
                f"max_taylor_order must be a non-negative integer, got {self.max_taylor_order!r}"
            )
        if self.max_taylor_order > MAX_TAYLOR_ORDER:
            raise ValueError(
                f"max_taylor_order can not exceed {MAX_TAYLOR_ORDER}, got {self.max_taylor_order}"
            )
        self.zero_tolerance = float(self.zero_tolerance)
        if self.zero_tolerance < 0:
            raise ValueError(f"zero_tolerance must be non-negative, got {self.zero_tolerance}")

    @classmethod
    def default(cls) -> Config:
        """Default configuration."""
        return cls()

    @classmethod
    def strict(cls) -> Config:
        """Low order ceiling and no zero snapping, for reproducing raw values."""
        return cls(
            max_taylor_order=10,
            zero_tolerance=0.0,
        )

    def __repr__(self) -> str:
        return (
            f"Config(max_taylor_order={self.max_taylor_order}, "
            f"zero_tolerance={self.zero_tolerance}, "
            f"simplify_input={self.simplify_input})"
        )

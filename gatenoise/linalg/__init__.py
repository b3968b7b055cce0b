"""Linear-algebra helpers for error operators."""

from .predicates import (
    adjoint,
    as_matrix,
    is_cptp,
    is_identity,
    is_square,
    is_unitary,
    is_zero,
    sum_adjoint_products,
    superoperator,
)

__all__ = [
    "as_matrix",
    "adjoint",
    "is_square",
    "is_zero",
    "is_identity",
    "is_unitary",
    "sum_adjoint_products",
    "is_cptp",
    "superoperator",
]

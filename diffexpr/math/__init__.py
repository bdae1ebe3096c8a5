"""
Numeric scalar types for the expression engine.

REAL and COMPLEX are the two instantiations an expression can use.
"""

from .scalar import COMPLEX, REAL, ComplexScalar, RealScalar, Scalar, format_real, get_scalar, promote

__all__ = [
    "Scalar",
    "RealScalar",
    "ComplexScalar",
    "REAL",
    "COMPLEX",
    "format_real",
    "get_scalar",
    "promote",
]

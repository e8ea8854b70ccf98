"""
Reference implementation (pure NumPy).

Slow but transparent versions of the numerical primitives, used as a
backend and as a cross-check for the LAPACK / PyTorch paths.
"""

from .linalg import invert_matrix

__all__ = [
    "invert_matrix",
]

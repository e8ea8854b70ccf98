"""
Core algorithms (backend-agnostic).
"""

from .horner import horner_eval
from .polyfit_solver import (
    PolyfitResult,
    fit_polynomial,
    normal_matrix,
    solve_normal_equations,
    vandermonde_transposed,
)
from .interp import bracket, interp_linear

__all__ = [
    "horner_eval",
    "PolyfitResult",
    "fit_polynomial",
    "normal_matrix",
    "solve_normal_equations",
    "vandermonde_transposed",
    "bracket",
    "interp_linear",
]

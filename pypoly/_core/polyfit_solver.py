"""
Least-squares polynomial fitting via the normal equations.

Delegates the matrix inversion to a backend; everything else is plain
NumPy on arrays sized from ``degree + 1`` and the sample count only.
"""

import warnings
import numpy as np
from dataclasses import dataclass

from ..exceptions import PolyfitConditionWarning, SingularMatrixError


@dataclass
class PolyfitResult:
    """Solution of the normal equations."""
    coef: np.ndarray            # Coefficients, shape (degree+1,), highest degree first
    normal_inverse: np.ndarray  # (X'X)^-1, rows/columns ordered like coef
    rcond: float                # Reciprocal condition estimate of X'X


def vandermonde_transposed(x: np.ndarray, degree: int) -> np.ndarray:
    """
    Transposed Vandermonde matrix.
    
    Parameters
    ----------
    x : ndarray, shape (n,)
        Sample abscissae
    degree : int
        Polynomial degree
        
    Returns
    -------
    XT : ndarray, shape (degree+1, n)
        ``XT[j, i] = x[i] ** j``, built row by row: row 0 is ones, row j is
        row j-1 times x.
    """
    XT = np.empty((degree + 1, x.shape[0]), dtype=np.float64)
    XT[0] = 1.0
    for j in range(1, degree + 1):
        np.multiply(XT[j - 1], x, out=XT[j])
    return XT


def normal_matrix(XT: np.ndarray) -> np.ndarray:
    """``G = XT @ XT.T``, shape (degree+1, degree+1)."""
    return XT @ XT.T


def solve_normal_equations(
    x: np.ndarray,
    y: np.ndarray,
    degree: int,
    backend=None,
) -> PolyfitResult:
    """
    Solve ``(X'X) beta = X'y`` for polynomial coefficients.
    
    Inputs are assumed validated: 1-D float arrays of equal length n with
    ``degree + 1 <= n``.
    
    Parameters
    ----------
    x : ndarray, shape (n,)
        Sample abscissae
    y : ndarray, shape (n,)
        Sample ordinates
    degree : int
        Polynomial degree
    backend : BackendBase, optional
        Matrix-inversion backend (default: CPU)
        
    Returns
    -------
    PolyfitResult
        
    Raises
    ------
    SingularMatrixError
        If the backend cannot invert the normal matrix
        
    Warns
    -----
    PolyfitConditionWarning
        If the normal matrix is invertible but numerically close to singular
    """
    if backend is None:
        from .._backends import get_backend
        backend = get_backend('cpu')
    
    XT = vandermonde_transposed(x, degree)
    G = normal_matrix(XT)
    
    inversion = backend.invert_matrix(G)
    if not inversion.success:
        # Nothing computed so far escapes this call
        raise SingularMatrixError("could not invert Vandermonde matrix")
    
    if inversion.rcond < np.finfo(np.float64).eps:
        warnings.warn(
            f"Normal matrix of the degree-{degree} fit is ill-conditioned "
            f"(rcond={inversion.rcond:.3g}); coefficients may be inaccurate.",
            PolyfitConditionWarning,
            stacklevel=2
        )
    
    b = XT @ y
    beta = inversion.inverse @ b
    
    # Leading coefficient first
    return PolyfitResult(
        coef=np.ascontiguousarray(beta[::-1]),
        normal_inverse=np.ascontiguousarray(inversion.inverse[::-1, ::-1]),
        rcond=inversion.rcond
    )


def fit_polynomial(
    x: np.ndarray,
    y: np.ndarray,
    degree: int,
    backend=None,
) -> np.ndarray:
    """
    Fit polynomial coefficients by least squares.
    
    Thin wrapper over ``solve_normal_equations``.
    
    Returns
    -------
    beta : ndarray, shape (degree+1, 1)
        Coefficients, highest degree first
    """
    result = solve_normal_equations(x, y, degree, backend=backend)
    return result.coef.reshape(degree + 1, 1)

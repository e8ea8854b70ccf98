"""
Matrix inversion by Gauss-Jordan elimination.

Pure NumPy reference for the inversion primitive used by the fitter.
Small and slow, but with an explicit, documented failure criterion.
"""

import numpy as np
from typing import Optional, Tuple


def invert_matrix(
    a: np.ndarray,
    epsilon: Optional[float] = None,
) -> Tuple[bool, Optional[np.ndarray]]:
    """
    Invert a square matrix with Gauss-Jordan elimination.
    
    Parameters
    ----------
    a : ndarray, shape (d, d)
        Matrix to invert. Not modified.
    epsilon : float, optional
        Pivot threshold. Elimination fails as soon as the largest available
        pivot has magnitude below it. Default: ``d * eps * max|a|``.
        
    Returns
    -------
    (success, inverse)
        ``inverse`` is None when ``success`` is False.
        
    Notes
    -----
    Works on an augmented ``[A | I]`` copy with partial (row) pivoting:
    
    1. For each column, swap in the row with the largest remaining pivot
    2. Normalise the pivot row
    3. Eliminate the column from every other row
    
    The right half then holds ``A^-1``.
    """
    a = np.asarray(a, dtype=np.float64)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"Matrix must be square, got shape {a.shape}")
    
    d = a.shape[0]
    if d == 0:
        return True, np.empty((0, 0), dtype=np.float64)
    
    if epsilon is None:
        scale = float(np.max(np.abs(a)))
        epsilon = d * np.finfo(np.float64).eps * scale
    
    work = np.hstack([a, np.eye(d)])
    
    for col in range(d):
        pivot_row = col + int(np.argmax(np.abs(work[col:, col])))
        pivot = work[pivot_row, col]
        if not np.isfinite(pivot) or abs(pivot) <= epsilon:
            return False, None
        
        if pivot_row != col:
            work[[col, pivot_row]] = work[[pivot_row, col]]
        
        work[col] /= pivot
        
        factors = work[:, col].copy()
        factors[col] = 0.0
        work -= np.outer(factors, work[col])
    
    return True, work[:, d:].copy()

"""
Polynomial evaluation by Horner's method.
"""

import numpy as np


def horner_eval(coefficients: np.ndarray, x: np.ndarray) -> np.ndarray:
    """
    Evaluate a polynomial element-wise.
    
    Parameters
    ----------
    coefficients : ndarray, shape (L,)
        Coefficients, highest degree first. Must be non-empty.
    x : ndarray
        Evaluation points, any shape.
        
    Returns
    -------
    ndarray
        float64 array with the shape of ``x``.
        
    Notes
    -----
    ``y = p[0]; y = y*x + p[j]`` for j = 1..L-1, applied to the whole
    array at once: L-1 passes over ``x``, no powers computed.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.full(x.shape, coefficients[0], dtype=np.float64)
    for c in coefficients[1:]:
        y *= x
        y += c
    return y

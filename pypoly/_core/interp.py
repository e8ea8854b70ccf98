"""
One-dimensional piecewise-linear interpolation.

Boundary queries take the fill values; interior queries are bracketed by
bisection over the node indices and blended linearly.
"""

import numpy as np
from typing import Tuple


def bracket(xp: np.ndarray, value: float) -> Tuple[int, int]:
    """
    Find the adjacent nodes straddling ``value``.
    
    Requires ``xp[0] < value < xp[-1]`` and strictly increasing ``xp``.
    
    Returns
    -------
    (lo, hi)
        ``hi == lo + 1`` and ``xp[lo] <= value < xp[hi]``.
    """
    lo, hi = 0, len(xp) - 1
    while hi - lo > 1:
        mid = lo + (hi - lo) // 2
        if xp[mid] <= value:
            lo = mid
        else:
            hi = mid
    return lo, hi


def _bracket_many(xp: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Vectorised ``bracket``: returns ``lo`` for every value."""
    lo = np.zeros(values.shape, dtype=np.intp)
    hi = np.full(values.shape, len(xp) - 1, dtype=np.intp)
    # Every window halves per pass, so this runs ceil(log2(len(xp)-1)) times
    while np.any(hi - lo > 1):
        mid = lo + (hi - lo) // 2
        go_right = xp[mid] <= values
        lo = np.where(go_right, mid, lo)
        hi = np.where(go_right, hi, mid)
    return lo


def interp_linear(
    x: np.ndarray,
    xp: np.ndarray,
    fp: np.ndarray,
    left: float,
    right: float,
) -> np.ndarray:
    """
    Piecewise-linear interpolation.
    
    Parameters
    ----------
    x : ndarray
        Query points, any shape
    xp : ndarray, shape (n,)
        Strictly increasing nodes, n >= 2 (not verified)
    fp : ndarray, shape (n,)
        Values at the nodes
    left, right : float
        Results for ``x <= xp[0]`` and ``x >= xp[-1]``
        
    Returns
    -------
    ndarray
        float64 array with the shape of ``x``
    """
    x = np.asarray(x, dtype=np.float64)
    flat = x.reshape(-1)
    out = np.empty(flat.shape, dtype=np.float64)
    
    below = flat <= xp[0]
    above = (flat >= xp[-1]) & ~below
    inside = ~(below | above)
    
    out[below] = left
    out[above] = right
    
    v = flat[inside]
    lo = _bracket_many(xp, v)
    hi = lo + 1
    out[inside] = fp[lo] + (v - xp[lo]) * (fp[hi] - fp[lo]) / (xp[hi] - xp[lo])
    
    return out.reshape(x.shape)

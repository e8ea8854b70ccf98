"""
Polynomial evaluation, fitting and linear interpolation.

This is the user-facing API. Every function validates and coerces its
inputs, then hands plain float64 arrays to the kernels in ``_core``.
"""

import numpy as np
from typing import Optional, Union

from ._backends import BackendBase, get_backend
from ._core import horner_eval, fit_polynomial, interp_linear
from ._utils import (
    MAX_SAMPLES,
    as_fill_value,
    as_float_array,
    as_vector,
    check_degree,
)
from .exceptions import (
    ArgumentCountError,
    DegreeError,
    ShapeError,
    SingularMatrixError,
)


def polyval(p, x) -> np.ndarray:
    """
    Evaluate a polynomial at every element of ``x``.

    Parameters
    ----------
    p : array-like
        Coefficients, highest degree first (e.g. the output of ``polyfit``).
    x : array-like or float
        Evaluation points, any shape.

    Returns
    -------
    ndarray
        float64 array with the shape of ``x``.

    Raises
    ------
    InputTypeError
        If ``p`` or ``x`` is not array-like
    ShapeError
        If ``p`` is empty or not one-dimensional

    Examples
    --------
    >>> polyval([1, 0, 0], [0, 1, 2, 3])
    array([0., 1., 4., 9.])
    """
    coefficients = as_vector(p, name='p')
    if coefficients.size == 0:
        raise ShapeError("coefficient sequence must not be empty")

    points = as_float_array(x, name='x', allow_scalar=True)
    return horner_eval(coefficients, points)


def _prepare_samples(x, y, degree):
    """Validate a sample set; ``x=None`` means uniformly spaced 0..n-1."""
    y_arr = as_vector(y, name='y')
    x_arr = None if x is None else as_vector(x, name='x')
    degree = check_degree(degree)

    n = y_arr.shape[0]
    if x_arr is None:
        x_arr = np.arange(n, dtype=np.float64)
    elif x_arr.shape[0] != n:
        raise ShapeError(
            f"input vectors must be of equal length (x: {x_arr.shape[0]}, y: {n})"
        )

    if n < degree + 1:
        raise DegreeError(
            f"more degrees of freedom than data points "
            f"(degree {degree} needs at least {degree + 1} points, got {n})"
        )
    if n > MAX_SAMPLES:
        raise ShapeError(f"at most {MAX_SAMPLES} samples are supported, got {n}")

    return x_arr, y_arr, degree


def _check_distinct(x_arr: np.ndarray) -> None:
    if np.unique(x_arr).size != x_arr.size:
        raise SingularMatrixError(
            "could not invert Vandermonde matrix: x values are not all distinct"
        )


def fit_samples(
    x,
    y,
    degree: int,
    *,
    backend: Union[str, BackendBase] = 'auto',
    use_fp64: Optional[bool] = None,
    require_distinct: bool = True,
) -> np.ndarray:
    """
    Least-squares polynomial fit to explicit sample points.

    Parameters
    ----------
    x : array-like, shape (n,)
        Independent variable
    y : array-like, shape (n,)
        Dependent variable
    degree : int
        Polynomial degree, ``degree + 1 <= n``
    backend : str or BackendBase
        Matrix-inversion backend (see ``get_backend``)
    use_fp64 : bool, optional
        Precision preference forwarded to ``get_backend``
    require_distinct : bool
        Reject repeated x values as a singular system. With False only
        the inversion decides.

    Returns
    -------
    ndarray, shape (degree+1, 1)
        Coefficients, highest degree first

    Raises
    ------
    InputTypeError
        If x or y is not array-like, or degree is not an integer
    ShapeError
        If x and y differ in length or are not one-dimensional
    DegreeError
        If degree is negative, too large, or exceeds the number of points
    SingularMatrixError
        If the normal matrix cannot be inverted
    """
    x_arr, y_arr, degree = _prepare_samples(x, y, degree)
    if require_distinct:
        _check_distinct(x_arr)
    return fit_polynomial(x_arr, y_arr, degree, backend=get_backend(backend, use_fp64))


def fit_uniform(
    y,
    degree: int,
    *,
    backend: Union[str, BackendBase] = 'auto',
    use_fp64: Optional[bool] = None,
) -> np.ndarray:
    """
    Least-squares polynomial fit to uniformly spaced samples.

    ``x`` is taken as ``0, 1, ..., len(y) - 1``. Otherwise identical to
    ``fit_samples``.
    """
    x_arr, y_arr, degree = _prepare_samples(None, y, degree)
    return fit_polynomial(x_arr, y_arr, degree, backend=get_backend(backend, use_fp64))


def polyfit(
    *args,
    x=None,
    y=None,
    degree: Optional[int] = None,
    backend: Union[str, BackendBase] = 'auto',
    use_fp64: Optional[bool] = None,
    require_distinct: bool = True,
) -> np.ndarray:
    """
    Least-squares polynomial fit.

    Accepted forms::

        polyfit(y, degree)
        polyfit(x, y, degree)
        polyfit(y=..., degree=...)
        polyfit(x=..., y=..., degree=...)

    Dispatches to ``fit_uniform`` when x is absent and to ``fit_samples``
    otherwise.

    Returns
    -------
    ndarray, shape (degree+1, 1)
        Coefficients, highest degree first

    Raises
    ------
    ArgumentCountError
        If the positional arguments are not 2 or 3 (or 1 with ``degree=``),
        or clash with keywords

    Examples
    --------
    >>> polyfit([3, 5, 7, 9, 11], 1).ravel()
    array([2., 3.])
    """
    if len(args) > 3:
        raise ArgumentCountError(
            f"number of arguments must be 2, or 3 (got {len(args)})"
        )

    names = {3: ('x', 'y', 'degree'), 2: ('y', 'degree'), 1: ('y',), 0: ()}[len(args)]
    given = {'x': x, 'y': y, 'degree': degree}
    for name, value in zip(names, args):
        if given[name] is not None:
            raise ArgumentCountError(f"polyfit got multiple values for '{name}'")
        given[name] = value

    if given['y'] is None or given['degree'] is None:
        raise ArgumentCountError(
            "polyfit requires y and degree: polyfit(y, degree) or polyfit(x, y, degree)"
        )

    if given['x'] is None:
        return fit_uniform(given['y'], given['degree'], backend=backend, use_fp64=use_fp64)
    return fit_samples(
        given['x'], given['y'], given['degree'],
        backend=backend, use_fp64=use_fp64, require_distinct=require_distinct
    )


def interp(x, xp, fp, *, left=None, right=None) -> np.ndarray:
    """
    One-dimensional piecewise-linear interpolation.

    Parameters
    ----------
    x : array-like or float
        Query points, any shape
    xp : array-like, shape (n,)
        Strictly increasing nodes, n >= 2. Monotonicity is not checked;
        unsorted nodes give unspecified results.
    fp : array-like, shape (n,)
        Values at the nodes
    left : float, optional
        Result for ``x <= xp[0]`` (default ``fp[0]``)
    right : float, optional
        Result for ``x >= xp[-1]`` (default ``fp[-1]``)

    Returns
    -------
    ndarray
        float64 array with the shape of ``x``

    Raises
    ------
    InputTypeError
        If an argument is not array-like, or left/right is not a number
    ShapeError
        If xp/fp are not 1-D, have fewer than 2 entries, or differ in length

    Examples
    --------
    >>> interp([-5, 0, 5, 10, 15], [0, 10], [0, 100])
    array([  0.,   0.,  50., 100., 100.])
    """
    x_arr = as_float_array(x, name='x', allow_scalar=True)
    try:
        xp_arr = as_vector(xp, name='xp')
        fp_arr = as_vector(fp, name='fp')
    except ShapeError as exc:
        raise ShapeError("interp is defined for 1D arrays of equal length") from exc

    if xp_arr.size < 2 or fp_arr.size < 2 or xp_arr.size != fp_arr.size:
        raise ShapeError(
            "interp is defined for 1D arrays of equal length "
            f"(at least 2 entries; xp: {xp_arr.size}, fp: {fp_arr.size})"
        )

    left_value = as_fill_value(left, 'left')
    right_value = as_fill_value(right, 'right')
    if left_value is None:
        left_value = float(fp_arr[0])
    if right_value is None:
        right_value = float(fp_arr[-1])

    return interp_linear(x_arr, xp_arr, fp_arr, left_value, right_value)


# Descriptive aliases
evaluate = polyval
fit = polyfit
interpolate = interp

"""
Utility functions.

Input coercion and validation shared by the public API. Every operation
reads its inputs through ``as_float_array`` so that dense arrays, nested
lists and any sized iterable of numbers are handled the same way.
"""

import itertools
import numbers
from collections.abc import Iterable, Mapping, Set, Sized

import numpy as np

from .exceptions import DegreeError, InputTypeError, ShapeError

# Degrees and sample counts are kept within small integer ranges.
MAX_DEGREE = 255
MAX_SAMPLES = 65535


def is_real_scalar(value) -> bool:
    """True for real numbers (Python or NumPy), excluding booleans."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)


# Boolean, signed, unsigned and floating dtype kinds
_REAL_KINDS = frozenset('biuf')


def _check_real_dtype(arr, name):
    """Reject arrays whose items are not real numbers."""
    if arr.dtype.kind in _REAL_KINDS:
        return
    # Object arrays hold Python objects, e.g. Fraction or Decimal
    if arr.dtype.kind == 'O' and all(
        is_real_scalar(v) or isinstance(v, (bool, np.bool_)) for v in arr.flat
    ):
        return
    raise InputTypeError(
        f"{name} must contain only real numbers, got dtype {arr.dtype}"
    )


def as_float_array(obj, name='x', allow_scalar=False):
    """
    Convert array-like input to a float64 ndarray.

    Parameters
    ----------
    obj : array-like
        ndarray, object exposing ``__array__``, (nested) list or tuple,
        or any sized iterable of real numbers.
    name : str
        Argument name used in error messages.
    allow_scalar : bool
        Accept a bare real number (returned as a 0-d array).

    Returns
    -------
    ndarray
        float64 array. May share memory with ``obj``; callers never write
        into it.

    Raises
    ------
    InputTypeError
        If ``obj`` is not iterable or holds non-numeric items (``None``,
        strings, complex numbers, ...).
    """
    if is_real_scalar(obj):
        if not allow_scalar:
            raise InputTypeError(f"{name} must be an iterable, not a scalar")
        return np.asarray(obj, dtype=np.float64)

    if obj is None or isinstance(obj, (str, bytes, bytearray, Mapping, Set)):
        raise InputTypeError(
            f"{name} must be a sequence of numbers, got {type(obj).__name__}"
        )

    if not (isinstance(obj, (np.ndarray, list, tuple)) or hasattr(obj, '__array__')):
        if not (isinstance(obj, Sized) and isinstance(obj, Iterable)):
            raise InputTypeError(
                f"{name} must be an iterable with a length, got {type(obj).__name__}"
            )
        # Single pass over exactly len(obj) items
        n = len(obj)
        items = list(itertools.islice(iter(obj), n))
        if len(items) != n:
            raise InputTypeError(
                f"{name} yielded {len(items)} items but reports length {n}"
            )
        obj = items

    try:
        arr = np.asarray(obj)
    except (TypeError, ValueError) as exc:
        raise InputTypeError(f"{name} must contain only real numbers") from exc

    _check_real_dtype(arr, name)
    try:
        return arr.astype(np.float64, copy=False)
    except (TypeError, ValueError) as exc:
        raise InputTypeError(f"{name} must contain only real numbers") from exc


def as_vector(obj, name='x'):
    """
    Validate effectively one-dimensional input.

    Shapes ``(n,)``, ``(1, n)`` and ``(n, 1)`` are accepted and flattened.
    """
    arr = as_float_array(obj, name=name)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and (arr.shape[0] == 1 or arr.shape[1] == 1):
        return arr.reshape(-1)
    raise ShapeError(f"{name} must be 1-dimensional, got shape {arr.shape}")


def check_degree(degree):
    """Validate a polynomial degree and return it as a Python int."""
    if isinstance(degree, (bool, np.bool_)) or not isinstance(degree, numbers.Integral):
        raise InputTypeError(
            f"degree must be an integer, got {type(degree).__name__}"
        )
    degree = int(degree)
    if degree < 0:
        raise DegreeError(f"degree must be non-negative, got {degree}")
    if degree > MAX_DEGREE:
        raise DegreeError(f"degree must not exceed {MAX_DEGREE}, got {degree}")
    return degree


def as_fill_value(value, name):
    """Validate an optional boundary fill value."""
    if value is None:
        return None
    if not is_real_scalar(value):
        raise InputTypeError(f"{name} must be a real number or None")
    return float(value)

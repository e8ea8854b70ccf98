"""
Exception and warning classes.

Every error raised by pypoly derives from PolyError and from the builtin
exception a caller would naturally expect (TypeError, ValueError, ...).
"""

import numpy as np


class PolyError(Exception):
    """Base class for all pypoly errors."""
    pass


class ArgumentCountError(PolyError, TypeError):
    """Wrong number of positional arguments."""
    pass


class InputTypeError(PolyError, TypeError):
    """Argument is not iterable / not array-like where one is required."""
    pass


class ShapeError(PolyError, ValueError):
    """
    Length or dimensionality mismatch.

    Raised for paired sequences of different length, for inputs that are
    not effectively one-dimensional, and for interpolation tables with
    fewer than two nodes.
    """
    pass


class DegreeError(PolyError, ValueError):
    """Requested degree is invalid or exceeds the available degrees of freedom."""
    pass


class SingularMatrixError(PolyError, np.linalg.LinAlgError, ValueError):
    """
    Normal-equations matrix could not be inverted.

    Happens when the sample abscissae are not all distinct or are
    otherwise linearly dependent under the Vandermonde basis.
    """
    pass


class PolyfitConditionWarning(UserWarning):
    """Fit succeeded but the normal matrix is badly conditioned."""
    pass

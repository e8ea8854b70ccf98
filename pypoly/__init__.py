"""
pypoly: polynomial evaluation, least-squares fitting and linear interpolation.

Small numerical kernels on NumPy arrays with pluggable matrix-inversion
backends (SciPy, pure NumPy reference, PyTorch).

Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from .poly import (
    polyval,
    polyfit,
    fit_samples,
    fit_uniform,
    interp,
    evaluate,
    fit,
    interpolate,
)
from .model import PolynomialModel, polymodel
from .exceptions import (
    PolyError,
    ArgumentCountError,
    InputTypeError,
    ShapeError,
    DegreeError,
    SingularMatrixError,
    PolyfitConditionWarning,
)

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'polyval',
    'polyfit',
    'fit_samples',
    'fit_uniform',
    'interp',
    'evaluate',
    'fit',
    'interpolate',
    'PolynomialModel',
    'polymodel',
    'PolyError',
    'ArgumentCountError',
    'InputTypeError',
    'ShapeError',
    'DegreeError',
    'SingularMatrixError',
    'PolyfitConditionWarning',
    'get_backend',
    'list_available_backends',
]

"""
Reference backend using the pure NumPy Gauss-Jordan inversion.
"""

import numpy as np
from typing import Optional

from .base import CPUBackend, MatrixInverse, reciprocal_condition
from ..reference.linalg import invert_matrix


class ReferenceBackend(CPUBackend):
    """
    Reference backend (Gauss-Jordan, FP64).
    
    Fails on pivots below ``epsilon`` rather than only on exact zeros, so
    it is stricter than LAPACK on nearly singular systems.
    """
    
    def __init__(self, epsilon: Optional[float] = None):
        self.name = "reference"
        self.precision = "fp64"
        self.epsilon = epsilon
    
    def invert_matrix(self, matrix: np.ndarray) -> MatrixInverse:
        """Invert with Gauss-Jordan elimination."""
        matrix = np.asarray(matrix, dtype=np.float64)
        success, inverse = invert_matrix(matrix, epsilon=self.epsilon)
        if not success:
            return MatrixInverse(success=False, inverse=None, rcond=0.0)
        return MatrixInverse(
            success=True,
            inverse=inverse,
            rcond=reciprocal_condition(matrix, inverse)
        )
    
    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__} (Gauss-Jordan)',
        }

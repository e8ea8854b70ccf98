"""
CPU backend using NumPy + SciPy.

Default backend: LAPACK inversion in double precision.
"""

import numpy as np
from scipy.linalg import inv, LinAlgError

from .base import CPUBackend, MatrixInverse, reciprocal_condition


class CPUBackendFP64(CPUBackend):
    """
    CPU backend using NumPy + SciPy.
    
    Inverts through LAPACK's LU factorisation (``getrf``/``getri``).
    Always uses FP64 precision.
    """
    
    def __init__(self):
        self.name = "cpu_fp64"
        self.precision = "fp64"
    
    def invert_matrix(self, matrix: np.ndarray) -> MatrixInverse:
        """
        Invert using SciPy/LAPACK.
        
        An exactly zero pivot in the LU factorisation (LinAlgError) or a
        non-finite result is reported as failure.
        """
        matrix = np.asarray(matrix, dtype=np.float64)
        
        try:
            # check_finite rejects NaN/Inf input with ValueError; treat as singular
            inverse = inv(matrix, overwrite_a=False, check_finite=True)
        except (LinAlgError, ValueError):
            return MatrixInverse(success=False, inverse=None, rcond=0.0)
        
        if not np.all(np.isfinite(inverse)):
            return MatrixInverse(success=False, inverse=None, rcond=0.0)
        
        return MatrixInverse(
            success=True,
            inverse=inverse,
            rcond=reciprocal_condition(matrix, inverse)
        )
    
    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }

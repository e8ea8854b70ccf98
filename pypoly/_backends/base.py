"""
Abstract base classes for backends.

Defines the interface all backends must implement.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Optional
from dataclasses import dataclass


@dataclass
class MatrixInverse:
    """Outcome of a matrix inversion."""
    success: bool                  # False if the matrix is singular
    inverse: Optional[np.ndarray]  # float64 inverse, None on failure
    rcond: float                   # Reciprocal 1-norm condition estimate (0.0 on failure)


def reciprocal_condition(matrix: np.ndarray, inverse: np.ndarray) -> float:
    """
    Reciprocal condition number in the 1-norm.
    
    ``1 / (||A||_1 * ||A^-1||_1)``; 0.0 for a zero matrix.
    """
    norm_a = np.linalg.norm(matrix, 1)
    norm_inv = np.linalg.norm(inverse, 1)
    if norm_a == 0 or norm_inv == 0 or not np.isfinite(norm_inv):
        return 0.0
    return float(1.0 / (norm_a * norm_inv))


class BackendBase(ABC):
    """Abstract base class for all backends."""
    
    name: str
    precision: str
    
    @abstractmethod
    def invert_matrix(self, matrix: np.ndarray) -> MatrixInverse:
        """
        Invert a square matrix.
        
        Backends implement the inversion with their native types, only
        converting at entry/exit. The input is never modified and nothing
        is retained between calls.
        
        Parameters
        ----------
        matrix : ndarray, shape (d, d)
            Matrix to invert
            
        Returns
        -------
        MatrixInverse
            ``success`` is False when the matrix is singular; the inverse
            is then None and must not be used.
        """
        pass
    
    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass
    
    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


class CPUBackend(BackendBase):
    """CPU backend base class (always FP64)."""
    pass


class GPUBackend(BackendBase):
    """GPU backend base class."""
    pass

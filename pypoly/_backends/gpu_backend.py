"""
GPU backend using PyTorch.

NVIDIA CUDA in FP32 or FP64, Apple Metal (MPS) in FP32 only.
"""

import numpy as np
import warnings
from typing import Optional, Any

from .base import GPUBackend, MatrixInverse, reciprocal_condition


class PyTorchBackend(GPUBackend):
    """
    PyTorch backend.
    
    Converts at entry (numpy → torch) and exit (torch → numpy float64);
    the inversion itself runs on the selected device in the requested
    precision.
    
    Requirements:
    - PyTorch (``pip install torch``)
    - NVIDIA GPU with CUDA, or Apple Silicon for FP32; otherwise the torch
      CPU device is used with a warning
    """
    
    def __init__(self, precision: str = "fp64", device: Optional[str] = None):
        """Initialize PyTorch backend."""
        if precision not in ("fp32", "fp64"):
            raise ValueError(f"precision must be 'fp32' or 'fp64', got {precision!r}")
        
        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for GPU backend. "
                "Install: pip install torch"
            )
        
        self.precision = precision
        self.name = f"pytorch_{precision}"
        self.dtype = torch.float64 if precision == "fp64" else torch.float32
        self.device = self._select_device(device)
    
    def _select_device(self, requested: Optional[str]) -> Any:
        """Select device, preferring CUDA, then MPS (FP32 only), then CPU."""
        torch = self.torch
        
        if requested:
            device = torch.device(requested)
            if device.type == 'mps' and self.precision == 'fp64':
                raise RuntimeError(
                    "FP64 not supported on Apple Metal. "
                    "Use FP32 backend or CPU."
                )
            return device
        
        if torch.cuda.is_available():
            return torch.device('cuda')
        
        if (self.precision == 'fp32' and hasattr(torch.backends, 'mps')
                and torch.backends.mps.is_available()):
            return torch.device('mps')
        
        warnings.warn("No GPU available, using CPU")
        return torch.device('cpu')
    
    def invert_matrix(self, matrix: np.ndarray) -> MatrixInverse:
        """
        Invert on device.
        
        ``torch.linalg.inv_ex`` reports singularity through its ``info``
        tensor instead of raising.
        """
        torch = self.torch
        matrix = np.asarray(matrix, dtype=np.float64)
        
        # Convert ONCE at entry
        a_dev = torch.from_numpy(np.ascontiguousarray(matrix)).to(
            device=self.device, dtype=self.dtype
        )
        inverse_dev, info = torch.linalg.inv_ex(a_dev)
        
        if int(info.item()) != 0:
            return MatrixInverse(success=False, inverse=None, rcond=0.0)
        
        # Convert ONCE at exit
        inverse = inverse_dev.cpu().numpy().astype(np.float64)
        if not np.all(np.isfinite(inverse)):
            return MatrixInverse(success=False, inverse=None, rcond=0.0)
        
        return MatrixInverse(
            success=True,
            inverse=inverse,
            rcond=reciprocal_condition(matrix, inverse)
        )
    
    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'gpu' if self.device.type != 'cpu' else 'cpu',
            'precision': self.precision,
            'device': str(self.device),
            'library': f'PyTorch {self.torch.__version__}',
        }

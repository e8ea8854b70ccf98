"""
Backend selection and management.

Provides a unified matrix-inversion interface over SciPy (CPU), a pure
NumPy reference implementation, and PyTorch (CUDA / Apple Silicon).
"""

from typing import Optional, Union
import warnings

from .base import BackendBase, MatrixInverse
from .precision_detector import (
    detect_gpu_capabilities,
    recommend_precision,
    GPUCapabilities
)
from .reference_backend import ReferenceBackend

# Try importing CPU backend (always available)
try:
    from .cpu_fp64_backend import CPUBackendFP64
    CPU_AVAILABLE = True
except ImportError:
    CPU_AVAILABLE = False
    warnings.warn("CPU backend unavailable - installation error!")

# Try importing PyTorch (optional dependency)
try:
    import torch  # noqa: F401
    from .gpu_backend import PyTorchBackend
    PYTORCH_AVAILABLE = True
except ImportError:
    PYTORCH_AVAILABLE = False


def get_backend(
    backend: Union[str, BackendBase] = 'auto',
    use_fp64: Optional[bool] = None,
) -> BackendBase:
    """
    Get matrix-inversion backend.
    
    Parameters
    ----------
    backend : str or BackendBase
        Backend selection:
        - 'auto': CPU (FP64), or a GPU in FP32 when ``use_fp64=False``
        - 'cpu': SciPy/LAPACK (FP64)
        - 'reference': pure NumPy Gauss-Jordan (FP64)
        - 'gpu': PyTorch on the detected GPU
        - 'pytorch': PyTorch on the best torch device
        A backend instance is returned unchanged.
    
    use_fp64 : bool or None
        Precision preference:
        - None: FP64
        - True: Force FP64
        - False: Allow FP32 (GPU backends only)
    
    Returns
    -------
    BackendBase
        Backend instance
    
    Examples
    --------
    >>> backend = get_backend('auto')
    >>> backend = get_backend('reference')
    >>> backend = get_backend('gpu', use_fp64=False)
    """
    if isinstance(backend, BackendBase):
        return backend
    
    if backend == 'auto':
        if use_fp64 is False and PYTORCH_AVAILABLE:
            caps = detect_gpu_capabilities()
            if caps.has_gpu:
                return PyTorchBackend(precision='fp32')
        
        if not CPU_AVAILABLE:
            return ReferenceBackend()
        return CPUBackendFP64()
    
    elif backend == 'cpu':
        if not CPU_AVAILABLE:
            raise RuntimeError("CPU backend unavailable!")
        return CPUBackendFP64()
    
    elif backend == 'reference':
        return ReferenceBackend()
    
    elif backend == 'gpu':
        caps = detect_gpu_capabilities()
        
        if not caps.has_gpu:
            raise ValueError(
                "No GPU detected.\n"
                "Options:\n"
                "  - Use backend='cpu'\n"
                "  - Install PyTorch with CUDA for NVIDIA\n"
                "  - Install PyTorch with MPS for Apple Silicon"
            )
        
        use_fp64_final = recommend_precision(caps, use_fp64)
        if use_fp64_final and not caps.supports_fp64:
            # Auto precision on a GPU without FP64
            use_fp64_final = False
        return PyTorchBackend(
            precision='fp64' if use_fp64_final else 'fp32',
            device=caps.gpu_type
        )
    
    elif backend == 'pytorch':
        if not PYTORCH_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install torch"
            )
        use_fp64_final = use_fp64 is not False
        return PyTorchBackend(precision='fp64' if use_fp64_final else 'fp32')
    
    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: 'auto', 'cpu', 'reference', 'gpu', 'pytorch'"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    backends = []
    if CPU_AVAILABLE:
        backends.append('cpu')
    backends.append('reference')
    if PYTORCH_AVAILABLE:
        backends.append('pytorch')
        if detect_gpu_capabilities().has_gpu:
            backends.append('gpu')
    return backends


def print_backend_info():
    """Print detailed backend information (diagnostic)."""
    caps = detect_gpu_capabilities()
    
    print("pypoly Backend Status")
    print("=" * 50)
    print(f"\nAvailable Backends:")
    print(f"  CPU (FP64):          {'✓' if CPU_AVAILABLE else '✗'} - LAPACK inversion")
    print(f"  Reference (FP64):    ✓ - Gauss-Jordan inversion")
    print(f"  PyTorch:             {'✓' if PYTORCH_AVAILABLE else '✗'} - torch.linalg inversion")
    
    print(f"\nHardware Detection:")
    if caps.has_gpu:
        print(f"  GPU Type: {caps.gpu_type}")
        print(f"  GPU Name: {caps.gpu_name}")
        print(f"  FP64 Support: {caps.supports_fp64}")
    else:
        print(f"  No GPU detected")
    
    print(f"\nRecommended Backend:")
    try:
        backend = get_backend('auto')
        print(f"  {backend.name}")
    except Exception as e:
        print(f"  Error: {e}")


# Export main interface
__all__ = [
    'get_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'MatrixInverse',
    'GPUCapabilities',
    'detect_gpu_capabilities',
    'CPU_AVAILABLE',
    'PYTORCH_AVAILABLE',
]


if __name__ == "__main__":
    print_backend_info()

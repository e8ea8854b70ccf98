"""
Hardware precision capability detection for pypoly.

Detects a GPU usable by PyTorch and whether it can invert in FP64.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GPUCapabilities:
    """
    GPU capability information.
    
    Attributes
    ----------
    has_gpu : bool
        Whether any GPU is available
    gpu_name : str
        Human-readable GPU name
    gpu_type : str
        Device type: 'cuda', 'mps', or 'none'
    supports_fp64 : bool
        Whether float64 linear algebra runs on the device
    """
    has_gpu: bool
    gpu_name: str
    gpu_type: str
    supports_fp64: bool


def detect_gpu_capabilities() -> GPUCapabilities:
    """
    Detect GPU hardware and FP64 capabilities.
    
    Returns
    -------
    GPUCapabilities
        Detected hardware capabilities
    """
    try:
        import torch
    except ImportError:
        torch = None
    
    if torch is not None:
        if torch.cuda.is_available():
            return GPUCapabilities(
                has_gpu=True,
                gpu_name=torch.cuda.get_device_name(0),
                gpu_type="cuda",
                supports_fp64=True
            )
        
        # Metal has no float64 support
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            return GPUCapabilities(
                has_gpu=True,
                gpu_name="Apple Metal GPU",
                gpu_type="mps",
                supports_fp64=False
            )
    
    return GPUCapabilities(
        has_gpu=False,
        gpu_name="CPU only",
        gpu_type="none",
        supports_fp64=True  # CPU always supports FP64
    )


def recommend_precision(capabilities: GPUCapabilities,
                        user_preference: Optional[bool]) -> bool:
    """
    Decide FP64 vs FP32 for the inversion.
    
    Normal matrices of polynomial fits are badly conditioned, so FP64 is
    chosen unless the caller explicitly asks for FP32.
    
    Parameters
    ----------
    capabilities : GPUCapabilities
        Detected hardware
    user_preference : Optional[bool]
        User's preference (None for auto)
        
    Returns
    -------
    bool
        True for FP64, False for FP32
        
    Raises
    ------
    RuntimeError
        If FP64 is requested on a GPU without FP64 support
    """
    if user_preference is None:
        return True
    
    if user_preference and capabilities.has_gpu and not capabilities.supports_fp64:
        raise RuntimeError(
            f"FP64 requested but not supported on {capabilities.gpu_name}. "
            f"Use FP32 (use_fp64=False) or the CPU backend."
        )
    return bool(user_preference)


def print_capabilities() -> None:
    """Print detected GPU capabilities (for debugging)."""
    caps = detect_gpu_capabilities()
    
    print("GPU Capability Detection")
    print("=" * 50)
    print(f"GPU Available: {caps.has_gpu}")
    print(f"GPU Name: {caps.gpu_name}")
    print(f"GPU Type: {caps.gpu_type}")
    print(f"FP64 Support: {caps.supports_fp64}")


if __name__ == "__main__":
    print_capabilities()

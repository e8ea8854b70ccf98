"""
Test backend implementations with auto-detection.

Tests appropriate backends based on available hardware:
- CPU and reference: Always tested
- PyTorch: Tested if torch is installed (see test_gpu_backends.py)
"""

import pytest
import numpy as np
from pypoly._backends import (
    PYTORCH_AVAILABLE,
    get_backend,
    list_available_backends,
    print_backend_info
)
from pypoly._backends.base import BackendBase, reciprocal_condition
from pypoly._backends.precision_detector import (
    GPUCapabilities,
    detect_gpu_capabilities,
    print_capabilities,
    recommend_precision
)
from pypoly.reference import invert_matrix


# Detect hardware once at module level
GPU_CAPS = detect_gpu_capabilities()
HAS_ANY_GPU = GPU_CAPS.has_gpu


def hilbert(d):
    """Hilbert matrix, a classic ill-conditioned test case."""
    i = np.arange(d)
    return 1.0 / (i[:, None] + i[None, :] + 1.0)


class TestBackendDetection:
    """Test hardware detection and backend availability."""
    
    def test_detect_gpu_capabilities(self):
        """Test GPU detection returns valid capabilities."""
        caps = detect_gpu_capabilities()
        assert caps.gpu_name is not None
        assert caps.gpu_type in ['cuda', 'mps', 'none']
        assert caps.has_gpu == (caps.gpu_type != 'none')
        if caps.gpu_type == 'mps':
            assert not caps.supports_fp64
    
    def test_list_backends(self):
        """Test backend listing."""
        backends = list_available_backends()
        assert isinstance(backends, list)
        assert 'cpu' in backends
        assert 'reference' in backends
        assert ('pytorch' in backends) == PYTORCH_AVAILABLE
    
    def test_print_backend_info(self, capsys):
        """Test diagnostic printing."""
        print_backend_info()
        captured = capsys.readouterr()
        assert 'Backend Status' in captured.out
        assert 'CPU' in captured.out
        assert 'cpu_fp64' in captured.out
    
    def test_print_capabilities(self, capsys):
        """Test capability printing."""
        print_capabilities()
        captured = capsys.readouterr()
        assert "GPU Capability Detection" in captured.out
        assert f"GPU Type: {GPU_CAPS.gpu_type}" in captured.out


class TestPrecisionRecommendation:
    """Test FP64/FP32 selection."""
    
    def test_default_is_fp64(self):
        """No preference means FP64."""
        caps = GPUCapabilities(True, "Test GPU", "cuda", True)
        assert recommend_precision(caps, None) is True
    
    def test_explicit_fp32(self):
        """use_fp64=False selects FP32."""
        caps = GPUCapabilities(True, "Test GPU", "cuda", True)
        assert recommend_precision(caps, False) is False
    
    def test_fp64_on_metal_rejected(self):
        """FP64 cannot be forced on a GPU without FP64 support."""
        caps = GPUCapabilities(True, "Apple Metal GPU", "mps", False)
        with pytest.raises(RuntimeError, match="FP64 requested"):
            recommend_precision(caps, True)


@pytest.mark.parametrize("name", ['cpu', 'reference'])
class TestCPUBackends:
    """Test CPU backends (always available)."""
    
    def test_backend_creation(self, name):
        """Test backend initializes correctly."""
        backend = get_backend(name)
        assert isinstance(backend, BackendBase)
        assert backend.precision == 'fp64'
        assert name in repr(backend) or backend.name in repr(backend)
    
    def test_device_info(self, name):
        """Test backend device info."""
        info = get_backend(name).get_device_info()
        assert info['backend'] == 'cpu'
        assert info['precision'] == 'fp64'
        assert 'NumPy' in info['library']
    
    def test_invert(self, name):
        """Inverse of a well-conditioned matrix."""
        np.random.seed(42)
        a = np.random.randn(5, 5) + 5 * np.eye(5)
        result = get_backend(name).invert_matrix(a)
        
        assert result.success
        assert result.inverse.shape == (5, 5)
        assert result.inverse.dtype == np.float64
        np.testing.assert_allclose(result.inverse @ a, np.eye(5), atol=1e-12)
        assert 0 < result.rcond <= 1
    
    def test_singular(self, name):
        """A singular matrix is reported, not raised."""
        a = np.array([[1.0, 2.0], [2.0, 4.0]])
        result = get_backend(name).invert_matrix(a)
        assert not result.success
        assert result.inverse is None
        assert result.rcond == 0.0
    
    def test_input_not_modified(self, name):
        """The input matrix is left untouched."""
        a = np.array([[4.0, 1.0], [2.0, 3.0]])
        original = a.copy()
        get_backend(name).invert_matrix(a)
        np.testing.assert_array_equal(a, original)
    
    def test_normal_matrix(self, name):
        """Inverts the normal matrix of a quadratic fit."""
        x = np.linspace(-1, 1, 11)
        XT = np.vstack([np.ones_like(x), x, x**2])
        G = XT @ XT.T
        result = get_backend(name).invert_matrix(G)
        assert result.success
        np.testing.assert_allclose(result.inverse, np.linalg.inv(G), rtol=1e-10, atol=1e-12)


class TestReferenceInversion:
    """Test the Gauss-Jordan reference inversion."""
    
    def test_matches_cpu(self):
        """Reference and LAPACK inverses agree."""
        np.random.seed(0)
        a = np.random.randn(8, 8) + 8 * np.eye(8)
        ref = get_backend('reference').invert_matrix(a)
        cpu = get_backend('cpu').invert_matrix(a)
        np.testing.assert_allclose(ref.inverse, cpu.inverse, rtol=1e-10, atol=1e-14)
        assert ref.rcond == pytest.approx(cpu.rcond, rel=1e-8)
    
    def test_requires_pivoting(self):
        """A zero in the leading position needs a row swap."""
        a = np.array([[0.0, 1.0], [1.0, 0.0]])
        success, inverse = invert_matrix(a)
        assert success
        np.testing.assert_array_equal(inverse, a)
    
    def test_hilbert(self):
        """Moderately ill-conditioned matrices still invert."""
        a = hilbert(5)
        success, inverse = invert_matrix(a)
        assert success
        np.testing.assert_allclose(inverse @ a, np.eye(5), atol=1e-8)
    
    def test_custom_epsilon(self):
        """A large pivot threshold rejects otherwise invertible matrices."""
        a = np.diag([1.0, 1e-3])
        assert invert_matrix(a)[0]
        success, inverse = invert_matrix(a, epsilon=1e-2)
        assert not success
        assert inverse is None
    
    def test_empty(self):
        """A 0x0 matrix inverts to a 0x0 matrix."""
        success, inverse = invert_matrix(np.empty((0, 0)))
        assert success
        assert inverse.shape == (0, 0)
    
    def test_non_square(self):
        """Non-square input is rejected."""
        with pytest.raises(ValueError, match="square"):
            invert_matrix(np.ones((2, 3)))
    
    def test_reciprocal_condition(self):
        """rcond of the identity is 1, of a zero matrix 0."""
        eye = np.eye(3)
        assert reciprocal_condition(eye, eye) == pytest.approx(1.0)
        assert reciprocal_condition(np.zeros((2, 2)), np.zeros((2, 2))) == 0.0


class TestAutoBackend:
    """Test automatic backend selection."""
    
    def test_auto_backend_selects_cpu(self):
        """Default selection is the FP64 CPU backend."""
        backend = get_backend('auto')
        assert backend.name == 'cpu_fp64'
        assert hasattr(backend, 'invert_matrix')
    
    def test_auto_backend_fp64_forced(self):
        """use_fp64=True keeps the CPU backend."""
        backend = get_backend('auto', use_fp64=True)
        assert backend.precision == 'fp64'
    
    def test_auto_backend_consistency(self):
        """Test auto backend gives deterministic results."""
        backend = get_backend('auto')
        a = hilbert(4)
        result1 = backend.invert_matrix(a)
        result2 = backend.invert_matrix(a)
        np.testing.assert_array_equal(result1.inverse, result2.inverse)
    
    def test_instance_passthrough(self):
        """A backend instance is returned unchanged."""
        backend = get_backend('reference')
        assert get_backend(backend) is backend
    
    @pytest.mark.skipif(not HAS_ANY_GPU, reason="No GPU available")
    def test_gpu_backend_selection(self):
        """Test 'gpu' backend routes to a PyTorch device."""
        backend = get_backend('gpu')
        assert 'pytorch' in backend.name
        assert backend.get_device_info()['backend'] == 'gpu'


class TestBackendErrors:
    """Test error handling in backend selection."""
    
    def test_invalid_backend_name(self):
        """Test error on invalid backend name."""
        with pytest.raises(ValueError, match="Unknown backend"):
            get_backend('invalid_backend')
    
    @pytest.mark.skipif(HAS_ANY_GPU, reason="Test requires no GPU")
    def test_gpu_backend_without_gpu(self):
        """Test error when requesting GPU without GPU."""
        with pytest.raises(ValueError, match="No GPU detected"):
            get_backend('gpu')
    
    @pytest.mark.skipif(PYTORCH_AVAILABLE, reason="Test requires PyTorch missing")
    def test_pytorch_without_torch(self):
        """Test error when requesting PyTorch without it installed."""
        with pytest.raises(RuntimeError, match="PyTorch backend unavailable"):
            get_backend('pytorch')

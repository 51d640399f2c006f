"""
Polynomial fitting backends.

Available backends:
    CPUCholeskyBackend: LAPACK (default) or reference-loop kernel
    GPUCholeskyBackend: PyTorch on CUDA/MPS (import from .gpu)
"""

from pypolyfit.polynomial.backends.cpu import CPUCholeskyBackend

__all__ = [
    "CPUCholeskyBackend",
]

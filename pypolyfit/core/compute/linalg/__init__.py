"""
Linear algebra kernels for PyPolyFit.

Each kernel implements the LinearAlgebra protocol
(pypolyfit.core.protocols): multiply, multiply_vector, cholesky_factor,
triangular_solve.

Kernels:
    LapackLinearAlgebra      scipy BLAS/LAPACK (dgemm, dgemv, dpotrf, dtrsm)
    ReferenceLinearAlgebra   hand-rolled loops, for small problems and checks
    TorchLinearAlgebra       PyTorch on CUDA/MPS (import from .gpu; optional)
"""

from pypolyfit.core.compute.linalg.blas import LapackLinearAlgebra
from pypolyfit.core.compute.linalg.reference import ReferenceLinearAlgebra

__all__ = [
    "LapackLinearAlgebra",
    "ReferenceLinearAlgebra",
]

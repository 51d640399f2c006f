"""
GPU backend for polynomial fitting using PyTorch.

Same Cholesky pipeline as the CPU backend with the matrix work done by
torch.linalg. Validated against the CPU reference; FP64 by default
because the normal equations square the condition number.
"""

from pypolyfit.core.compute.linalg.gpu import TorchLinearAlgebra
from pypolyfit.core.compute.timing import Timer
from pypolyfit.core.result import Result
from pypolyfit.polynomial.backends._common import solve_design
from pypolyfit.polynomial.design import PolynomialDesign
from pypolyfit.polynomial.solution import PolynomialParams


class GPUCholeskyBackend:
    """
    GPU backend (CUDA or MPS).

    Args:
        use_fp64: Compute in double precision. MPS only supports FP32.
        device: 'cuda', 'cuda:N' or 'mps'
    """

    def __init__(self, use_fp64: bool = True, device: str = 'cuda'):
        self._linalg = TorchLinearAlgebra(device=device, use_fp64=use_fp64)
        self.use_fp64 = use_fp64

    @property
    def name(self) -> str:
        precision = "fp64" if self.use_fp64 else "fp32"
        return f'gpu_cholesky_{precision}'

    def solve(self, design: PolynomialDesign) -> Result[PolynomialParams]:
        return solve_design(design, self._linalg, self.name, Timer(sync_cuda=True))

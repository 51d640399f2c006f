"""
PyTorch-backed linear algebra kernel (CUDA or MPS).

Inputs and outputs are NumPy arrays; tensors live on the device only for
the duration of a call. Results are returned as float64 regardless of the
compute dtype.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pypolyfit.core.exceptions import NotPositiveDefiniteError


class TorchLinearAlgebra:
    """
    LinearAlgebra implementation using torch.linalg.

    Args:
        device: 'cuda', 'cuda:N' or 'mps'
        use_fp64: Compute in float64 (MPS does not support it)
    """

    def __init__(self, device: str = 'cuda', use_fp64: bool = True):
        import torch

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            if use_fp64:
                raise RuntimeError(
                    "MPS does not support float64. Use use_fp64=False "
                    "or use backend='cpu' for double precision."
                )
        else:
            raise ValueError(f"Unknown GPU device: {device!r}. Use 'cuda' or 'mps'.")

        self._torch = torch
        self.device = torch.device(device)
        self.dtype = torch.float64 if use_fp64 else torch.float32
        self.use_fp64 = use_fp64

    @property
    def name(self) -> str:
        return f"torch_{'fp64' if self.use_fp64 else 'fp32'}"

    def _to_device(self, arr: NDArray[np.floating[Any]]):
        return self._torch.as_tensor(
            np.array(arr, order='C'), dtype=self.dtype, device=self.device
        )

    @staticmethod
    def _to_numpy(t) -> NDArray[np.floating[Any]]:
        return t.cpu().numpy().astype(np.float64)

    def multiply(self, a, b, *, trans_a=False, trans_b=False):
        A = self._to_device(a)
        B = self._to_device(b)
        if trans_a:
            A = A.T
        if trans_b:
            B = B.T
        return self._to_numpy(A @ B)

    def multiply_vector(self, a, x, *, trans=False):
        A = self._to_device(a)
        if trans:
            A = A.T
        return self._to_numpy(self._torch.mv(A, self._to_device(x)))

    def cholesky_factor(self, a):
        L, info = self._torch.linalg.cholesky_ex(self._to_device(a), upper=False)
        status = int(info.item())
        if status != 0:
            raise NotPositiveDefiniteError(
                f"Cholesky factorization failed: leading minor of order {status} "
                f"is not positive definite (cholesky_ex info={status})",
                matrix_name="X'X",
                info=status,
            )
        return self._to_numpy(L)

    def triangular_solve(self, l, b, *, trans=False):
        L = self._to_device(l)
        rhs = self._to_device(b)
        is_vector = rhs.ndim == 1
        if is_vector:
            rhs = rhs.unsqueeze(1)
        if trans:
            out = self._torch.linalg.solve_triangular(L.T, rhs, upper=True)
        else:
            out = self._torch.linalg.solve_triangular(L, rhs, upper=False)
        if is_vector:
            out = out.squeeze(1)
        return self._to_numpy(out)

"""
Core protocols for PyPolyFit.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC so that kernels and
backends do not need to inherit from anything in this package.

Design Principles:
    - Minimal contracts: prescribe only what the pipeline calls
    - Explicit parameters: every call states its transposes, nothing is
      carried between calls in shared state
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class LinearAlgebra(Protocol):
    """
    Dense linear algebra capability used by the normal-equations pipeline.

    The four operations mirror the BLAS/LAPACK routines the method is
    defined in terms of:

        multiply          gemm   C = 1.0 * op(A) op(B) + 0.0 * C
        multiply_vector   gemv   y = 1.0 * op(A) x + 0.0 * y
        cholesky_factor   potrf  A = L L'  (lower)
        triangular_solve  trsm   op(L) X = B  (left side, lower, non-unit)

    Implementations return new float64 arrays and never modify their
    inputs.
    """

    @property
    def name(self) -> str:
        """Kernel identifier, e.g. 'lapack', 'reference', 'torch'."""
        ...

    def multiply(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans_a: bool = False,
        trans_b: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """Matrix-matrix product op(a) @ op(b)."""
        ...

    def multiply_vector(
        self,
        a: NDArray[np.floating[Any]],
        x: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """Matrix-vector product op(a) @ x."""
        ...

    def cholesky_factor(
        self,
        a: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Lower Cholesky factor of a symmetric positive definite matrix.

        Only the lower triangle of the returned array is meaningful.

        Raises:
            NotPositiveDefiniteError: If the factorization reports a
                non-zero status; the status is kept on the exception.
        """
        ...

    def triangular_solve(
        self,
        l: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """Solve L x = b (trans=False) or L' x = b (trans=True)."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a Result envelope
    around its parameter payload. Backends are stateless apart from the
    configuration passed at construction.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_cholesky', 'gpu_cholesky_fp64'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If the normal matrix cannot be factored or
                the response is degenerate
        """
        ...

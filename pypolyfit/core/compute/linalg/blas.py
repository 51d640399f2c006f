"""
LAPACK-backed linear algebra kernel.

Calls the BLAS/LAPACK routines the normal-equations method is written
in terms of (dgemm, dgemv, dpotrf, dtrsm) through scipy's wrappers.
Matrices are passed column-major, the layout Fortran routines expect, so
no hidden transposed copies are made.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import blas, lapack

from pypolyfit.core.exceptions import NotPositiveDefiniteError


class LapackLinearAlgebra:
    """
    LinearAlgebra implementation on top of scipy.linalg.blas/lapack.

    Every call states its own alpha/beta and transpose flags; nothing is
    shared between calls.
    """

    @property
    def name(self) -> str:
        return 'lapack'

    def multiply(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans_a: bool = False,
        trans_b: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """C = 1.0 * op(A) op(B) + 0.0 * C via dgemm."""
        return blas.dgemm(
            1.0,
            np.asfortranarray(a, dtype=np.float64),
            np.asfortranarray(b, dtype=np.float64),
            beta=0.0,
            trans_a=int(trans_a),
            trans_b=int(trans_b),
        )

    def multiply_vector(
        self,
        a: NDArray[np.floating[Any]],
        x: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """y = 1.0 * op(A) x + 0.0 * y via dgemv."""
        return blas.dgemv(
            1.0,
            np.asfortranarray(a, dtype=np.float64),
            np.ascontiguousarray(x, dtype=np.float64),
            beta=0.0,
            trans=int(trans),
        )

    def cholesky_factor(
        self,
        a: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Lower Cholesky factor via dpotrf, computed over a copy of A.

        The strict upper triangle is left as dpotrf leaves it (clean=0);
        callers must not read it.

        Raises:
            NotPositiveDefiniteError: dpotrf returned info > 0
            ValueError: dpotrf rejected an argument (info < 0)
        """
        c, info = lapack.dpotrf(
            np.array(a, dtype=np.float64, order='F', copy=True),
            lower=1,
            clean=0,
        )
        if info > 0:
            raise NotPositiveDefiniteError(
                f"Cholesky factorization failed: leading minor of order {info} "
                f"is not positive definite (dpotrf info={info})",
                matrix_name="X'X",
                info=int(info),
            )
        if info < 0:
            raise ValueError(f"dpotrf: illegal value in argument {-info}")
        return c

    def triangular_solve(
        self,
        l: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """
        Solve op(L) X = B via dtrsm (left side, lower, non-unit diagonal).

        A 1-D right-hand side is solved as a single column and returned 1-D.
        """
        rhs = np.asarray(b, dtype=np.float64)
        is_vector = rhs.ndim == 1
        if is_vector:
            rhs = rhs.reshape(-1, 1)

        out = blas.dtrsm(
            1.0,
            np.asfortranarray(l, dtype=np.float64),
            np.array(rhs, order='F', copy=True),
            side=0,
            lower=1,
            trans_a=int(trans),
            diag=0,
        )
        return out.ravel() if is_vector else out

"""
Hand-rolled reference kernel.

Plain loop implementations of the four operations, written for clarity
rather than speed. Useful for small problems and as an independent check
on the LAPACK kernel: both must agree to the CPU_FP64 tolerance tier.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pypolyfit.core.exceptions import NotPositiveDefiniteError


class ReferenceLinearAlgebra:
    """LinearAlgebra implementation using explicit O(n³) loops."""

    @property
    def name(self) -> str:
        return 'reference'

    def multiply(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans_a: bool = False,
        trans_b: bool = False,
    ) -> NDArray[np.floating[Any]]:
        A = np.asarray(a, dtype=np.float64)
        B = np.asarray(b, dtype=np.float64)
        if trans_a:
            A = A.T
        if trans_b:
            B = B.T

        m, k = A.shape
        k2, n = B.shape
        if k != k2:
            raise ValueError(f"multiply: inner dimensions differ ({k} vs {k2})")

        C = np.zeros((m, n), dtype=np.float64, order='F')
        for j in range(n):
            for p in range(k):
                b_pj = B[p, j]
                if b_pj == 0.0:
                    continue
                for i in range(m):
                    C[i, j] += A[i, p] * b_pj
        return C

    def multiply_vector(
        self,
        a: NDArray[np.floating[Any]],
        x: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        A = np.asarray(a, dtype=np.float64)
        v = np.asarray(x, dtype=np.float64)
        if trans:
            A = A.T

        m, n = A.shape
        if v.shape != (n,):
            raise ValueError(f"multiply_vector: expected vector of length {n}, got {v.shape}")

        y = np.zeros(m, dtype=np.float64)
        for j in range(n):
            v_j = v[j]
            for i in range(m):
                y[i] += A[i, j] * v_j
        return y

    def cholesky_factor(
        self,
        a: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Column-by-column (left-looking) Cholesky, reading the lower triangle.

        Stops at the first non-positive or non-finite pivot and reports its
        1-based order, matching dpotrf's info convention.
        """
        L = np.array(a, dtype=np.float64, order='F', copy=True)
        n = L.shape[0]

        for j in range(n):
            pivot = L[j, j]
            for k in range(j):
                pivot -= L[j, k] * L[j, k]
            if not pivot > 0.0 or not np.isfinite(pivot):
                raise NotPositiveDefiniteError(
                    f"Cholesky factorization failed: leading minor of order {j + 1} "
                    f"is not positive definite (pivot={pivot:.6g})",
                    matrix_name="X'X",
                    info=j + 1,
                )
            L[j, j] = np.sqrt(pivot)

            for i in range(j + 1, n):
                s = L[i, j]
                for k in range(j):
                    s -= L[i, k] * L[j, k]
                L[i, j] = s / L[j, j]

        return L

    def triangular_solve(
        self,
        l: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
        *,
        trans: bool = False,
    ) -> NDArray[np.floating[Any]]:
        """Forward substitution for L, back substitution for L'."""
        L = np.asarray(l, dtype=np.float64)
        rhs = np.array(b, dtype=np.float64, copy=True)
        is_vector = rhs.ndim == 1
        if is_vector:
            rhs = rhs.reshape(-1, 1)

        n = L.shape[0]
        X = np.zeros_like(rhs)

        for c in range(rhs.shape[1]):
            if not trans:
                for i in range(n):
                    s = rhs[i, c]
                    for k in range(i):
                        s -= L[i, k] * X[k, c]
                    X[i, c] = s / L[i, i]
            else:
                # L'[i, k] == L[k, i]
                for i in range(n - 1, -1, -1):
                    s = rhs[i, c]
                    for k in range(i + 1, n):
                        s -= L[k, i] * X[k, c]
                    X[i, c] = s / L[i, i]

        return X.ravel() if is_vector else X

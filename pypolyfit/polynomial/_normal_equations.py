"""
Normal-equations solver.

Solves min_b ‖Xb - y‖² through the normal equations X'X b = X'y:

    A = X'X                (gemm)
    P = X'y                (gemv)
    A = L L'               (potrf, over a copy of A)
    L Q = P                (trsm, forward substitution)
    L' B = Q               (trsm, back substitution)

Factoring once and doing two triangular solves costs O(p³/3 + p²), and
it is the stable route for a symmetric positive definite A. A is never
inverted.

Every step goes through a LinearAlgebra kernel, so the same code runs on
LAPACK, the reference loops, or torch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pypolyfit.core.compute.timing import Timer
from pypolyfit.core.protocols import LinearAlgebra

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalEquations:
    """Intermediate and final quantities of one normal-equations solve.

    Attributes:
        A: Normal matrix X'X, shape (p, p).
        P: Projection X'y, shape (p,).
        L: Lower Cholesky factor of A, strict upper triangle zero.
        Q: Forward solution L⁻¹P, shape (p,).
        B: Coefficients L'⁻¹Q, shape (p,).
    """
    A: NDArray[np.floating[Any]]
    P: NDArray[np.floating[Any]]
    L: NDArray[np.floating[Any]]
    Q: NDArray[np.floating[Any]]
    B: NDArray[np.floating[Any]]


def solve_normal_equations(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    linalg: LinearAlgebra,
    timer: Timer | None = None,
) -> NormalEquations:
    """Solve X'X B = X'y by Cholesky factorization and two triangular solves.

    Args:
        X: Design matrix (n, p), n >= p.
        y: Target vector (n,).
        linalg: Kernel providing multiply, multiply_vector,
            cholesky_factor and triangular_solve.
        timer: Optional timer; each step is recorded as a section.

    Returns:
        NormalEquations with A, P, L, Q, B.

    Raises:
        NotPositiveDefiniteError: If A cannot be factored. Raised before
            any triangular solve runs.
    """
    timer = timer or Timer()
    p = X.shape[1]

    with timer.section('normal_matrix'):
        A = linalg.multiply(X, X, trans_a=True)
    logger.debug("A = X'X\n%s", A)

    with timer.section('projection'):
        P = linalg.multiply_vector(X, y, trans=True)
    logger.debug("P = X'y\n%s", P)

    with timer.section('cholesky'):
        L = linalg.cholesky_factor(A)
        # potrf leaves the strict upper triangle untouched
        L[np.triu_indices(p, k=1)] = 0.0
    logger.debug("L = chol(A)\n%s", L)

    with timer.section('forward_substitution'):
        Q = linalg.triangular_solve(L, P, trans=False)
    logger.debug("Q = L^{-1} P\n%s", Q)

    with timer.section('back_substitution'):
        B = linalg.triangular_solve(L, Q, trans=True)
    logger.debug("B = L'^{-1} Q\n%s", B)

    return NormalEquations(A=A, P=P, L=L, Q=Q, B=B)

"""
CPU backend for polynomial fitting.

Normal equations solved by Cholesky factorization. The default kernel
calls LAPACK through scipy; the reference kernel runs the same steps in
plain Python loops.
"""

from typing import Literal

from pypolyfit.core.compute.linalg import LapackLinearAlgebra, ReferenceLinearAlgebra
from pypolyfit.core.compute.timing import Timer
from pypolyfit.core.result import Result
from pypolyfit.polynomial.backends._common import solve_design
from pypolyfit.polynomial.design import PolynomialDesign
from pypolyfit.polynomial.solution import PolynomialParams


class CPUCholeskyBackend:
    """
    CPU backend using Cholesky factorization of X'X.

    Implements the Backend protocol for PolynomialDesign -> PolynomialParams.

    Args:
        kernel: 'lapack' (default) or 'reference'
    """

    def __init__(self, kernel: Literal['lapack', 'reference'] = 'lapack'):
        if kernel == 'lapack':
            self._linalg = LapackLinearAlgebra()
        elif kernel == 'reference':
            self._linalg = ReferenceLinearAlgebra()
        else:
            raise ValueError(f"Unknown kernel: {kernel!r}")
        self._kernel = kernel

    @property
    def name(self) -> str:
        if self._kernel == 'reference':
            return 'cpu_cholesky_reference'
        return 'cpu_cholesky'

    def solve(self, design: PolynomialDesign) -> Result[PolynomialParams]:
        """
        Fit the polynomial.

        Algorithm:
            1. A = X'X, P = X'y
            2. A = LL'
            3. LQ = P, L'B = Q
            4. Ŷ = XB / scale, R²

        Raises:
            NotPositiveDefiniteError: If X'X is not positive definite
            DegenerateVarianceError: If all y are identical
        """
        return solve_design(design, self._linalg, self.name, Timer())

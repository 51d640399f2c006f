"""
Polynomial fit solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray
from numpy.polynomial import polynomial as npoly

from pypolyfit.core.result import Result

if TYPE_CHECKING:
    from pypolyfit.polynomial.design import PolynomialDesign


@dataclass(frozen=True)
class PolynomialParams:
    """
    Parameter payload for a polynomial fit.

    This is the immutable data computed by backends. Matrix quantities
    (A, P, L, Q) are in scaled units; fitted values and the statistics
    are in original units.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    normal_matrix: NDArray[np.floating[Any]]
    projection: NDArray[np.floating[Any]]
    cholesky_factor: NDArray[np.floating[Any]]
    forward_solution: NDArray[np.floating[Any]]
    sse: float
    variance: float
    r_squared: float


@dataclass
class PolynomialSolution:
    """
    User-facing polynomial fit results.

    Wraps the backend Result and the design it was computed from.
    """
    _result: Result[PolynomialParams]
    _design: 'PolynomialDesign'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Coefficients b₀..b_d, constant term first."""
        return self._result.params.coefficients

    @property
    def degree(self) -> int:
        return self._design.degree

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def scale(self) -> float:
        return self._design.scale

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Observed x in original units."""
        return self._design.x_raw

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Observed y in original units."""
        return self._design.y_raw

    @property
    def design_matrix(self) -> NDArray[np.floating[Any]]:
        """Vandermonde matrix in original units (column j = x**j)."""
        return self._design.unscaled_X()

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def sse(self) -> float:
        """Sum of squared errors Σ(ŷ - y)²."""
        return self._result.params.sse

    @property
    def variance(self) -> float:
        """Total sum of squares Σ(y - ȳ)²."""
        return self._result.params.variance

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def normal_matrix(self) -> NDArray[np.floating[Any]]:
        """A = X'X (scaled units)."""
        return self._result.params.normal_matrix

    @property
    def projection(self) -> NDArray[np.floating[Any]]:
        """P = X'y (scaled units)."""
        return self._result.params.projection

    @property
    def cholesky_factor(self) -> NDArray[np.floating[Any]]:
        """L with A = LL'."""
        return self._result.params.cholesky_factor

    @property
    def forward_solution(self) -> NDArray[np.floating[Any]]:
        """Q with LQ = P."""
        return self._result.params.forward_solution

    def normal_equations_residual(self) -> float:
        """‖AB - P‖₂, the residual of the solved normal equations."""
        r = self.normal_matrix @ self.coefficients - self.projection
        return float(np.linalg.norm(r))

    def predict(self, x: ArrayLike) -> NDArray[np.floating[Any]]:
        """Evaluate the fitted polynomial at new x values."""
        return npoly.polyval(np.asarray(x, dtype=np.float64), self.coefficients)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self, intermediates: bool = False) -> str:
        """
        Text report of the fit.

        Args:
            intermediates: Also print A, P, L and Q.
        """
        lines = [
            "Polynomial Least Squares Fit",
            "=" * 60,
            f"Observations: {self.n}",
            f"Degree: {self.degree}",
            f"Scale factor: {self.scale:g}",
            f"R-squared: {self.r_squared:.6f}",
            f"SSE: {self.sse:.6f}",
            "",
            "Coefficients:",
            "-" * 60,
        ]
        for j, b in enumerate(self.coefficients):
            lines.append(f"  b[{j}] (x^{j}): {b:14.6f}")
        lines.append("-" * 60)

        if intermediates:
            with np.printoptions(precision=6, suppress=True):
                lines += [
                    "",
                    "A = X^T X",
                    str(self.normal_matrix),
                    "",
                    "P = X^T y",
                    str(self.projection),
                    "",
                    "L = Chol(A)",
                    str(self.cholesky_factor),
                    "",
                    "Q = L^{-1} P",
                    str(self.forward_solution),
                    "-" * 60,
                ]

        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PolynomialSolution(n={self.n}, degree={self.degree}, "
            f"r_squared={self.r_squared:.4f})"
        )

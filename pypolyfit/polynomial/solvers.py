"""
Solver dispatch for polynomial fitting.

This module provides the fit() function (public API) and backend selection.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from pypolyfit.core.datasource import DataSource
from pypolyfit.core.exceptions import ValidationError
from pypolyfit.polynomial.design import PolynomialDesign, DEFAULT_SCALE
from pypolyfit.polynomial.solution import PolynomialSolution
from pypolyfit.polynomial.backends.cpu import CPUCholeskyBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_cholesky', 'reference', 'gpu']

BACKEND_CHOICES: tuple[str, ...] = ('auto', 'cpu', 'cpu_cholesky', 'reference', 'gpu')


def fit(
    x: ArrayLike | DataSource | PolynomialDesign,
    y: ArrayLike | None = None,
    *,
    degree: int | None = None,
    scale: float = DEFAULT_SCALE,
    backend: BackendChoice = 'auto',
) -> PolynomialSolution:
    """
    Fit a polynomial of the given degree by least squares.

    Solves min_b Σ(yᵢ - Σⱼ bⱼ xᵢʲ)² through the normal equations, with a
    Cholesky factorization of X'X and two triangular solves.

    Args:
        x: Observed x values, a DataSource with 'x' and 'y' columns, or a
           prebuilt PolynomialDesign.
        y: Observed y values (required when x is an array).
        degree: Polynomial degree d >= 0 (required unless x is a design).
        scale: Conditioning factor applied to X and y before solving.
               Does not change the result beyond rounding error.
        backend:
            - 'auto' / 'cpu' / 'cpu_cholesky': LAPACK kernel
            - 'reference': hand-rolled loop kernel
            - 'gpu': PyTorch kernel on CUDA (requires torch)

    Returns:
        PolynomialSolution with coefficients, fitted values and R²

    Raises:
        ValidationError: Bad degree, scale, or backend
        MalformedInputError: Non-numeric or mismatched x/y
        InsufficientDataError: Fewer than degree+1 observations
        NotPositiveDefiniteError: X'X cannot be Cholesky-factored
        DegenerateVarianceError: All y identical, R² undefined

    Example:
        >>> from pypolyfit import fit
        >>> result = fit([0, 1, 2, 3], [1, 2, 5, 10], degree=2)
        >>> result.coefficients   # ≈ [1, 0, 1]
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = _ensure_design(x, y, degree, scale)

    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Solve ===
    result = backend_impl.solve(design)

    return PolynomialSolution(_result=result, _design=design)


def _ensure_design(
    x: ArrayLike | DataSource | PolynomialDesign,
    y: ArrayLike | None,
    degree: int | None,
    scale: float,
) -> PolynomialDesign:
    """Build a PolynomialDesign from whatever fit() was given."""
    if isinstance(x, PolynomialDesign):
        if degree is not None and degree != x.degree:
            raise ValidationError(
                f"degree={degree} conflicts with design degree {x.degree}"
            )
        return x

    if degree is None:
        raise ValidationError("degree required when fitting from data")

    if isinstance(x, DataSource):
        if y is not None:
            raise ValidationError("y must not be given with a DataSource")
        return PolynomialDesign.from_datasource(x, degree, scale=scale)

    if y is None:
        raise ValidationError("y required when x is an array")
    return PolynomialDesign.from_arrays(x, y, degree, scale=scale)


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the backend.

    Raises:
        ValidationError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice in ('auto', 'cpu', 'cpu_cholesky'):
        return CPUCholeskyBackend()

    if choice == 'reference':
        return CPUCholeskyBackend(kernel='reference')

    if choice == 'gpu':
        from pypolyfit.polynomial.backends.gpu import GPUCholeskyBackend
        return GPUCholeskyBackend()

    raise ValidationError(f"Unknown backend: {choice!r}")

"""
Polynomial least-squares fitting.

Public API:
    fit(x, y, degree=d, ...) -> PolynomialSolution

The fit() function is the only entry point. It handles:
    - Input validation
    - Design construction (scaled Vandermonde matrix)
    - Backend selection
    - Result wrapping

Result tables and plots are produced by export.write_results() and
plotting.plot_fit().

Example:
    >>> from pypolyfit.polynomial import fit
    >>> result = fit(x, y, degree=2)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pypolyfit.polynomial.design import PolynomialDesign, DEFAULT_SCALE
from pypolyfit.polynomial.solution import PolynomialSolution, PolynomialParams
from pypolyfit.polynomial.solvers import fit
from pypolyfit.polynomial.export import write_results

__all__ = [
    "fit",
    "write_results",
    "PolynomialDesign",
    "PolynomialSolution",
    "PolynomialParams",
    "DEFAULT_SCALE",
]

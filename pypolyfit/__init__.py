"""
PyPolyFit: polynomial least squares via Cholesky-factored normal equations.

Submodules:
    polynomial: Design matrix, solvers, solution, result tables, plotting
    core: Exceptions, validation, data loading, linear algebra kernels
    cli: Command-line entry point
"""

__version__ = "0.1.0"

from pypolyfit import polynomial
from pypolyfit.core.datasource import DataSource
from pypolyfit.polynomial import fit

__all__ = [
    "__version__",
    "polynomial",
    "DataSource",
    "fit",
]

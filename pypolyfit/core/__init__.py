"""
Core infrastructure for PyPolyFit.

Key components:
    protocols: LinearAlgebra, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Observation loading (count-header files, arrays, frames)
    compute: Timing, tolerances, linear algebra kernels
"""

from pypolyfit.core.protocols import LinearAlgebra, Backend
from pypolyfit.core.result import Result
from pypolyfit.core.datasource import DataSource, read_observations
from pypolyfit.core.exceptions import (
    PyPolyFitError,
    ValidationError,
    DimensionError,
    MalformedInputError,
    InsufficientDataError,
    NumericalError,
    NotPositiveDefiniteError,
    DegenerateVarianceError,
    AllocationError,
)

__all__ = [
    # Protocols
    "LinearAlgebra",
    "Backend",
    # Result
    "Result",
    # Data
    "DataSource",
    "read_observations",
    # Exceptions
    "PyPolyFitError",
    "ValidationError",
    "DimensionError",
    "MalformedInputError",
    "InsufficientDataError",
    "NumericalError",
    "NotPositiveDefiniteError",
    "DegenerateVarianceError",
    "AllocationError",
]

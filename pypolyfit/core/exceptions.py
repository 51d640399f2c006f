"""
Exception hierarchy for PyPolyFit.

All exceptions inherit from PyPolyFitError so callers can catch any
library-specific failure in one place. Every error is fatal to a fit:
there is no partial-result mode, so nothing here is ever caught and
retried inside the library.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages name the failing stage and the offending values
    - Never catch and re-raise with less information
"""


class PyPolyFitError(Exception):
    """Base exception for all PyPolyFit errors."""
    pass


class ValidationError(PyPolyFitError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    """
    pass


class MalformedInputError(ValidationError):
    """
    Observation data could not be parsed.

    Raised when the count header is missing or not an integer, when a
    record does not hold exactly two numeric fields, or when the number
    of records read does not match the declared count.

    Attributes:
        line_number: 1-based line of the offending input, if known
        declared_count: Observation count announced by the header, if read
        records_read: Records successfully parsed before the failure
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        declared_count: int | None = None,
        records_read: int | None = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.declared_count = declared_count
        self.records_read = records_read


class InsufficientDataError(ValidationError):
    """
    Too few observations for the requested polynomial degree.

    A degree-d fit has d+1 unknowns and needs at least d+1 observations.

    Attributes:
        n_observations: Observations available
        n_required: Observations required (degree + 1)
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_required: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_required = n_required


class NumericalError(PyPolyFitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when the Cholesky factorization of the normal matrix fails.
    The triangular solves are never attempted after this error.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        info: Status returned by the factorization routine. A positive
              value k means the leading minor of order k is not positive
              definite.
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.info = info


class DegenerateVarianceError(NumericalError):
    """
    Response has zero variance, so R² is undefined.

    Attributes:
        n_observations: Number of observations in the response
    """

    def __init__(self, message: str, n_observations: int | None = None):
        super().__init__(message)
        self.n_observations = n_observations


class AllocationError(PyPolyFitError):
    """
    A matrix or vector could not be allocated.

    Wraps MemoryError so the pipeline reports which buffer failed.

    Attributes:
        shape: Requested array shape
    """

    def __init__(self, message: str, shape: tuple[int, ...] | None = None):
        super().__init__(message)
        self.shape = shape

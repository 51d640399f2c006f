"""
Polynomial Design.

Builds the Vandermonde design matrix X and target vector y from raw
(x, y) observations. Column j of X holds x**j, so a degree-d fit is a
linear model in the d+1 columns.

Both X and y are multiplied by a scale factor before anything is solved.
Because every row of X and every entry of y is scaled by the same
constant, the least-squares coefficients are unchanged; only the
conditioning of the floating-point work is affected. Values reported in
original units are divided by the scale factor exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypolyfit.core.compute.precision import allocate
from pypolyfit.core.datasource import DataSource
from pypolyfit.core.exceptions import MalformedInputError, ValidationError
from pypolyfit.core.validation import (
    check_1d,
    check_array,
    check_degree,
    check_finite,
    check_min_samples,
    check_positive,
)

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 100.0


@dataclass(frozen=True)
class PolynomialDesign:
    """
    Scaled design matrix and target for a degree-d polynomial fit.

    Immutable after construction; dimensions are fixed for the rest of
    the pipeline.

    Construction:
        PolynomialDesign.from_arrays(x, y, degree=2)
        PolynomialDesign.from_datasource(ds, degree=2)
        PolynomialDesign.from_datasource(ds, degree=2, x='t', y='v')
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _x_raw: NDArray[np.floating[Any]]
    _y_raw: NDArray[np.floating[Any]]
    _degree: int
    _scale: float
    _source: DataSource | None = None

    @classmethod
    def from_arrays(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        degree: int,
        *,
        scale: float = DEFAULT_SCALE,
    ) -> PolynomialDesign:
        """Build design directly from x and y arrays."""
        return cls._build(x, y, degree, scale, source=None)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        degree: int,
        *,
        x: str = 'x',
        y: str = 'y',
        scale: float = DEFAULT_SCALE,
    ) -> PolynomialDesign:
        """
        Build design from the named columns of a DataSource.

        Raises:
            MalformedInputError: If either column is missing
        """
        for key in (x, y):
            if key not in source:
                raise MalformedInputError(
                    f"DataSource has no column {key!r}. Available: {set(source.keys())}"
                )
        return cls._build(source[x], source[y], degree, scale, source=source)

    @classmethod
    def _build(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        degree: Any,
        scale: Any,
        source: DataSource | None,
    ) -> PolynomialDesign:
        """Internal builder with validation."""
        degree = check_degree(degree)
        scale = check_positive(scale, 'scale')

        x_arr = _as_observations(x, 'x')
        y_arr = _as_observations(y, 'y')
        if x_arr.shape[0] != y_arr.shape[0]:
            raise MalformedInputError(
                f"x and y have different lengths (x={x_arr.shape[0]}, y={y_arr.shape[0]})"
            )
        check_finite(x_arr, 'x')
        check_finite(y_arr, 'y')

        # Must fail before X is allocated.
        check_min_samples(x_arr, degree + 1, 'x')

        X = _vandermonde(x_arr, degree, scale)
        y_scaled = y_arr * scale
        # own copies, so callers' arrays stay writable
        x_arr = x_arr.copy()
        y_arr = y_arr.copy()
        for arr in (X, y_scaled, x_arr, y_arr):
            arr.flags.writeable = False

        logger.debug(
            "design: n=%d, degree=%d, scale=%g\nX =\n%s\ny = %s",
            x_arr.shape[0], degree, scale, X, y_scaled,
        )

        return cls(
            _X=X,
            _y=y_scaled,
            _x_raw=x_arr,
            _y_raw=y_arr,
            _degree=degree,
            _scale=scale,
            _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Scaled design matrix (n x (d+1)), column-major."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Scaled target vector (n,)."""
        return self._y

    @property
    def x_raw(self) -> NDArray[np.floating[Any]]:
        """Observed x in original units."""
        return self._x_raw

    @property
    def y_raw(self) -> NDArray[np.floating[Any]]:
        """Observed y in original units."""
        return self._y_raw

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of coefficients (degree + 1)."""
        return self._X.shape[1]

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    def unscaled_X(self) -> NDArray[np.floating[Any]]:
        """Design matrix in original units (each entry divided by scale once)."""
        return self._X / self._scale


def _as_observations(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Convert one observation column, reporting bad data as malformed input."""
    try:
        arr = check_array(values, name)
    except ValidationError as e:
        raise MalformedInputError(str(e)) from e
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr.ravel()
    check_1d(arr, name)
    return arr


def _vandermonde(
    x: NDArray[np.floating[Any]],
    degree: int,
    scale: float,
) -> NDArray[np.floating[Any]]:
    """
    Column j = x**j * scale, for j = 0..degree.

    Column 0 therefore holds the scale constant, not 1.
    """
    X = allocate((x.shape[0], degree + 1), 'design matrix X')
    for j in range(degree + 1):
        X[:, j] = np.power(x, j) * scale
    return X

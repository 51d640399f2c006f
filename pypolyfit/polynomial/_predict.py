"""
Predictions and goodness of fit.

    Ŷ  = X B / scale
    R² = 1 - SSE / Var,   SSE = Σ(ŷᵢ - yᵢ)²,   Var = Σ(yᵢ - ȳ)²

Everything is computed in original units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pypolyfit.core.exceptions import DegenerateVarianceError
from pypolyfit.core.protocols import LinearAlgebra

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
    """Fitted values and fit statistics in original units."""
    fitted: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    sse: float
    variance: float
    r_squared: float


def predict(
    X: NDArray[np.floating[Any]],
    B: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    scale: float,
    linalg: LinearAlgebra,
) -> Prediction:
    """Compute Ŷ = XB in original units, and R².

    Args:
        X: Scaled design matrix (n, p).
        B: Coefficient vector (p,).
        y: Observed target in original units (n,).
        scale: Factor X was multiplied by.
        linalg: Kernel providing multiply_vector.

    Raises:
        DegenerateVarianceError: If all y are identical, so R² is undefined.
    """
    fitted = linalg.multiply_vector(X, B, trans=False) / scale
    logger.debug("Yhat = XB\n%s", fitted)

    if np.ptp(y) == 0.0:
        raise DegenerateVarianceError(
            f"all {y.shape[0]} observed y values equal {y[0]!r}; "
            f"total variance is zero and R² is undefined",
            n_observations=int(y.shape[0]),
        )

    residuals = y - fitted
    sse = float(np.sum(residuals ** 2))
    variance = float(np.sum((y - np.mean(y)) ** 2))
    r_squared = 1.0 - sse / variance

    return Prediction(
        fitted=fitted,
        residuals=residuals,
        sse=sse,
        variance=variance,
        r_squared=r_squared,
    )

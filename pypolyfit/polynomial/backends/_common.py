"""
Pipeline body shared by all polynomial backends.

Backends differ only in the LinearAlgebra kernel they hand to this
function and in how they time it.
"""

from __future__ import annotations

import logging
from typing import Any

from pypolyfit.core.compute.precision import condition_number
from pypolyfit.core.compute.timing import Timer
from pypolyfit.core.compute.tolerances import CONDITION_WARNING_THRESHOLD
from pypolyfit.core.protocols import LinearAlgebra
from pypolyfit.core.result import Result
from pypolyfit.polynomial._normal_equations import solve_normal_equations
from pypolyfit.polynomial._predict import predict
from pypolyfit.polynomial.design import PolynomialDesign
from pypolyfit.polynomial.solution import PolynomialParams

logger = logging.getLogger(__name__)


def solve_design(
    design: PolynomialDesign,
    linalg: LinearAlgebra,
    backend_name: str,
    timer: Timer,
) -> Result[PolynomialParams]:
    """
    Run normal equations, prediction and R² for one design.

    Raises:
        NotPositiveDefiniteError: From the Cholesky step
        DegenerateVarianceError: From the R² step
    """
    timer.start()

    normal = solve_normal_equations(design.X, design.y, linalg, timer)

    with timer.section('predict'):
        prediction = predict(design.X, normal.B, design.y_raw, design.scale, linalg)

    with timer.section('diagnostics'):
        cond = condition_number(normal.A)

    timer.stop()

    warnings: list[str] = []
    if cond > CONDITION_WARNING_THRESHOLD:
        warnings.append(
            f"Normal matrix is ill-conditioned (condition number {cond:.2e}); "
            f"coefficients may carry few correct digits."
        )
        logger.warning(warnings[-1])

    params = PolynomialParams(
        coefficients=normal.B,
        fitted_values=prediction.fitted,
        residuals=prediction.residuals,
        normal_matrix=normal.A,
        projection=normal.P,
        cholesky_factor=normal.L,
        forward_solution=normal.Q,
        sse=prediction.sse,
        variance=prediction.variance,
        r_squared=prediction.r_squared,
    )

    info: dict[str, Any] = {
        'method': 'cholesky',
        'kernel': linalg.name,
        'degree': design.degree,
        'n': design.n,
        'scale': design.scale,
        'condition_number': cond,
    }

    logger.info(
        "Fitted degree-%d polynomial to %d observations (R^2=%.6f, backend=%s)",
        design.degree, design.n, prediction.r_squared, backend_name,
    )

    return Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(warnings),
    )

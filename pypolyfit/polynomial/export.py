"""
Result tables for downstream tools.

Writes one whitespace-delimited table per dataset, the degree in each
file name:

    poly_raw_<d>.dat       x y        observations
    poly_fit_<d>.dat       x yhat     fitted values
    poly_coef_<d>.dat      b          one coefficient per line
    poly_designMx_<d>.dat  x^0 .. x^d design matrix

All values are in original units.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from pypolyfit.polynomial.solution import PolynomialSolution

logger = logging.getLogger(__name__)

ARTIFACTS = ('raw', 'fit', 'coef', 'designMx')


def artifact_path(directory: str | Path, artifact: str, degree: int, prefix: str = 'poly') -> Path:
    """Path of one result table."""
    if artifact not in ARTIFACTS:
        raise ValueError(f"Unknown artifact {artifact!r}; expected one of {ARTIFACTS}")
    return Path(directory) / f"{prefix}_{artifact}_{degree}.dat"


def write_results(
    solution: PolynomialSolution,
    directory: str | Path,
    *,
    prefix: str = 'poly',
    fmt: str = '%f',
) -> dict[str, Path]:
    """
    Write the raw, fit, coefficient and design-matrix tables.

    Args:
        solution: Completed fit
        directory: Output directory, created if missing
        prefix: File name prefix
        fmt: printf-style number format

    Returns:
        Mapping artifact name -> written path
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    d = solution.degree

    tables = {
        'raw': np.column_stack([solution.x, solution.y]),
        'fit': np.column_stack([solution.x, solution.fitted_values]),
        'coef': solution.coefficients.reshape(-1, 1),
        'designMx': solution.design_matrix,
    }

    paths: dict[str, Path] = {}
    for artifact in ARTIFACTS:
        path = artifact_path(directory, artifact, d, prefix)
        np.savetxt(path, tables[artifact], fmt=fmt, delimiter=' ')
        paths[artifact] = path
        logger.debug("wrote %s (%d rows)", path, tables[artifact].shape[0])

    logger.info("Wrote %d result tables to %s", len(paths), directory)
    return paths

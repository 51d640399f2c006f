"""Render observed data and the fitted values to an image file. Based on matplotlib"""

from __future__ import annotations

import logging
from pathlib import Path

from pypolyfit.polynomial.solution import PolynomialSolution

logger = logging.getLogger(__name__)


def plot_title(degree: int, r_squared: float) -> str:
    return f"Observed data and polynomial fit (d={degree}, R2={r_squared:f})"


def plot_fit(solution: PolynomialSolution, path: str | Path) -> Path:
    """Scatter the raw (x, y) and fitted (x, ŷ) points and save the figure."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots()
    try:
        ax.scatter(solution.x, solution.y, s=36, label="Input")
        ax.scatter(solution.x, solution.fitted_values, s=36, marker="x", label="Fit")
        ax.set_title(plot_title(solution.degree, solution.r_squared))
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.grid(True)
        ax.legend(loc="upper left", frameon=True)
        fig.savefig(path)
    finally:
        plt.close(fig)

    logger.info("Saved plot to %s", path)
    return path

"""
Tests for plot rendering. Skipped when matplotlib is not installed.
"""

import pytest

pytest.importorskip("matplotlib")

from pypolyfit import fit
from pypolyfit.polynomial.plotting import plot_fit, plot_title


def test_title_carries_degree_and_r_squared():
    assert plot_title(2, 0.5) == "Observed data and polynomial fit (d=2, R2=0.500000)"


def test_plot_written(quadratic_data, tmp_path):
    x, y = quadratic_data
    path = plot_fit(fit(x, y, degree=2), tmp_path / "report" / "plot_2.png")
    assert path.exists()
    assert path.stat().st_size > 0

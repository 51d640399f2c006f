"""
Tests for the result tables written by write_results().
"""

import numpy as np
import pytest

from pypolyfit import fit
from pypolyfit.polynomial.export import ARTIFACTS, artifact_path, write_results


@pytest.fixture
def quadratic_solution(quadratic_data):
    x, y = quadratic_data
    return fit(x, y, degree=2)


class TestArtifactPath:

    def test_name_carries_degree(self, tmp_path):
        assert artifact_path(tmp_path, 'coef', 3) == tmp_path / "poly_coef_3.dat"

    def test_custom_prefix(self, tmp_path):
        assert artifact_path(tmp_path, 'raw', 0, prefix='run').name == "run_raw_0.dat"

    def test_unknown_artifact(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown artifact"):
            artifact_path(tmp_path, 'residuals', 1)


class TestWriteResults:

    def test_writes_all_tables(self, quadratic_solution, tmp_path):
        paths = write_results(quadratic_solution, tmp_path)
        assert set(paths) == set(ARTIFACTS)
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "poly_coef_2.dat",
            "poly_designMx_2.dat",
            "poly_fit_2.dat",
            "poly_raw_2.dat",
        ]

    def test_creates_directory(self, quadratic_solution, tmp_path):
        out = tmp_path / "nested" / "out"
        write_results(quadratic_solution, out)
        assert (out / "poly_raw_2.dat").exists()

    def test_raw_table(self, quadratic_solution, quadratic_data, tmp_path):
        x, y = quadratic_data
        paths = write_results(quadratic_solution, tmp_path)
        np.testing.assert_allclose(np.loadtxt(paths['raw']), np.column_stack([x, y]))

    def test_fit_table(self, quadratic_solution, quadratic_data, tmp_path):
        x, y = quadratic_data
        paths = write_results(quadratic_solution, tmp_path)
        table = np.loadtxt(paths['fit'])
        np.testing.assert_allclose(table[:, 0], x)
        np.testing.assert_allclose(table[:, 1], y, atol=1e-6)

    def test_coef_table_one_per_line(self, quadratic_solution, tmp_path):
        paths = write_results(quadratic_solution, tmp_path)
        lines = paths['coef'].read_text().splitlines()
        assert len(lines) == 3
        np.testing.assert_allclose([float(s) for s in lines], [1.0, 0.0, 1.0], atol=1e-6)

    def test_design_matrix_unscaled(self, quadratic_solution, quadratic_data, tmp_path):
        x, _ = quadratic_data
        paths = write_results(quadratic_solution, tmp_path)
        np.testing.assert_allclose(np.loadtxt(paths['designMx']), np.vander(x, 3, increasing=True))

    def test_degree_zero_tables_are_2d(self, tmp_path):
        solution = fit([0.0, 1.0, 2.0], [1.0, 2.0, 6.0], degree=0)
        paths = write_results(solution, tmp_path)
        assert np.loadtxt(paths['designMx'], ndmin=2).shape == (3, 1)
        assert paths['coef'].read_text().count("\n") == 1

"""
Tests for PolynomialDesign construction.
"""

import numpy as np
import pytest

from pypolyfit.core.datasource import DataSource
from pypolyfit.core.exceptions import (
    InsufficientDataError,
    MalformedInputError,
    ValidationError,
)
from pypolyfit.polynomial.design import DEFAULT_SCALE, PolynomialDesign


class TestVandermonde:

    def test_columns_are_scaled_powers(self):
        x = np.array([0.0, 1.0, 2.0, -3.0])
        design = PolynomialDesign.from_arrays(x, np.arange(4.0), degree=3, scale=10.0)
        expected = np.column_stack([x**0, x, x**2, x**3]) * 10.0
        np.testing.assert_allclose(design.X, expected)

    def test_column_zero_holds_scale(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2)
        np.testing.assert_array_equal(design.X[:, 0], DEFAULT_SCALE)

    def test_zero_to_the_zero_is_one(self):
        design = PolynomialDesign.from_arrays([0.0, 1.0], [1.0, 2.0], degree=1, scale=1.0)
        assert design.X[0, 0] == 1.0
        assert design.X[0, 1] == 0.0

    def test_y_scaled(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2, scale=100.0)
        np.testing.assert_allclose(design.y, y * 100.0)
        np.testing.assert_array_equal(design.y_raw, y)

    def test_column_major(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2)
        assert design.X.flags['F_CONTIGUOUS']

    def test_unscaled_X(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2, scale=100.0)
        np.testing.assert_allclose(design.unscaled_X(), np.vander(x, 3, increasing=True))

    def test_dimensions(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2)
        assert (design.n, design.p, design.degree) == (4, 3, 2)


class TestValidation:

    def test_exactly_d_plus_one_points(self, line_data):
        x, y = line_data
        design = PolynomialDesign.from_arrays(x, y, degree=2)
        assert design.p == design.n == 3

    def test_insufficient_data(self, line_data):
        x, y = line_data
        with pytest.raises(InsufficientDataError) as exc_info:
            PolynomialDesign.from_arrays(x, y, degree=3)
        assert exc_info.value.n_observations == 3
        assert exc_info.value.n_required == 4

    def test_empty_observations(self):
        with pytest.raises(InsufficientDataError):
            PolynomialDesign.from_arrays([], [], degree=0)

    def test_length_mismatch(self):
        with pytest.raises(MalformedInputError, match="different lengths"):
            PolynomialDesign.from_arrays([0.0, 1.0, 2.0], [0.0, 1.0], degree=1)

    def test_non_numeric(self):
        with pytest.raises(MalformedInputError, match="non-numeric"):
            PolynomialDesign.from_arrays(["a", "b"], [0.0, 1.0], degree=1)

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            PolynomialDesign.from_arrays([0.0, np.nan], [0.0, 1.0], degree=1)

    def test_negative_degree(self, line_data):
        x, y = line_data
        with pytest.raises(ValidationError, match="degree"):
            PolynomialDesign.from_arrays(x, y, degree=-1)

    @pytest.mark.parametrize("scale", [0.0, -100.0, np.inf])
    def test_bad_scale(self, line_data, scale):
        x, y = line_data
        with pytest.raises(ValidationError, match="scale"):
            PolynomialDesign.from_arrays(x, y, degree=1, scale=scale)


class TestFromDataSource:

    def test_default_columns(self, quadratic_data):
        x, y = quadratic_data
        ds = DataSource.from_arrays(x=x, y=y)
        design = PolynomialDesign.from_datasource(ds, degree=2)
        assert design.source is ds
        np.testing.assert_array_equal(design.x_raw, x)

    def test_named_columns(self, quadratic_data):
        x, y = quadratic_data
        ds = DataSource.from_arrays(t=x, v=y)
        design = PolynomialDesign.from_datasource(ds, degree=1, x='t', y='v')
        np.testing.assert_array_equal(design.y_raw, y)

    def test_missing_column(self, quadratic_data):
        x, _ = quadratic_data
        ds = DataSource.from_arrays(x=x)
        with pytest.raises(MalformedInputError, match="'y'"):
            PolynomialDesign.from_datasource(ds, degree=1)


class TestImmutability:

    def test_arrays_read_only(self, quadratic_data):
        x, y = quadratic_data
        design = PolynomialDesign.from_arrays(x, y, degree=2)
        for arr in (design.X, design.y, design.x_raw, design.y_raw):
            assert not arr.flags.writeable
        with pytest.raises(ValueError):
            design.X[0, 0] = 0.0

    def test_caller_arrays_untouched(self, quadratic_data):
        x, y = quadratic_data
        PolynomialDesign.from_arrays(x, y, degree=2)
        assert x.flags.writeable and y.flags.writeable
        x[0] = -1.0

    def test_fit_from_read_only_source(self):
        ds = DataSource.from_lines(["3\n", "0 0\n", "1 1\n", "2 2\n"])
        design = PolynomialDesign.from_datasource(ds, degree=1)
        np.testing.assert_array_equal(design.x_raw, [0.0, 1.0, 2.0])

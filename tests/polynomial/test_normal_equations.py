"""
Tests for the normal-equations solver and the predictor, run directly
against each CPU kernel.
"""

import numpy as np
import pytest

from pypolyfit.core.compute.linalg import LapackLinearAlgebra, ReferenceLinearAlgebra
from pypolyfit.core.compute.timing import Timer
from pypolyfit.core.exceptions import DegenerateVarianceError, NotPositiveDefiniteError
from pypolyfit.polynomial._normal_equations import solve_normal_equations
from pypolyfit.polynomial._predict import predict


@pytest.fixture(params=[LapackLinearAlgebra(), ReferenceLinearAlgebra()], ids=lambda k: k.name)
def kernel(request):
    return request.param


class TestSolveNormalEquations:

    def test_intermediates(self, kernel, rng):
        X = np.vander(rng.uniform(-2, 2, 15), 3, increasing=True)
        y = rng.standard_normal(15)
        ne = solve_normal_equations(X, y, kernel)

        np.testing.assert_allclose(ne.A, X.T @ X, rtol=1e-12)
        np.testing.assert_allclose(ne.P, X.T @ y, rtol=1e-12, atol=1e-12)
        np.testing.assert_allclose(ne.L @ ne.L.T, ne.A, rtol=1e-10)
        np.testing.assert_allclose(ne.L @ ne.Q, ne.P, rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(ne.L.T @ ne.B, ne.Q, rtol=1e-10, atol=1e-12)

    def test_strict_upper_triangle_is_zero(self, kernel, rng):
        X = np.vander(rng.uniform(-1, 1, 10), 4, increasing=True)
        ne = solve_normal_equations(X, rng.standard_normal(10), kernel)
        assert np.all(np.triu(ne.L, k=1) == 0.0)

    def test_matches_lstsq(self, kernel, rng):
        X = np.vander(rng.uniform(-1, 1, 30), 4, increasing=True)
        y = rng.standard_normal(30)
        ne = solve_normal_equations(X, y, kernel)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(ne.B, expected, rtol=1e-8, atol=1e-10)

    def test_records_timing_sections(self, kernel, rng):
        X = np.vander(rng.uniform(-1, 1, 5), 2, increasing=True)
        timer = Timer()
        timer.start()
        solve_normal_equations(X, rng.standard_normal(5), kernel, timer)
        timer.stop()
        assert {'normal_matrix', 'projection', 'cholesky',
                'forward_substitution', 'back_substitution'} <= set(timer.result())

    def test_not_positive_definite_stops_before_solves(self, kernel):
        # x = 0 everywhere: the x^1 column is all zeros
        X = np.vander(np.zeros(3), 2, increasing=True)

        class Spy:
            def __init__(self, inner):
                self.inner = inner
                self.solves = 0
                self.name = inner.name

            def __getattr__(self, attr):
                return getattr(self.inner, attr)

            def triangular_solve(self, *args, **kwargs):
                self.solves += 1
                return self.inner.triangular_solve(*args, **kwargs)

        spy = Spy(kernel)
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            solve_normal_equations(X, np.array([1.0, 2.0, 3.0]), spy)
        assert exc_info.value.info == 2
        assert spy.solves == 0


class TestPredict:

    def test_fitted_values_in_original_units(self, kernel):
        x = np.array([0.0, 1.0, 2.0])
        X = np.vander(x, 2, increasing=True) * 100.0
        B = np.array([1.0, 2.0])
        pred = predict(X, B, np.array([1.0, 3.0, 5.0]), 100.0, kernel)
        np.testing.assert_allclose(pred.fitted, [1.0, 3.0, 5.0])
        assert pred.sse == pytest.approx(0.0, abs=1e-20)
        assert pred.r_squared == pytest.approx(1.0)

    def test_r_squared_formula(self, kernel):
        X = np.vander(np.array([0.0, 1.0, 2.0, 3.0]), 1, increasing=True)
        y = np.array([1.0, 3.0, 2.0, 6.0])
        pred = predict(X, np.array([2.0]), y, 1.0, kernel)
        sse = float(np.sum((2.0 - y) ** 2))
        var = float(np.sum((y - y.mean()) ** 2))
        assert pred.sse == pytest.approx(sse)
        assert pred.variance == pytest.approx(var)
        assert pred.r_squared == pytest.approx(1.0 - sse / var)
        np.testing.assert_allclose(pred.residuals, y - 2.0)

    def test_degenerate_variance(self, kernel):
        X = np.vander(np.array([0.0, 1.0, 2.0]), 2, increasing=True)
        with pytest.raises(DegenerateVarianceError) as exc_info:
            predict(X, np.array([0.1, 0.0]), np.full(3, 0.1), 1.0, kernel)
        assert exc_info.value.n_observations == 3

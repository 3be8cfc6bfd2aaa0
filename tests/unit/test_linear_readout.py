"""Unit tests for LinearStateProjection and its regression solvers."""
import numpy as np
import pytest

from rescomp.core.errors import ConfigurationError, DimensionMismatchError, SolverError
from rescomp.readout.linear import LinearStateProjection


def _problem(seed=0, m=4, o=2, t=80):
    rng = np.random.default_rng(seed)
    X = rng.normal(size=(m, t))
    W = rng.normal(size=(o, m))
    return X, W, W @ X


class TestRidgeRegression:
    def test_zero_beta_recovers_exact_map(self):
        X, W, Y = _problem()
        readout = LinearStateProjection.via_ridge_regression(0.0, X, Y)
        np.testing.assert_allclose(readout.w_out, W, atol=1e-9)

    def test_tiny_beta_close_to_least_squares(self):
        X, W, Y = _problem(seed=1)
        readout = LinearStateProjection.via_ridge_regression(1e-7, X, Y)
        np.testing.assert_allclose(readout.w_out, W, atol=1e-6)

    def test_zero_and_vanishing_beta_agree(self):
        X, _, Y = _problem(seed=5)
        exact = LinearStateProjection.via_ridge_regression(0.0, X, Y)
        tiny = LinearStateProjection.via_ridge_regression(1e-12, X, Y)
        np.testing.assert_allclose(tiny.w_out, exact.w_out, atol=1e-9)

    def test_large_beta_shrinks_weights(self):
        X, _, Y = _problem(seed=2)
        small = LinearStateProjection.via_ridge_regression(1e-6, X, Y)
        large = LinearStateProjection.via_ridge_regression(1e4, X, Y)
        assert np.linalg.norm(large.w_out) < np.linalg.norm(small.w_out)

    def test_negative_beta_rejected(self):
        X, _, Y = _problem()
        with pytest.raises(ConfigurationError):
            LinearStateProjection.via_ridge_regression(-1.0, X, Y)

    def test_sample_count_mismatch(self):
        X, _, Y = _problem()
        with pytest.raises(DimensionMismatchError):
            LinearStateProjection.via_ridge_regression(0.0, X, Y[:, :-1])

    def test_singular_system_raises_without_regularizing(self):
        X = np.zeros((3, 10))
        Y = np.ones((1, 10))
        with pytest.raises(SolverError) as excinfo:
            LinearStateProjection.via_ridge_regression(0.0, X, Y)
        assert excinfo.value.stats["min_abs_pivot"] == 0.0

    def test_regularization_makes_singular_system_solvable(self):
        X = np.zeros((3, 10))
        Y = np.ones((1, 10))
        readout = LinearStateProjection.via_ridge_regression(1.0, X, Y)
        np.testing.assert_allclose(readout.w_out, np.zeros((1, 3)))


class TestTikhonovRegularization:
    def test_scaled_identity_matches_ridge(self):
        X, _, Y = _problem(seed=3)
        beta = 0.25
        ridge = LinearStateProjection.via_ridge_regression(beta, X, Y)
        tikhonov = LinearStateProjection.via_tikhonov_regularization(np.sqrt(beta) * np.eye(4), X, Y)
        np.testing.assert_allclose(tikhonov.w_out, ridge.w_out, atol=1e-10)

    def test_non_square_gamma(self):
        X, _, Y = _problem(seed=4)
        gamma = np.ones((2, 4))
        readout = LinearStateProjection.via_tikhonov_regularization(gamma, X, Y)
        assert readout.w_out.shape == (2, 4)

    def test_gamma_column_mismatch(self):
        X, _, Y = _problem()
        with pytest.raises(DimensionMismatchError):
            LinearStateProjection.via_tikhonov_regularization(np.eye(3), X, Y)


class TestProjection:
    def setup_method(self):
        self.readout = LinearStateProjection(np.array([[1.0, 2.0], [0.0, -1.0], [3.0, 0.0]]))

    def test_dimensions(self):
        assert self.readout.input_dimension() == 2
        assert self.readout.output_dimension() == 3

    def test_project(self):
        np.testing.assert_allclose(self.readout.project(np.array([1.0, 1.0])), [3.0, -1.0, 3.0])

    def test_project_many_matches_project(self):
        ms = np.array([[1.0, 0.0, 2.0], [1.0, 3.0, -1.0]])
        many = self.readout.project_many(ms)
        for k in range(3):
            np.testing.assert_allclose(many[:, k], self.readout.project(ms[:, k]))

    def test_project_into_column_view(self):
        result = np.zeros((3, 2))
        self.readout.project_into(np.array([1.0, 1.0]), result[:, 1])
        np.testing.assert_allclose(result[:, 1], [3.0, -1.0, 3.0])
        np.testing.assert_allclose(result[:, 0], 0.0)

    def test_wrong_measurement_length(self):
        with pytest.raises(DimensionMismatchError):
            self.readout.project(np.ones(3))

    def test_w_out_read_only(self):
        with pytest.raises(ValueError):
            self.readout.w_out[0, 0] = 1.0

    def test_to_dict(self):
        assert self.readout.to_dict() == {"type": "linear", "input_dimension": 2, "output_dimension": 3}

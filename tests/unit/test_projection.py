"""Unit tests for input projections (windowing, embedding, batched forms)."""
import numpy as np
import pytest

from rescomp.core.errors import ConfigurationError, DimensionMismatchError
from rescomp.layers.projection import (
    DefaultInputProjection,
    IdentityProjectionWithEmbedding,
    InputProjectionWithEmbedding,
)


class TestIdentityProjection:
    """Identity projection concatenates the tapped columns, current column first."""

    def test_single_embedding_concatenates_columns(self):
        proj = IdentityProjectionWithEmbedding(system_dim=2, embeddings=1, stride=1)
        window = np.array([[1.0, 3.0], [2.0, 4.0]])
        np.testing.assert_allclose(proj.project(window), [1.0, 2.0, 3.0, 4.0])

    def test_dimensions(self):
        proj = IdentityProjectionWithEmbedding(system_dim=3, embeddings=2, stride=3)
        assert proj.output_dimensions() == 9
        assert proj.input_dimension() == 3
        assert proj.embeddings() == 2
        assert proj.required_input_columns() == 7
        assert proj.tap_offsets() == (0, 3, 6)

    def test_stride_skips_columns(self):
        proj = IdentityProjectionWithEmbedding(system_dim=1, embeddings=2, stride=2)
        window = np.array([[10.0, 11.0, 12.0, 13.0, 14.0]])
        np.testing.assert_allclose(proj.project(window), [10.0, 12.0, 14.0])

    def test_zero_stride_without_embedding(self):
        proj = IdentityProjectionWithEmbedding(system_dim=2, embeddings=0, stride=0)
        assert proj.required_input_columns() == 1
        np.testing.assert_allclose(proj.project(np.array([[5.0], [6.0]])), [5.0, 6.0])

    def test_zero_stride_with_embedding_rejected(self):
        with pytest.raises(ConfigurationError):
            IdentityProjectionWithEmbedding(system_dim=2, embeddings=1, stride=0)

    def test_project_returns_scratch_buffer(self):
        proj = IdentityProjectionWithEmbedding(system_dim=1, embeddings=0, stride=0)
        first = proj.project(np.array([[1.0]]))
        kept = first.copy()
        second = proj.project(np.array([[2.0]]))
        assert first is second
        np.testing.assert_allclose(kept, [1.0])
        np.testing.assert_allclose(second, [2.0])


class TestWindowValidation:
    """Every shape violation is a hard failure."""

    def setup_method(self):
        self.proj = IdentityProjectionWithEmbedding(system_dim=2, embeddings=1, stride=2)

    def test_wrong_column_count(self):
        with pytest.raises(DimensionMismatchError):
            self.proj.project(np.zeros((2, 2)))

    def test_wrong_row_count(self):
        with pytest.raises(DimensionMismatchError):
            self.proj.project(np.zeros((3, 3)))

    def test_vector_rejected(self):
        with pytest.raises(DimensionMismatchError):
            self.proj.project(np.zeros(3))

    def test_project_into_wrong_target_leaves_target_untouched(self):
        target = np.full(5, 7.0)
        with pytest.raises(DimensionMismatchError):
            self.proj.project_into(np.ones((2, 3)), target)
        np.testing.assert_allclose(target, 7.0)

    def test_project_many_too_few_columns(self):
        with pytest.raises(DimensionMismatchError):
            self.proj.project_many(np.zeros((2, 2)))


class TestProjectMany:
    """Batched projection agrees column by column with single-window projection."""

    def test_matches_single_windows(self):
        rng = np.random.default_rng(0)
        w = rng.normal(size=(4, 6))
        proj = InputProjectionWithEmbedding.new_with_matrix(w, embeddings=2, stride=2)
        inputs = rng.normal(size=(2, 12))
        r = proj.required_input_columns()
        many = proj.project_many(inputs)
        assert many.shape == (4, 12 - r + 1)
        for k in range(many.shape[1]):
            np.testing.assert_allclose(many[:, k], proj.project(inputs[:, k:k + r]))

    def test_project_many_into(self):
        proj = IdentityProjectionWithEmbedding(system_dim=1, embeddings=1, stride=1)
        inputs = np.array([[1.0, 2.0, 3.0, 4.0]])
        targets = np.zeros((2, 3))
        proj.project_many_into(inputs, targets)
        np.testing.assert_allclose(targets, [[1.0, 2.0, 3.0], [2.0, 3.0, 4.0]])

    def test_project_many_into_wrong_shape(self):
        proj = IdentityProjectionWithEmbedding(system_dim=1, embeddings=1, stride=1)
        with pytest.raises(DimensionMismatchError):
            proj.project_many_into(np.ones((1, 4)), np.zeros((2, 4)))


class TestMatrixProjections:
    """Random and explicit input matrices."""

    def test_matrix_applied_to_taps(self):
        w = np.array([[1.0, 10.0], [0.0, -1.0]])
        proj = InputProjectionWithEmbedding.new_with_matrix(w, embeddings=1, stride=2)
        window = np.array([[2.0, 99.0, 3.0]])
        np.testing.assert_allclose(proj.project(window), [2.0 + 30.0, -3.0])

    def test_indivisible_matrix_rejected(self):
        with pytest.raises(ConfigurationError):
            InputProjectionWithEmbedding.new_with_matrix(np.ones((3, 5)), embeddings=1, stride=1)

    def test_negative_embeddings_rejected(self):
        with pytest.raises(ConfigurationError):
            InputProjectionWithEmbedding.new_with_matrix(np.ones((3, 4)), embeddings=-1, stride=1)

    def test_default_random_single_tap_per_row(self):
        proj = DefaultInputProjection.new_random(input_dim=3, output_dim=50, input_strength=0.5, seed=1)
        w = proj.w_in
        assert w.shape == (50, 3)
        assert np.all(np.count_nonzero(w, axis=1) <= 1)
        assert np.all(np.abs(w) <= 0.5)
        assert proj.embeddings() == 0
        assert proj.required_input_columns() == 1

    def test_random_is_seeded(self):
        a = DefaultInputProjection.new_random(3, 20, 1.0, seed=7).w_in
        b = DefaultInputProjection.new_random(3, 20, 1.0, seed=7).w_in
        c = DefaultInputProjection.new_random(3, 20, 1.0, seed=8).w_in
        np.testing.assert_array_equal(a, b)
        assert not np.array_equal(a, c)

    def test_embedding_random_shape(self):
        proj = InputProjectionWithEmbedding.new_random(system_dim=2, output_dim=10, embeddings=3, stride=2, seed=0)
        assert proj.w_in.shape == (10, 8)
        assert proj.input_dimension() == 2
        assert proj.required_input_columns() == 7

    def test_random_embedding_rejects_zero_stride(self):
        with pytest.raises(ConfigurationError):
            InputProjectionWithEmbedding.new_random(system_dim=2, output_dim=10, embeddings=1, stride=0)

    @pytest.mark.parametrize("kwargs", [{"embeddings": 1.5}, {"stride": 2.0}, {"system_dim": 2.0}])
    def test_random_embedding_rejects_fractional_counts(self, kwargs):
        params = {"system_dim": 2, "output_dim": 10, "embeddings": 1, "stride": 1, **kwargs}
        with pytest.raises(ConfigurationError):
            InputProjectionWithEmbedding.new_random(**params)

    def test_matrix_is_read_only(self):
        proj = DefaultInputProjection(np.eye(2))
        with pytest.raises(ValueError):
            proj.w_in[0, 0] = 5.0

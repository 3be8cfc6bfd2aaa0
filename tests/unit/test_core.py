"""Unit tests for the error taxonomy and the NumPy/JAX gateway."""
import jax.numpy as jnp
import numpy as np
import pytest

from rescomp.core.errors import (
    ConfigurationError,
    DimensionMismatchError,
    ReservoirError,
    SolverError,
    UnsupportedFeatureError,
)
from rescomp.core.interfaces import InputProjection, StateMeasurement, StateProjection, TimeEvolution
from rescomp.core.types import as_count, as_matrix, as_vector, to_jax_f64, to_np_f64
from rescomp.layers.measurement import LuStateMeasurement
from rescomp.layers.projection import IdentityProjectionWithEmbedding
from rescomp.models.reservoir.classical import EchoStateNetworkBuilder
from rescomp.models.reservoir.activation import tanh
from rescomp.readout.linear import LinearStateProjection


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "cls, builtin",
        [
            (ConfigurationError, ValueError),
            (DimensionMismatchError, ValueError),
            (UnsupportedFeatureError, NotImplementedError),
            (SolverError, ArithmeticError),
        ],
    )
    def test_builtin_bases(self, cls, builtin):
        assert issubclass(cls, ReservoirError)
        assert issubclass(cls, builtin)

    def test_solver_error_carries_stats(self):
        err = SolverError("singular", {"min_abs_pivot": 0.0})
        assert err.stats == {"min_abs_pivot": 0.0}
        assert SolverError("no stats").stats == {}


class TestGateway:
    def test_round_trip_dtype(self):
        x = np.arange(4.0).reshape(2, 2)
        j = to_jax_f64(x)
        assert j.dtype == jnp.float64
        back = to_np_f64(j)
        back[0, 0] = 9.0
        np.testing.assert_allclose(x[0, 0], 0.0)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            to_jax_f64(np.array([1.0, np.nan]))

    def test_inf_rejected(self):
        with pytest.raises(ValueError):
            to_np_f64(jnp.array([1.0, jnp.inf], dtype=jnp.float64))

    def test_as_matrix_converts_and_checks_rank(self):
        assert as_matrix([[1, 2]]).dtype == np.float64
        with pytest.raises(DimensionMismatchError):
            as_matrix([1.0, 2.0])

    def test_as_vector_checks_rank(self):
        with pytest.raises(DimensionMismatchError):
            as_vector([[1.0]])

    def test_as_count_accepts_integers_only(self):
        assert as_count(3, name="n") == 3
        assert type(as_count(np.int64(4), name="n")) is int
        for bad in (2.0, 2.5, True, "3", None):
            with pytest.raises(ConfigurationError):
                as_count(bad, name="n")
        with pytest.raises(DimensionMismatchError):
            as_count(1.5, name="n", error=DimensionMismatchError)


class TestProtocols:
    """Reference implementations satisfy the runtime-checkable contracts."""

    def test_reference_components(self):
        assert isinstance(IdentityProjectionWithEmbedding(2, 1, 1), InputProjection)
        assert isinstance(EchoStateNetworkBuilder.random(5, 2.0).build_discrete_network(tanh()), TimeEvolution)
        assert isinstance(LuStateMeasurement(3), StateMeasurement)
        assert isinstance(LinearStateProjection(np.ones((1, 3))), StateProjection)


def test_importing_package_enables_x64():
    from rescomp.utils.jax_config import ensure_x64_enabled, x64_enabled

    ensure_x64_enabled()
    assert x64_enabled()

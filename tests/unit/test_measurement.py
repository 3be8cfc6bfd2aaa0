"""Unit tests for state measurements."""
import numpy as np
import pytest

from rescomp.core.errors import ConfigurationError, DimensionMismatchError
from rescomp.layers.measurement import (
    ConstantExtensionStateMeasurement,
    DefaultStateMeasurement,
    ExtendedLuStateMeasurement,
    LuStateMeasurement,
)

STATE = np.array([1.0, 2.0, -3.0, 4.0])


class TestMeasurementValues:
    def test_default_is_identity(self):
        m = DefaultStateMeasurement(4)
        assert m.output_dimension() == 4
        np.testing.assert_allclose(m.measure(STATE), STATE)

    def test_lu_squares_odd_indices(self):
        m = LuStateMeasurement(4)
        np.testing.assert_allclose(m.measure(STATE), [1.0, 4.0, -3.0, 16.0])

    def test_extended_lu_appends_squares(self):
        m = ExtendedLuStateMeasurement(4)
        assert m.output_dimension() == 8
        np.testing.assert_allclose(m.measure(STATE), [1.0, 2.0, -3.0, 4.0, 1.0, 4.0, 9.0, 16.0])

    def test_constant_extension(self):
        m = ConstantExtensionStateMeasurement(4, constant=0.5)
        assert m.output_dimension() == 5
        np.testing.assert_allclose(m.measure(STATE), [1.0, 2.0, -3.0, 4.0, 0.5])

    def test_constant_extension_default_is_one(self):
        assert ConstantExtensionStateMeasurement(2).measure(np.zeros(2))[-1] == 1.0


@pytest.mark.parametrize(
    "cls", [DefaultStateMeasurement, LuStateMeasurement, ExtendedLuStateMeasurement, ConstantExtensionStateMeasurement]
)
class TestVectorMatrixAgreement:
    """measure_many must agree column by column with measure."""

    def test_measure_many(self, cls):
        m = cls(3)
        states = np.random.default_rng(3).normal(size=(3, 6))
        many = m.measure_many(states)
        assert many.shape == (m.output_dimension(), 6)
        for k in range(6):
            np.testing.assert_allclose(many[:, k], m.measure(states[:, k]))

    def test_into_forms(self, cls):
        m = cls(3)
        states = np.arange(6.0).reshape(3, 2)
        target = np.zeros(m.output_dimension())
        m.measure_into(states[:, 1], target)
        targets = np.zeros((m.output_dimension(), 2))
        m.measure_many_into(states, targets)
        np.testing.assert_allclose(targets[:, 1], target)

    def test_wrong_state_length(self, cls):
        with pytest.raises(DimensionMismatchError):
            cls(3).measure(np.zeros(4))

    def test_wrong_target_shape(self, cls):
        m = cls(3)
        with pytest.raises(DimensionMismatchError):
            m.measure_many_into(np.zeros((3, 2)), np.zeros((m.output_dimension(), 3)))


def test_non_positive_dimension_rejected():
    with pytest.raises(ConfigurationError):
        DefaultStateMeasurement(0)

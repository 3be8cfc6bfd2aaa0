"""Unit tests for ReservoirComputer wiring and topology printing."""
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from rescomp.core.errors import ConfigurationError
from rescomp.layers.measurement import ExtendedLuStateMeasurement, LuStateMeasurement
from rescomp.layers.projection import InputProjectionWithEmbedding
from rescomp.models.computer import ReservoirComputer
from rescomp.models.reservoir.activation import tanh
from rescomp.models.reservoir.classical import EchoStateNetworkBuilder
from rescomp.models.reservoir.model import Reservoir
from rescomp.readout.linear import LinearStateProjection
from rescomp.utils.printing import format_shape, print_topology


def _computer():
    projection = InputProjectionWithEmbedding.new_random(system_dim=2, output_dim=10, embeddings=1, stride=2, seed=0)
    evolution = EchoStateNetworkBuilder.random(10, 2.0, seed=0).spectral_radius(0.9).build_discrete_network(tanh())
    readout = LinearStateProjection(np.full((2, 20), 0.01))
    return ReservoirComputer(Reservoir.from_parts(projection, evolution), ExtendedLuStateMeasurement(10), readout)


class TestReservoirComputer:
    def test_measurement_readout_mismatch(self):
        computer = _computer()
        with pytest.raises(ConfigurationError):
            ReservoirComputer(computer.reservoir, LuStateMeasurement(10), computer.projection)

    def test_prediction_shape(self):
        computer = _computer()
        preds = computer.synchronize_and_predict(np.ones((2, 3)), 0, 7)
        assert preds.shape == (2, 7)
        assert np.all(np.isfinite(preds))

    def test_clone_gives_identical_forecast(self):
        computer = _computer()
        computer.reservoir.synchronize(np.random.default_rng(1).normal(size=(2, 10)))
        twin = computer.clone()
        a = computer.synchronize_and_predict(np.ones((2, 3)), 0, 5)
        b = twin.synchronize_and_predict(np.ones((2, 3)), 0, 5)
        np.testing.assert_allclose(a, b)

    def test_clone_owns_measurement_and_shares_readout(self):
        computer = _computer()
        twin = computer.clone()
        assert twin.measurement is not computer.measurement
        assert twin.reservoir.state is not computer.reservoir.state
        assert twin.projection is computer.projection

    def test_clones_forecast_concurrently(self):
        computer = _computer()
        computer.reservoir.synchronize(np.random.default_rng(2).normal(size=(2, 12)))
        rng = np.random.default_rng(3)
        kickstarters = [rng.normal(size=(2, 3)) for _ in range(6)]
        expected = [computer.clone().synchronize_and_predict(k, 0, 200) for k in kickstarters]

        twins = [computer.clone() for _ in kickstarters]
        with ThreadPoolExecutor(max_workers=len(twins)) as pool:
            futures = [
                pool.submit(twin.synchronize_and_predict, k, 0, 200) for twin, k in zip(twins, kickstarters)
            ]
            results = [f.result() for f in futures]

        for got, want in zip(results, expected):
            np.testing.assert_array_equal(got, want)

    def test_predict_from_input_sequence(self):
        out = _computer().predict_from_input_sequence(np.ones((2, 8)), 0)
        assert out.shape == (2, 6)

    def test_topology_meta(self):
        meta = _computer().get_topology_meta()
        assert meta["type"] == "reservoir"
        assert meta["shapes"]["window"] == (2, 3)
        assert meta["shapes"]["feature"] == (20,)
        assert meta["details"]["stride"] == 2


class TestPrinting:
    def test_format_shape(self):
        assert format_shape(None) == "None"
        assert format_shape((5,)) == "[5]"
        assert format_shape((2, 3)) == "[2x3]"

    def test_print_topology(self, capsys):
        print_topology(_computer().get_topology_meta())
        out = capsys.readouterr().out
        assert "Model Architecture: RESERVOIR" in out
        assert "[2x3] -> [10] -> [10] -> [20] -> [2]" in out

    def test_empty_meta_prints_nothing(self, capsys):
        print_topology({})
        assert capsys.readouterr().out == ""

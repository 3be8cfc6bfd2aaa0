"""src/rescomp/cli/main.py
Forecasting demo: train an echo state network on a synthetic series and forecast the held-out window."""

from __future__ import annotations

import argparse
import sys
from typing import Dict, Optional, Sequence

from rescomp.utils.jax_config import ensure_x64_enabled

ensure_x64_enabled()

from rescomp.data.generators import Dataset, generate  # noqa: E402
from rescomp.layers.measurement import (  # noqa: E402
    ConstantExtensionStateMeasurement,
    DefaultStateMeasurement,
    ExtendedLuStateMeasurement,
    LuStateMeasurement,
)
from rescomp.layers.projection import DefaultInputProjection, InputProjectionWithEmbedding  # noqa: E402
from rescomp.models.reservoir.classical import from_config  # noqa: E402
from rescomp.models.reservoir.config import EchoStateNetworkConfig  # noqa: E402
from rescomp.models.reservoir.model import Reservoir  # noqa: E402
from rescomp.training.config import TrainingConfig  # noqa: E402
from rescomp.training.session import DEFAULT_RIDGE_BETA, ReservoirTraining  # noqa: E402
from rescomp.utils.metrics import calculate_mae, calculate_mse, calculate_nrmse, valid_prediction_steps  # noqa: E402
from rescomp.utils.printing import print_topology  # noqa: E402

MEASUREMENTS = {
    "default": DefaultStateMeasurement,
    "lu": LuStateMeasurement,
    "extended-lu": ExtendedLuStateMeasurement,
    "constant": ConstantExtensionStateMeasurement,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rescomp-demo", description="Echo state network forecasting demo")
    parser.add_argument("--dataset", type=str, default=Dataset.SINE_COSINE.value, choices=[d.value for d in Dataset])
    parser.add_argument("--units", type=int, default=200)
    parser.add_argument("--degree", type=float, default=3.0)
    parser.add_argument("--radius", type=float, default=0.9)
    parser.add_argument("--leak-rate", type=float, default=None, help="Leaky integrator rate; omit for the discrete network")
    parser.add_argument("--bias-scale", type=float, default=0.0)
    parser.add_argument("--input-strength", type=float, default=0.5)
    parser.add_argument("--embeddings", type=int, default=0)
    parser.add_argument("--stride", type=int, default=1)
    parser.add_argument("--measurement", type=str, default="lu", choices=sorted(MEASUREMENTS))
    parser.add_argument("--beta", type=float, default=DEFAULT_RIDGE_BETA)
    parser.add_argument("--train-sync", type=int, default=100)
    parser.add_argument("--train", type=int, default=1000)
    parser.add_argument("--predict", type=int, default=200)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    return parser


def run(args: argparse.Namespace) -> Dict[str, float]:
    training_config = TrainingConfig(
        train_sync_steps=args.train_sync,
        train_steps=args.train,
        prediction_sync_steps=0,
        prediction_steps=args.predict,
    )
    data = generate(args.dataset, training_config.total_steps)
    session = ReservoirTraining(training_config).add_data(data)
    system_dim = data.shape[0]

    esn_config = EchoStateNetworkConfig(
        n_units=args.units,
        average_degree=args.degree,
        spectral_radius=args.radius,
        leak_rate=args.leak_rate,
        bias_scale=args.bias_scale,
        seed=args.seed,
    )
    evolution = from_config(esn_config)
    if args.embeddings == 0:
        projection = DefaultInputProjection.new_random(system_dim, args.units, args.input_strength, seed=args.seed)
    else:
        projection = InputProjectionWithEmbedding.new_random(
            system_dim, args.units, args.embeddings, args.stride, seed=args.seed, input_strength=args.input_strength
        )
    reservoir = Reservoir.from_parts(projection, evolution)
    measurement = MEASUREMENTS[args.measurement](args.units)

    print(f"[main.py] Training on {args.dataset} ({system_dim} channels, {training_config.total_steps} steps)...")
    computer = session.train_via_ridge_regression(reservoir, measurement, beta=args.beta, verbose=args.verbose)
    print_topology(computer.get_topology_meta())

    kickstarter = session.get_prediction_kickstarter(0, computer.required_input_columns())
    predictions = computer.synchronize_and_predict(kickstarter, 0, args.predict, verbose=args.verbose)
    truth = session.get_true_future(0)[:, : args.predict]

    return {
        "mse": calculate_mse(predictions, truth),
        "mae": calculate_mae(predictions, truth),
        "nrmse": calculate_nrmse(predictions, truth),
        "valid_steps": float(valid_prediction_steps(predictions, truth)),
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    results = run(args)

    print("[main.py] Results:")
    print("  forecast: " + ", ".join(f"{k}={v:.4f}" for k, v in results.items()))
    sys.exit(0)


if __name__ == "__main__":
    main()

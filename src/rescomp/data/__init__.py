from .generators import GENERATORS, Dataset, generate, generate_lorenz, generate_sine_cosine  # noqa: F401

__all__ = ["GENERATORS", "Dataset", "generate", "generate_lorenz", "generate_sine_cosine"]

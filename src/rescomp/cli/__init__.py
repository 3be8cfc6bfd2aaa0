from .main import build_parser, main, run  # noqa: F401

__all__ = ["build_parser", "main", "run"]

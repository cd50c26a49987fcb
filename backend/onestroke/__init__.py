"""Deterministic level generator for single-stroke grid path puzzles."""
from .core.generator import GenerationError, generate_level, get_solution

__version__ = "1.0.0"

__all__ = [
    "GenerationError",
    "generate_level",
    "get_solution",
    "__version__",
]

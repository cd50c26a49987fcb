"""Core business logic package.

This package contains the engines for level generation (difficulty curve,
start selection, path search, fallback patterns) and offline verification.
"""
from .generator import (
    LevelGenerator,
    GenerationError,
    assemble_level,
    generate_level,
    get_generator,
    get_solution,
)
from .verifier import LevelVerifier, format_report

__all__ = [
    "LevelGenerator",
    "GenerationError",
    "assemble_level",
    "generate_level",
    "get_generator",
    "get_solution",
    "LevelVerifier",
    "format_report",
]

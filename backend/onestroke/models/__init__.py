"""Data models package.

This package contains domain dataclasses and API schemas for the application.
"""
from .level import (
    Point,
    DifficultyTier,
    TierConfig,
    DifficultyParams,
    LevelDescriptor,
    GenerationSource,
    GenerationResult,
    LevelMetrics,
    TierSummary,
    VerificationFinding,
    VerificationReport,
)
from .schemas import (
    PointSchema,
    LevelResponse,
    SolutionResponse,
    ErrorResponse,
)

__all__ = [
    # Level models
    "Point",
    "DifficultyTier",
    "TierConfig",
    "DifficultyParams",
    "LevelDescriptor",
    "GenerationSource",
    "GenerationResult",
    # Verification models
    "LevelMetrics",
    "TierSummary",
    "VerificationFinding",
    "VerificationReport",
    # API schemas
    "PointSchema",
    "LevelResponse",
    "SolutionResponse",
    "ErrorResponse",
]

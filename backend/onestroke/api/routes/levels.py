"""Level API routes.

The level endpoint returns what a player needs to attempt the puzzle; the
solution is only served by the separate hint endpoint.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ...config import Settings
from ...models.level import LevelDescriptor
from ...models.schemas import (
    ErrorResponse,
    LevelResponse,
    PointSchema,
    SolutionResponse,
)
from ...core.generator import GenerationError, LevelGenerator
from ..deps import get_app_settings, get_level_generator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/levels", tags=["levels"])

NOT_FOUND = "Level not found"


def _load_level(level_id: int, generator: LevelGenerator, settings: Settings) -> LevelDescriptor:
    """Generate a level, mapping out-of-range ids and generation failures to 404."""
    if not settings.is_served(level_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    try:
        return generator.generate(level_id).level
    except GenerationError as e:
        logger.error("level %d could not be generated: %s", level_id, e)
        raise HTTPException(status_code=404, detail=NOT_FOUND)


@router.get(
    "/{level_id}",
    response_model=LevelResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_level(
    level_id: int,
    generator: LevelGenerator = Depends(get_level_generator),
    settings: Settings = Depends(get_app_settings),
) -> LevelResponse:
    """
    Get a level's grid, start cell and nodes.

    Args:
        level_id: Level identifier (1..max_level_id).
        generator: LevelGenerator dependency.
        settings: Application settings dependency.

    Returns:
        LevelResponse without the solution.
    """
    level = _load_level(level_id, generator, settings)
    return LevelResponse.from_level(level)


@router.get(
    "/{level_id}/solution",
    response_model=SolutionResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_level_solution(
    level_id: int,
    generator: LevelGenerator = Depends(get_level_generator),
    settings: Settings = Depends(get_app_settings),
) -> SolutionResponse:
    """
    Get a level's solution path (hint).

    Args:
        level_id: Level identifier (1..max_level_id).
        generator: LevelGenerator dependency.
        settings: Application settings dependency.

    Returns:
        SolutionResponse with the ordered path.
    """
    level = _load_level(level_id, generator, settings)
    return SolutionResponse(path=[PointSchema.from_point(p) for p in level.solution])

"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .level import LevelDescriptor, Point


class PointSchema(BaseModel):
    """A grid cell."""
    x: int = Field(..., ge=0, description="Column (0-based)")
    y: int = Field(..., ge=0, description="Row (0-based)")

    @classmethod
    def from_point(cls, point: Point) -> "PointSchema":
        return cls(x=point.x, y=point.y)


class LevelResponse(BaseModel):
    """Response schema for a level. Carries no solution."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., ge=1, description="Level identifier")
    grid_size: int = Field(..., ge=1, alias="gridSize", description="Grid side length")
    start: PointSchema = Field(..., description="Cell the path must start from")
    nodes: List[PointSchema] = Field(..., description="Cells to visit, row-major order")

    @classmethod
    def from_level(cls, level: LevelDescriptor) -> "LevelResponse":
        return cls(
            id=level.id,
            grid_size=level.grid_size,
            start=PointSchema.from_point(level.start),
            nodes=[PointSchema.from_point(p) for p in level.nodes],
        )


class SolutionResponse(BaseModel):
    """Response schema for a level hint."""
    path: List[PointSchema] = Field(..., description="Solution path, start cell first")


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str = Field(..., description="Error message")
    level_id: Optional[int] = Field(default=None, description="Level the error refers to")

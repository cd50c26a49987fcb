"""Level data models and structures."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple
from enum import Enum


@dataclass(frozen=True, order=True)
class Point:
    """A grid cell, 0-based. Ordering is column-major; use row_major_key for presentation."""
    x: int
    y: int

    def row_major_key(self) -> Tuple[int, int]:
        """Sort key placing points by row, then by column."""
        return (self.y, self.x)

    def manhattan(self, other: "Point") -> int:
        """Manhattan distance to another point."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


class DifficultyTier(str, Enum):
    """Named difficulty tiers across the level range."""
    TUTORIAL = "tutorial"           # 1
    EASY_START = "easy_start"       # 2-4
    BEGINNER = "beginner"           # 5-10
    INTERMEDIATE = "intermediate"   # 11-16
    ADVANCED = "advanced"           # 17-31
    EXPERT = "expert"               # 32-60
    MASTER = "master"               # 61-100
    EXTREME = "extreme"             # 101-130
    INSANE = "insane"               # 131-170
    NIGHTMARE = "nightmare"         # 171+


@dataclass
class TierConfig:
    """Level range and display label for a difficulty tier."""
    tier: DifficultyTier
    level_range: Tuple[int, int]  # inclusive
    label: str

    def contains(self, level_id: int) -> bool:
        return self.level_range[0] <= level_id <= self.level_range[1]


@dataclass(frozen=True)
class DifficultyParams:
    """Output of the difficulty curve for one level."""
    level_id: int
    grid_size: int
    difficulty: float
    coverage: float       # target fraction of grid cells in the node set
    style: int            # heuristic selector, 0..STYLE_COUNT-1
    target_node_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level_id": self.level_id,
            "grid_size": self.grid_size,
            "difficulty": round(self.difficulty, 4),
            "coverage": round(self.coverage, 4),
            "style": self.style,
            "target_node_count": self.target_node_count,
        }


@dataclass(frozen=True)
class LevelDescriptor:
    """A generated level: the nodes to visit and the path that visits them."""
    id: int
    grid_size: int
    start: Point
    nodes: Tuple[Point, ...]      # row-major sorted
    solution: Tuple[Point, ...]   # ordered path, solution[0] == start

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def coverage(self) -> float:
        """Fraction of the grid covered by the node set."""
        return len(self.nodes) / float(self.grid_size * self.grid_size)

    def to_dict(self, include_solution: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary.

        The solution is hint information and is left out unless asked for.
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "gridSize": self.grid_size,
            "start": self.start.to_dict(),
            "nodes": [p.to_dict() for p in self.nodes],
        }
        if include_solution:
            data["solution"] = [p.to_dict() for p in self.solution]
        return data


class GenerationSource(str, Enum):
    """Which stage produced the level's path."""
    SEARCH = "search"
    FALLBACK = "fallback"


@dataclass
class GenerationResult:
    """Result of level generation, with bookkeeping about how it was produced."""
    level: LevelDescriptor
    params: DifficultyParams
    source: GenerationSource
    attempts: int
    generation_time_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level.to_dict(include_solution=True),
            "params": self.params.to_dict(),
            "source": self.source.value,
            "attempts": self.attempts,
            "generation_time_ms": self.generation_time_ms,
        }


@dataclass
class LevelMetrics:
    """Per-level figures reported by the verifier."""
    level_id: int
    grid_size: int
    node_count: int
    coverage_percent: int
    direction_changes: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level_id": self.level_id,
            "grid_size": self.grid_size,
            "node_count": self.node_count,
            "coverage_percent": self.coverage_percent,
            "direction_changes": self.direction_changes,
        }


@dataclass
class TierSummary:
    """Averages over the generated levels of one tier."""
    tier: DifficultyTier
    label: str
    level_count: int
    avg_grid_size: float
    avg_node_count: float
    avg_coverage: float  # 0-1
    sample: Optional[LevelMetrics] = None


@dataclass
class VerificationFinding:
    """A non-fatal problem found while verifying a level range."""
    level_id: int
    kind: str  # "error", "invalid", "duplicate", "progression"
    message: str


@dataclass
class VerificationReport:
    """Outcome of regenerating and checking a range of levels."""
    start_id: int
    end_id: int
    generated: int = 0
    metrics: List[LevelMetrics] = field(default_factory=list)
    duplicates: List[Tuple[int, int]] = field(default_factory=list)
    findings: List[VerificationFinding] = field(default_factory=list)
    tiers: List[TierSummary] = field(default_factory=list)
    checks: Dict[str, bool] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.end_id - self.start_id + 1

    @property
    def errors(self) -> List[VerificationFinding]:
        return [f for f in self.findings if f.kind in ("error", "invalid")]

    @property
    def ok(self) -> bool:
        """True when nothing was flagged."""
        return not self.findings and not self.duplicates

"""Offline verification of generated levels.

Regenerates a range of levels, checks each one's structural invariants,
looks for levels with identical node sets, and summarizes difficulty per
tier. Every problem is recorded as a finding; nothing here raises.
"""
import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..models.level import (
    LevelDescriptor,
    LevelMetrics,
    Point,
    TierSummary,
    VerificationFinding,
    VerificationReport,
)
from ..utils.helpers import count_direction_changes, node_signature, validate_level
from .difficulty import TIER_CONFIGS
from .generator import LevelGenerator, get_generator

logger = logging.getLogger(__name__)

# Acceptance thresholds for the summary checks
FIRST_LEVEL_MAX_NODES = 5
LAST_LEVEL_MIN_COVERAGE = 80  # percent
PROGRESSION_GRACE_LEVELS = 10


def level_metrics(level: LevelDescriptor) -> LevelMetrics:
    return LevelMetrics(
        level_id=level.id,
        grid_size=level.grid_size,
        node_count=level.node_count,
        coverage_percent=round(level.coverage * 100),
        direction_changes=count_direction_changes(level.solution),
    )


class LevelVerifier:
    """Regenerates and checks a range of levels."""

    def __init__(self, generator: Optional[LevelGenerator] = None):
        self.generator = generator or get_generator()

    def verify(self, start_id: int = 1, end_id: int = 200) -> VerificationReport:
        """
        Verify every level in [start_id, end_id].

        Args:
            start_id: First level id (inclusive).
            end_id: Last level id (inclusive).

        Returns:
            VerificationReport with metrics, duplicates, findings and tier summaries.
        """
        if end_id < start_id:
            raise ValueError(f"empty level range {start_id}..{end_id}")

        report = VerificationReport(start_id=start_id, end_id=end_id)
        levels: List[LevelDescriptor] = []
        seen: Dict[Tuple[int, FrozenSet[Point]], List[int]] = {}

        for level_id in range(start_id, end_id + 1):
            try:
                level = self.generator.generate(level_id).level
            except Exception as e:
                logger.warning("level %d failed to generate: %s", level_id, e)
                report.findings.append(VerificationFinding(level_id, "error", str(e)))
                continue

            is_valid, error = validate_level(level)
            if not is_valid:
                report.findings.append(VerificationFinding(level_id, "invalid", error or "invalid level"))

            signature = node_signature(level)
            for earlier in seen.get(signature, []):
                report.duplicates.append((earlier, level_id))
                report.findings.append(
                    VerificationFinding(level_id, "duplicate", f"same node set as level {earlier}")
                )
            seen.setdefault(signature, []).append(level_id)

            levels.append(level)
            report.metrics.append(level_metrics(level))

        report.generated = len(levels)
        self._check_progression(levels, report)
        report.tiers = self._summarize_tiers(report.metrics)
        report.checks = self._summary_checks(report)

        logger.info(
            "verified levels %d-%d: %d generated, %d duplicate pairs, %d findings",
            start_id, end_id, report.generated, len(report.duplicates), len(report.findings),
        )
        return report

    @staticmethod
    def _check_progression(levels: List[LevelDescriptor], report: VerificationReport) -> None:
        """Flag any level whose grid is smaller than its predecessor's."""
        for prev, curr in zip(levels, levels[1:]):
            if curr.id <= PROGRESSION_GRACE_LEVELS + 1:
                continue
            if curr.grid_size < prev.grid_size:
                report.findings.append(VerificationFinding(
                    curr.id,
                    "progression",
                    f"grid {curr.grid_size}x{curr.grid_size} is smaller than level {prev.id}'s "
                    f"{prev.grid_size}x{prev.grid_size}",
                ))

    @staticmethod
    def _summarize_tiers(metrics: List[LevelMetrics]) -> List[TierSummary]:
        summaries = []
        for config in TIER_CONFIGS.values():
            in_tier = [m for m in metrics if config.contains(m.level_id)]
            if not in_tier:
                continue
            count = len(in_tier)
            summaries.append(TierSummary(
                tier=config.tier,
                label=config.label,
                level_count=count,
                avg_grid_size=sum(m.grid_size for m in in_tier) / count,
                avg_node_count=sum(m.node_count for m in in_tier) / count,
                avg_coverage=sum(m.node_count / (m.grid_size * m.grid_size) for m in in_tier) / count,
                sample=in_tier[0],
            ))
        return summaries

    @staticmethod
    def _summary_checks(report: VerificationReport) -> Dict[str, bool]:
        checks: Dict[str, bool] = {}
        by_id = {m.level_id: m for m in report.metrics}

        first = by_id.get(1)
        if first is not None:
            checks["first_level_easy"] = first.node_count <= FIRST_LEVEL_MAX_NODES

        last = by_id.get(report.end_id)
        if last is not None:
            checks["last_level_challenging"] = last.coverage_percent >= LAST_LEVEL_MIN_COVERAGE

        checks["grid_progression"] = not any(f.kind == "progression" for f in report.findings)
        checks["all_valid"] = not report.errors and report.generated == report.total
        checks["all_unique"] = not report.duplicates
        return checks


def format_report(report: VerificationReport) -> str:
    """Render a verification report as human-readable text."""
    lines = [
        f"Verifying levels {report.start_id}-{report.end_id}",
        "",
        "GENERATION RESULTS:",
        f"   Total levels generated: {report.generated}/{report.total}",
        f"   Errors: {len(report.errors)}",
    ]

    if report.errors:
        lines.append("")
        lines.append("ERRORS:")
        for finding in report.errors:
            lines.append(f"   Level {finding.level_id} ({finding.kind}): {finding.message}")

    lines.append("")
    lines.append("DUPLICATE CHECK:")
    if not report.duplicates:
        lines.append("   ✅ All levels are unique")
    else:
        lines.append(f"   ⚠️ Found {len(report.duplicates)} duplicate pairs:")
        for a, b in report.duplicates:
            lines.append(f"      Level {a} === Level {b}")

    lines.append("")
    lines.append("DIFFICULTY PROGRESSION:")
    for summary in report.tiers:
        lines.append("")
        lines.append(f"   {summary.label} ({summary.level_count} levels):")
        grid = round(summary.avg_grid_size)
        lines.append(
            f"      Grid: {grid}x{grid}, Nodes: ~{round(summary.avg_node_count)}, "
            f"Coverage: ~{round(summary.avg_coverage * 100)}%"
        )
        if summary.sample is not None:
            s = summary.sample
            lines.append(
                f"      Sample (Level {s.level_id}): {s.grid_size}x{s.grid_size} grid, "
                f"{s.node_count} nodes, {s.direction_changes} turns"
            )

    progression = [f for f in report.findings if f.kind == "progression"]
    if progression:
        lines.append("")
        lines.append("PROGRESSION WARNINGS:")
        for finding in progression:
            lines.append(f"   ⚠️ Level {finding.level_id}: {finding.message}")

    lines.append("")
    lines.append("VALIDATION CHECKS:")
    for name, passed in report.checks.items():
        mark = "✅" if passed else "⚠️"
        lines.append(f"   {mark} {name.replace('_', ' ')}")

    return "\n".join(lines)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .adapters.base import MovieCleanStats
from .aggregator import AggregatedPoint
from .validator import Issue


@dataclass(frozen=True)
class Summary:
    """Aggregated results of one chart-data run."""
    rows_in: int
    records_count: int
    stats: MovieCleanStats
    issues: List[Issue]
    points: List[AggregatedPoint]

    @property
    def total_gross(self) -> float:
        return sum(p.total_gross for p in self.points)


def build_summary(stats: MovieCleanStats,
                  records_count: int,
                  issues: List[Issue],
                  points: List[AggregatedPoint]) -> Summary:
    return Summary(
        rows_in=stats.rows_in,
        records_count=records_count,
        stats=stats,
        issues=issues,
        points=points
    )


def format_summary(summary: Summary) -> str:
    """
    Human-readable CLI report.

    Prints counts, up to 2 examples per issue and one line per charted year.
    """
    lines: List[str] = []
    lines.append("Gross Revenue Summary")
    lines.append("---------------------")
    lines.append(f"Rows read: {summary.rows_in}")
    lines.append(f"Records parsed: {summary.records_count}")
    lines.append(f"Years charted: {len(summary.points)}")
    lines.append("")
    lines.append("Data issues:")

    if not summary.issues:
        lines.append("- none")
    else:
        for issue in summary.issues:
            lines.append(f"- {issue.message} ({issue.count})")
            for ex in issue.examples[:2]:
                ex_str = ", ".join(f"{k}={v}" for k, v in ex.items())
                lines.append(f"    example: {ex_str}")

    lines.append("")
    lines.append("Total gross by year:")
    if not summary.points:
        lines.append("- no qualifying rows")
    for p in summary.points:
        lines.append(f"- {p.year}: {p.total_gross / 1_000_000_000:.2f}B")
    if summary.points:
        lines.append(f"All years: {summary.total_gross / 1_000_000_000:.2f}B")

    return "\n".join(lines)


def to_json_dict(summary: Summary) -> Dict[str, Any]:
    """Machine-readable report for automation and regression tests."""
    issues = []
    for i in summary.issues:
        issues.append({
            "category": i.category,
            "message": i.message,
            "count": i.count,
            "examples": i.examples
        })

    cleaning = {
        "rows_in": summary.stats.rows_in,
        "bad_score": summary.stats.bad_score,
        "bad_year": summary.stats.bad_year,
        "bad_gross": summary.stats.bad_gross,
        "missing_columns": list(summary.stats.missing_columns),
        "skipped_lines": len(summary.stats.skipped_lines),
    }

    return {
        "counts": {
            "rows": summary.rows_in,
            "records": summary.records_count,
            "points": len(summary.points)
        },
        "cleaning": cleaning,
        "issues": issues,
        "points": [p.to_dict() for p in summary.points]
    }

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from .adapters.base import MovieCleanStats
from .aggregator import MIN_YEAR
from .records import Record


@dataclass(frozen=True)
class Issue:
    """Single data-quality finding with a small sample of concrete examples."""
    category: str
    message: str
    count: int
    examples: List[Dict[str, Any]]


def _example(record: Record) -> Dict[str, Any]:
    return {
        "director": record.director,
        "year": str(record.year),
        "gross": str(record.gross),
        "score": str(record.score),
    }


def _missing_columns(stats: MovieCleanStats) -> List[Issue]:
    """Report required columns absent from the header."""
    if not stats.missing_columns:
        return []
    return [Issue(
        category="schema",
        message=f"input missing required columns: {', '.join(stats.missing_columns)}",
        count=len(stats.missing_columns),
        examples=[]
    )]


def _skipped_lines(stats: MovieCleanStats) -> List[Issue]:
    """Report CSV lines the tokenizer could not turn into a row at all."""
    if not stats.skipped_lines:
        return []
    return [Issue(
        category="parsing",
        message="CSV lines that could not be read",
        count=len(stats.skipped_lines),
        examples=[{"error": msg} for msg in stats.skipped_lines[:5]]
    )]


def _matching(records: Sequence[Record],
              predicate: Callable[[Record], bool],
              category: str,
              message: str) -> List[Issue]:
    hits = [r for r in records if predicate(r)]
    if not hits:
        return []
    return [Issue(
        category=category,
        message=message,
        count=len(hits),
        examples=[_example(r) for r in hits[:5]]
    )]


def validate(records: Sequence[Record],
             stats: MovieCleanStats,
             min_year: int = MIN_YEAR) -> List[Issue]:
    """
    Run all checks and return a flat list of Issues.

    None of these findings stop a run: rows with unparsed values simply drop
    out of the aggregation. The list explains where they went.
    """
    issues: List[Issue] = []

    issues.extend(_missing_columns(stats))
    issues.extend(_skipped_lines(stats))

    # A missing column already explains every sentinel in it.
    missing = set(stats.missing_columns)
    if "gross" not in missing:
        issues.extend(_matching(records, lambda r: not r.gross.valid,
                                "parsing", "Rows with non-numeric gross"))
    if "title_year" not in missing:
        issues.extend(_matching(records, lambda r: not r.year.valid,
                                "parsing", "Rows with non-numeric title_year"))
    if "imdb_score" not in missing:
        issues.extend(_matching(records, lambda r: not r.score.valid,
                                "parsing", "Rows with non-numeric imdb_score"))

    issues.extend(_matching(
        records,
        lambda r: r.year.valid and r.year.value < min_year,
        "filter",
        f"Rows released before {min_year}"
    ))

    return issues

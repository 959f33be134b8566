from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .records import Record

MIN_YEAR = 2010


@dataclass(frozen=True)
class AggregatedPoint:
    """Total gross revenue of all qualifying movies released in one year."""
    year: int
    total_gross: float

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "totalGross": self.total_gross}


def qualifies(record: Record, min_year: int = MIN_YEAR) -> bool:
    """A record counts when both gross and year parsed and the year is recent enough."""
    return (
        record.gross.valid
        and record.year.valid
        and record.year.value >= min_year
    )


def aggregate_gross_by_year(records: Iterable[Record],
                            min_year: int = MIN_YEAR) -> List[AggregatedPoint]:
    """
    Sum gross per release year over qualifying records, ascending by year.

    Records with an unparsed gross or year, or released before min_year, are
    dropped. An input with nothing left after filtering gives an empty list.
    """
    totals: Dict[int, float] = {}
    for record in records:
        if not qualifies(record, min_year):
            continue
        year = record.year_value
        totals[year] = totals.get(year, 0.0) + record.gross.value

    return [AggregatedPoint(year=y, total_gross=totals[y]) for y in sorted(totals)]

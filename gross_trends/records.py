from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Parsed:
    """Result of coercing one raw field to a number: a valid value or the sentinel."""
    value: float = math.nan
    valid: bool = False

    def __str__(self) -> str:
        return repr(self.value) if self.valid else "NaN"


NOT_A_NUMBER = Parsed()


def parse_number(raw: Any) -> Parsed:
    """
    Parse a finite decimal number from a CSV field.

    Empty, missing and non-numeric text, as well as inf/nan, yield NOT_A_NUMBER.
    """
    if raw is None or isinstance(raw, bool):
        return NOT_A_NUMBER

    if isinstance(raw, str):
        text = raw.strip()
        # float() accepts "1_000", CSV numbers never carry digit separators
        if not text or "_" in text:
            return NOT_A_NUMBER
        try:
            value = float(text)
        except ValueError:
            return NOT_A_NUMBER
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return NOT_A_NUMBER

    if not math.isfinite(value):
        return NOT_A_NUMBER
    return Parsed(value=value, valid=True)


def parse_year(raw: Any) -> Parsed:
    """Like parse_number, but only whole numbers count as a year."""
    parsed = parse_number(raw)
    if not parsed.valid or not parsed.value.is_integer():
        return NOT_A_NUMBER
    return parsed


@dataclass(frozen=True)
class Record:
    """One movie row with its numeric fields already parsed."""
    score: Parsed
    year: Parsed
    director: str
    gross: Parsed

    @classmethod
    def from_raw(cls,
                 score: Any = None,
                 year: Any = None,
                 director: Any = "",
                 gross: Any = None) -> Record:
        return cls(
            score=parse_number(score),
            year=parse_year(year),
            director="" if director is None else str(director),
            gross=parse_number(gross),
        )

    @property
    def year_value(self) -> int | None:
        return int(self.year.value) if self.year.valid else None

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Tuple

from ..records import Record


@dataclass(frozen=True)
class MovieCleanStats:
    """Counters collected while parsing a movie CSV."""
    rows_in: int
    bad_score: int
    bad_year: int
    bad_gross: int
    missing_columns: Tuple[str, ...] = field(default_factory=tuple)
    skipped_lines: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LoadedMovies:
    """
    Immutable container holding parsed Records together with the statistics
    gathered while reading them.
    """
    records: Tuple[Record, ...]
    stats: MovieCleanStats


class Adapter(Protocol):
    """
    Interface for dataset-specific loaders that map a raw movie CSV into
    typed Records.
    """

    def load(self, input_path: Path) -> LoadedMovies:
        """
        Load a dataset from input_path. Raises SourceUnavailable if the file
        cannot be read.
        """
        ...

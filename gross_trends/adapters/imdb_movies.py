from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .base import LoadedMovies, MovieCleanStats
from ..loader import load_csv
from ..records import Record


class ImdbMoviesAdapter:
    """Adapter for the IMDB 5000 movie dataset (movies.csv)."""

    _COL_SCORE = "imdb_score"
    _COL_YEAR = "title_year"
    _COL_DIRECTOR = "director_name"
    _COL_GROSS = "gross"

    REQUIRED = (_COL_SCORE, _COL_YEAR, _COL_DIRECTOR, _COL_GROSS)

    def __init__(self) -> None:
        self.last_cleaning_stats: Optional[MovieCleanStats] = None

    def load(self, input_path: Path) -> LoadedMovies:
        raw, skipped = load_csv(input_path, columns=self.REQUIRED)
        records, stats = self._clean(raw, skipped)
        self.last_cleaning_stats = stats
        return LoadedMovies(records=records, stats=stats)

    def _fill_missing(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, Tuple[str, ...]]:
        df = df.copy()
        df.columns = [str(c).strip() for c in df.columns]

        missing = tuple(c for c in self.REQUIRED if c not in df.columns)
        for col in missing:
            df[col] = ""
        return df, missing

    def _clean(self,
               df: pd.DataFrame,
               skipped: Sequence[str] = ()) -> Tuple[Tuple[Record, ...], MovieCleanStats]:
        rows_in = int(df.shape[0])
        df, missing = self._fill_missing(df)

        records: List[Record] = [
            Record.from_raw(score=s, year=y, director=d, gross=g)
            for s, y, d, g in zip(
                df[self._COL_SCORE],
                df[self._COL_YEAR],
                df[self._COL_DIRECTOR].astype(str),
                df[self._COL_GROSS],
            )
        ]

        stats = MovieCleanStats(
            rows_in=rows_in,
            bad_score=sum(1 for r in records if not r.score.valid),
            bad_year=sum(1 for r in records if not r.year.valid),
            bad_gross=sum(1 for r in records if not r.gross.valid),
            missing_columns=missing,
            skipped_lines=tuple(skipped),
        )
        return tuple(records), stats

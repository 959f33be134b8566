from __future__ import annotations

import io
import warnings
from pathlib import Path
from typing import Iterable, List, Tuple

import pandas as pd

_EOF_IN_QUOTE = "unexpected end of data"


class SourceUnavailable(Exception):
    """The delimited input could not be read at all."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def _parse(text: str) -> Tuple[pd.DataFrame, List[str]]:
    """Parse CSV text, returning the frame and the lines pandas had to skip."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", pd.errors.ParserWarning)
        # index_col=False keeps long rows (truncated) instead of flagging them
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            engine="python",
            index_col=False,
            on_bad_lines="warn",
        )

    skipped = [
        str(w.message).strip()
        for w in caught
        if issubclass(w.category, pd.errors.ParserWarning)
        and str(w.message).startswith("Skipping line")
    ]
    return df, skipped


def load_csv(path: Path, columns: Iterable[str] = ()) -> Tuple[pd.DataFrame, List[str]]:
    """
    Read a CSV as text columns, keeping every row that can be tokenized.

    Long rows are truncated and short rows padded to the header width. A quoted
    field left open at the end of the file runs to the end of the file. Lines
    that still cannot be tokenized are returned as messages instead of being
    dropped silently. A zero-byte file becomes an empty frame holding the
    requested columns.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise SourceUnavailable(path, exc.strerror or str(exc)) from exc

    try:
        df, skipped = _parse(text)
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=list(columns), dtype=str), []

    if any(_EOF_IN_QUOTE in msg for msg in skipped):
        df, skipped = _parse(text + '"')

    return df.fillna(""), skipped

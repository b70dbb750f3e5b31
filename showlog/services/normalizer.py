from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..csvio.reader import BuildError
from ..models.diagnostic import HEADER_ROW_NUMBER, RowDiagnostic
from ..models.show_record import ShowRecord

"""Row normalization for shows.csv.

Two independent checkpoints:
1. resolve_columns(): global header check, run once before any row is touched.
   A missing required column aborts the whole build.
2. normalize_row(): per-row coercion + required field check. A row with an empty
   date or title is skipped with a RowDiagnostic; processing continues.

Value-level problems (unknown boolean token, unparsable rating, empty genre token)
never warn: they degrade to False / None / omission.
"""

__all__ = [
    "DEFAULT_COLUMNS",
    "TRUTHY_TOKENS",
    "GENRE_DELIMITERS",
    "ColumnIndex",
    "MissingColumnsError",
    "NormalizeResult",
    "coerce_bool",
    "split_genres",
    "to_number_or_null",
    "resolve_columns",
    "normalize_row",
    "normalize_rows",
]

# field key -> header name in shows.csv
DEFAULT_COLUMNS: dict[str, str] = {
    "date": "Datum",
    "title": "Nazev",
    "theatre": "Soubor",
    "place": "Misto",
    "city": "Mesto",
    "host": "Hostovacka",
    "removed": "StazenoZR",
    "genres": "Zanry",
    "rating": "Hodnoceni",
    "comment": "Komentar",
}

# A/N in the Czech sheet, Y/YES/TRUE/1 for everything else
TRUTHY_TOKENS = frozenset({"A", "Y", "YES", "TRUE", "1"})

GENRE_DELIMITERS = ";|,"
_GENRE_SPLIT = re.compile(f"[{re.escape(GENRE_DELIMITERS)}]")

# plain decimal literal: sign, digits, optional fraction, optional exponent
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_MAX_EXACT_INT = 2**53


class MissingColumnsError(BuildError):
    """Raised when the header lacks one or more required column names."""

    def __init__(self, missing: list[str], header: list[str]) -> None:
        self.missing = missing
        self.header = header
        super().__init__(
            f"Missing columns in CSV header: {', '.join(missing)}"
            f" (found header: {' | '.join(header)})"
        )


@dataclass(frozen=True)
class ColumnIndex:
    """Header lookup table built once per run.

    positions maps field key (date, title, ...) to zero-based column position;
    names maps field key to the header name, used in diagnostics.
    """
    positions: dict[str, int]
    names: dict[str, str]

    def get(self, raw: Sequence[str], key: str) -> str:
        """Trimmed cell for ``key``; short rows yield an empty string."""
        pos = self.positions[key]
        if pos >= len(raw):
            return ""
        return (raw[pos] or "").strip()


@dataclass(frozen=True)
class NormalizeResult:
    records: list[ShowRecord] = field(default_factory=list)
    diagnostics: list[RowDiagnostic] = field(default_factory=list)


def coerce_bool(value: str | None) -> bool:
    """Case-insensitive exact match against TRUTHY_TOKENS; anything else is False."""
    return (value or "").strip().upper() in TRUTHY_TOKENS


def split_genres(value: str | None) -> list[str]:
    """Split a genre cell on ; | or , into trimmed lowercase tokens.

    Order is preserved and duplicates are kept; empty tokens are dropped.

    >>> split_genres("Drama; comedy,Site Specific")
    ['drama', 'comedy', 'site specific']
    """
    raw = (value or "").strip()
    if not raw:
        return []
    tokens = (t.strip() for t in _GENRE_SPLIT.split(raw))
    return [t.lower() for t in tokens if t]


def to_number_or_null(value: str | None) -> int | float | None:
    """Parse a rating cell ("85", "85%", "72.5") into a number.

    Empty or unparsable input yields None. Integral values within the exact
    float range come back as int so the JSON reads 85 rather than 85.0; larger
    ones stay float (1e+300). No range clamping.
    """
    text = (value or "").strip()
    if text.endswith("%"):
        text = text[:-1].strip()
    if not text or not _NUMBER.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) < _MAX_EXACT_INT:
        return int(number)
    return number


def resolve_columns(
    header: Sequence[str], columns: Mapping[str, str] | None = None
) -> ColumnIndex:
    """Build the header lookup table, failing if any required column is absent.

    Header names are trimmed; if a name repeats, the last occurrence wins.

    Raises:
        MissingColumnsError: Listing every missing name in required order
    """
    names = {**DEFAULT_COLUMNS, **(columns or {})}
    trimmed = [(h or "").strip() for h in header]
    by_name = {h: i for i, h in enumerate(trimmed)}

    missing = [name for name in names.values() if name not in by_name]
    if missing:
        raise MissingColumnsError(missing, trimmed)

    positions = {key: by_name[name] for key, name in names.items()}
    return ColumnIndex(positions=positions, names=names)


def normalize_row(
    raw: Sequence[str], index: ColumnIndex, row_number: int
) -> ShowRecord | RowDiagnostic:
    """Normalize one data row, or explain why it was skipped.

    Parameters:
        raw: Raw cells in file order
        index: Resolved header lookup table
        row_number: 1-based original row number (header = 1)
    """
    date = index.get(raw, "date")
    title = index.get(raw, "title")
    if not date or not title:
        return RowDiagnostic(
            row=row_number,
            reason=f"missing {index.names['date']} or {index.names['title']} -> skipped",
        )

    return ShowRecord(
        date=date,
        title=title,
        theatre=index.get(raw, "theatre"),
        place=index.get(raw, "place"),
        city=index.get(raw, "city"),
        host=coerce_bool(index.get(raw, "host")),
        removed=coerce_bool(index.get(raw, "removed")),
        genres=split_genres(index.get(raw, "genres")),
        rating=to_number_or_null(index.get(raw, "rating")),
        comment=index.get(raw, "comment"),
    )


def normalize_rows(
    header: Sequence[str],
    data_rows: Sequence[Sequence[str]],
    columns: Mapping[str, str] | None = None,
) -> NormalizeResult:
    """Normalize all data rows against ``header``.

    The header check runs once up front, so a missing column fails before any
    row is processed. Records keep input order; diagnostics are in row order.

    Raises:
        MissingColumnsError: If the header lacks a required column
    """
    index = resolve_columns(header, columns)

    result = NormalizeResult()
    for offset, raw in enumerate(data_rows):
        outcome = normalize_row(raw, index, HEADER_ROW_NUMBER + 1 + offset)
        if isinstance(outcome, RowDiagnostic):
            result.diagnostics.append(outcome)
        else:
            result.records.append(outcome)
    return result

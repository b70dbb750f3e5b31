from __future__ import annotations

from pathlib import Path

from .parser import parse_csv

"""Source file reader for shows.csv.

Reads the whole file into memory (UTF-8, BOM tolerated), parses it and splits
the header row from the data rows.
"""


class BuildError(Exception):
    """Base class for fatal errors that abort a build before any output is written."""


class SourceNotFoundError(BuildError):
    """Raised when the input CSV file does not exist."""


class EmptySourceError(BuildError):
    """Raised when the CSV lacks a header row plus at least one data row."""


def read_csv_file(path: Path) -> str:
    """Return the CSV text of ``path``.

    Raises:
        SourceNotFoundError: If the file does not exist
    """
    if not path.is_file():
        raise SourceNotFoundError(f"Missing {path.as_posix()}")
    # utf-8-sig: spreadsheet exports often prepend a BOM to the header.
    # Decoded from bytes so CR reaches the parser untranslated.
    return path.read_bytes().decode("utf-8-sig")


def split_header(rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Split parsed rows into (header, data_rows).

    Raises:
        EmptySourceError: If fewer than two rows are present
    """
    if len(rows) < 2:
        raise EmptySourceError("CSV is empty (need header + at least one row).")
    return rows[0], rows[1:]


def load_rows(path: Path) -> tuple[list[str], list[list[str]]]:
    """Read, parse and split ``path`` in one step."""
    return split_header(parse_csv(read_csv_file(path)))

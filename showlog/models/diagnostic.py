from __future__ import annotations

from dataclasses import dataclass

"""RowDiagnostic model for skipped data rows.

Row numbers are 1-based and count the header as row 1, so the first data row
is row 2 (same numbering a spreadsheet shows for the CSV).
"""

__all__ = [
    "RowDiagnostic",
    "HEADER_ROW_NUMBER",
]

HEADER_ROW_NUMBER = 1


@dataclass(frozen=True)
class RowDiagnostic:
    """Human-readable reason a data row was excluded from the output.

    Attributes:
        row: 1-based original row number (header = 1)
        reason: Short description, e.g. "missing Datum or Nazev -> skipped"
    """
    row: int
    reason: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.reason}"

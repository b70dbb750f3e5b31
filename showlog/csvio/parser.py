from __future__ import annotations

from enum import Enum

"""CSV tokenizer for shows.csv.

One documented dialect only: comma separator, newline row separator,
double-quote quoting with "" as an escaped quote. CR is dropped everywhere
outside quotes so CRLF and bare CR files parse the same as LF files.

The parser is deliberately lenient:
- rows of differing lengths are returned unchanged (column checks are the caller's job)
- an unterminated quoted field simply runs to end of input
- rows whose cells are all blank are dropped wherever they appear
"""

__all__ = [
    "QuoteState",
    "parse_csv",
]

QUOTE = '"'
DELIMITER = ","
NEWLINE = "\n"
CARRIAGE_RETURN = "\r"


class QuoteState(Enum):
    """Tokenizer state: outside or inside a quoted field."""
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


def _is_blank(row: list[str]) -> bool:
    return all(cell.strip() == "" for cell in row)


def parse_csv(text: str) -> list[list[str]]:
    """Parse CSV text into rows of raw (untrimmed) string cells.

    Single left-to-right scan with one character of lookahead.

    Examples:
        >>> parse_csv('a,b\\n"x,""y"\\n')
        [['a', 'b'], ['x,"y']]
        >>> parse_csv(' , \\n\\nc')
        [['c']]
    """
    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    state = QuoteState.UNQUOTED

    def end_cell() -> None:
        row.append("".join(cell))
        cell.clear()

    def end_row() -> None:
        nonlocal row
        end_cell()
        if not _is_blank(row):
            rows.append(row)
        row = []

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if state is QuoteState.QUOTED:
            if ch == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    cell.append(QUOTE)
                    i += 2
                    continue
                state = QuoteState.UNQUOTED
            else:
                # 区切り文字・改行もそのまま保持
                cell.append(ch)
            i += 1
            continue

        if ch == QUOTE:
            state = QuoteState.QUOTED
        elif ch == DELIMITER:
            end_cell()
        elif ch == NEWLINE:
            end_row()
        elif ch == CARRIAGE_RETURN:
            pass
        else:
            cell.append(ch)
        i += 1

    # last cell (also flushes an unterminated quoted field)
    end_row()
    return rows

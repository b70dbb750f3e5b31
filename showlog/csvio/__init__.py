"""CSV text handling: tokenizer and source-file reader."""

from .parser import parse_csv
from .reader import EmptySourceError, SourceNotFoundError, read_csv_file, split_header

__all__ = [
    "parse_csv",
    "read_csv_file",
    "split_header",
    "SourceNotFoundError",
    "EmptySourceError",
]

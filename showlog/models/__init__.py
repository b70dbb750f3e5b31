"""Domain models for the shows.csv -> shows.json builder.

This package contains the record, diagnostic and document types that flow
through parsing, normalization and serialization.
"""

from .build_result import BuildResult
from .diagnostic import RowDiagnostic
from .output_document import SCHEMA_VERSION, OutputDocument
from .show_record import ShowRecord

__all__ = [
    # Record models
    "ShowRecord",
    "RowDiagnostic",
    # Output models
    "OutputDocument",
    "SCHEMA_VERSION",
    "BuildResult",
]

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .diagnostic import RowDiagnostic

"""Build result model: aggregated outcome of one builder run.

Used by the CLI to render the WARN / INFO / SUMMARY lines.
"""


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a successful run (fatal runs raise instead)."""
    output_path: Path  # written file
    show_count: int  # records emitted
    start_time: datetime  # run start (UTC), also the document's generatedAt
    end_time: datetime  # run end (UTC)
    elapsed_seconds: float  # end - start
    diagnostics: list[RowDiagnostic] = field(default_factory=list)  # skipped rows in row order

    @property
    def skipped_rows(self) -> int:
        return len(self.diagnostics)

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import BuildConfig
from ..csvio.parser import parse_csv
from ..csvio.reader import BuildError, read_csv_file, split_header
from ..models.build_result import BuildResult
from ..models.output_document import OutputDocument
from .normalizer import NormalizeResult, normalize_rows

logger = logging.getLogger(__name__)

"""Build orchestration: shows.csv -> shows.json.

One run = one pass:
1. capture generatedAt
2. read + parse the CSV, split header / data rows
3. normalize (header check, then per-row)
4. wrap in OutputDocument, serialize, write once

Any BuildError aborts before the output file is touched.
"""

__all__ = [
    "BuildError",
    "build_document",
    "write_document",
    "run_build",
]


def build_document(
    config: BuildConfig, now: datetime | None = None
) -> tuple[OutputDocument, NormalizeResult]:
    """Read and normalize the configured input into an OutputDocument.

    Parameters:
        config: Resolved build configuration
        now: Generation timestamp (defaults to the current UTC time)

    Raises:
        SourceNotFoundError: Input file missing
        EmptySourceError: Fewer than two rows
        MissingColumnsError: Header lacks a required column
    """
    generated_at = now or datetime.now(UTC)

    text = read_csv_file(config.input_path)
    rows = parse_csv(text)
    logger.debug(f"parsed {len(rows)} rows from {config.input_path.as_posix()}")
    header, data_rows = split_header(rows)

    result = normalize_rows(header, data_rows, config.columns)
    for diag in result.diagnostics:
        logger.warning(str(diag))

    document = OutputDocument(
        generated_at=generated_at,
        source=config.source_label,
        shows=tuple(result.records),
    )
    return document, result


def write_document(path: Path, document: OutputDocument) -> Path:
    """Serialize ``document`` and write it to ``path`` in one go.

    Parent directories are created as needed.
    """
    payload = document.to_json()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    return path


def run_build(config: BuildConfig, now: datetime | None = None) -> BuildResult:
    """Run one full build and return its summary.

    Raises:
        BuildError: For fatal input errors; nothing is written in that case
    """
    start_time = now or datetime.now(UTC)

    document, result = build_document(config, now=start_time)
    output = write_document(config.output_path, document)
    logger.info(f"Wrote {output.as_posix()} ({len(document.shows)} shows)")

    end_time = datetime.now(UTC)
    elapsed = max((end_time - start_time).total_seconds(), 0.0)
    return BuildResult(
        output_path=output,
        show_count=len(document.shows),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        diagnostics=list(result.diagnostics),
    )

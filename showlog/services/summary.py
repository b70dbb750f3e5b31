from __future__ import annotations

from ..models.build_result import BuildResult

"""SUMMARY line rendering for a build run."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very short runs
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: BuildResult) -> str:
    """Render the SUMMARY line for ``result``.

    Format:
    SUMMARY shows={shows} skipped={skipped} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = BuildResult(Path("data/shows.json"), 12, t, t, 1.5)
        >>> render_summary_line(r)
        'SUMMARY shows=12 skipped=0 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY shows={result.show_count} "
        f"skipped={result.skipped_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )

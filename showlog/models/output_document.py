from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .show_record import ShowRecord

"""OutputDocument model: the shows.json envelope.

Constructed once per run, serialized immediately and never mutated.
"""

__all__ = [
    "OutputDocument",
    "SCHEMA_VERSION",
    "format_timestamp",
]

SCHEMA_VERSION = 1


def format_timestamp(moment: datetime) -> str:
    """Render an ISO-8601 UTC timestamp with millisecond precision and 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    utc = moment.astimezone(UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class OutputDocument:
    """Record list wrapped with schema version, generation time and provenance."""
    generated_at: datetime  # captured once at build start
    source: str  # logical input path, e.g. "data/shows.csv"
    shows: tuple[ShowRecord, ...]
    schema_version: int = SCHEMA_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "generatedAt": format_timestamp(self.generated_at),
            "source": self.source,
            "shows": [s.to_dict() for s in self.shows],
        }

    def to_json(self) -> str:
        """Serialize to the shows.json text (2-space indent, trailing newline).

        Non-ASCII characters are written literally; the page reads the file as UTF-8.
        """
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2) + "\n"

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

"""ShowRecord model for the shows.csv -> shows.json builder.

ShowRecord represents one attended performance after normalization.
Field order here is the field order of every object in the output "shows" array.
"""

__all__ = [
    "ShowRecord",
]


@dataclass(frozen=True)
class ShowRecord:
    """One attended performance after row normalization.

    date / title are guaranteed non-empty by the normalizer; every other field
    always carries a value (empty string, empty list, or None for rating).
    """
    date: str  # free-form, not date-validated
    title: str
    theatre: str = ""
    place: str = ""
    city: str = ""
    host: bool = False  # guest performance
    removed: bool = False  # withdrawn from repertoire
    genres: list[str] = field(default_factory=list)  # lowercase, duplicates kept
    rating: int | float | None = None  # 0-100 intended, never clamped
    comment: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping (genres copied, key order preserved)."""
        data = asdict(self)
        data["genres"] = list(self.genres)
        return data

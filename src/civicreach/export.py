"""Delimited-text export of enhanced candidate collections."""

from __future__ import annotations

import csv
import io
from enum import Enum
from typing import Callable, Iterable, Sequence

from .schemas import EnhancedCandidate


def _one_decimal(value: float) -> str:
    return f"{value:.1f}"


def _signed_one_decimal(value: float) -> str:
    rendered = f"{value:.1f}"
    return rendered if rendered.startswith("-") else f"+{rendered}"


class ExportColumn(str, Enum):
    """Exportable fields; the value is the header label."""

    CANDIDATE_ID = "Voter ID"
    NAME = "Name"
    ZIP_CODE = "Zip Code"
    ADDRESS = "Address"
    ORIGINAL_SCORE = "Original Score"
    DISTANCE_TO_CENTER = "Distance To Center"
    PROXIMITY_BOOST = "Proximity Boost"
    ENHANCED_SCORE = "Enhanced Score"
    ENGAGEMENT_LEVEL = "Engagement Level"
    BUCKET_ZONE = "Bucket Zone"
    NEARBY_INSTITUTIONS = "Nearby Institutions"
    IMPROVEMENT = "Improvement"

    def render(self, candidate: EnhancedCandidate) -> str:
        return _RENDERERS[self](candidate)


_RENDERERS: dict[ExportColumn, Callable[[EnhancedCandidate], str]] = {
    ExportColumn.CANDIDATE_ID: lambda c: c.candidate_id,
    ExportColumn.NAME: lambda c: c.name,
    ExportColumn.ZIP_CODE: lambda c: c.zip_code,
    ExportColumn.ADDRESS: lambda c: c.address,
    ExportColumn.ORIGINAL_SCORE: lambda c: _one_decimal(c.original_score),
    ExportColumn.DISTANCE_TO_CENTER: lambda c: _one_decimal(c.distance_to_center),
    ExportColumn.PROXIMITY_BOOST: lambda c: _one_decimal(c.proximity_boost),
    ExportColumn.ENHANCED_SCORE: lambda c: _one_decimal(c.enhanced_score),
    ExportColumn.ENGAGEMENT_LEVEL: lambda c: c.engagement_level.value,
    ExportColumn.BUCKET_ZONE: lambda c: c.bucket_zone.value,
    ExportColumn.NEARBY_INSTITUTIONS: lambda c: str(c.nearby_institutions),
    ExportColumn.IMPROVEMENT: lambda c: _signed_one_decimal(c.score_improvement),
}

CANDIDATE_COLUMNS: tuple[ExportColumn, ...] = (
    ExportColumn.NAME,
    ExportColumn.ZIP_CODE,
    ExportColumn.ADDRESS,
    ExportColumn.ORIGINAL_SCORE,
    ExportColumn.ENHANCED_SCORE,
    ExportColumn.ENGAGEMENT_LEVEL,
    ExportColumn.IMPROVEMENT,
)

PROXIMITY_COLUMNS: tuple[ExportColumn, ...] = (
    ExportColumn.CANDIDATE_ID,
    ExportColumn.NAME,
    ExportColumn.ZIP_CODE,
    ExportColumn.ORIGINAL_SCORE,
    ExportColumn.DISTANCE_TO_CENTER,
    ExportColumn.PROXIMITY_BOOST,
    ExportColumn.ENHANCED_SCORE,
    ExportColumn.BUCKET_ZONE,
    ExportColumn.IMPROVEMENT,
)

COLUMN_SETS: dict[str, tuple[ExportColumn, ...]] = {
    "candidate": CANDIDATE_COLUMNS,
    "proximity": PROXIMITY_COLUMNS,
}


def to_delimited_text(
    candidates: Iterable[EnhancedCandidate],
    columns: Sequence[ExportColumn] = CANDIDATE_COLUMNS,
    *,
    delimiter: str = ",",
) -> str:
    """Render a header row plus one row per candidate.

    Fields containing the delimiter, quotes or newlines are quoted the way
    the ``csv`` module does by default. The text carries no trailing newline.
    """
    if not columns:
        raise ValueError("At least one export column is required")

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n")
    writer.writerow([column.value for column in columns])
    for candidate in candidates:
        writer.writerow([column.render(candidate) for column in columns])
    return buffer.getvalue().rstrip("\n")


def parse_delimited_text(text: str, *, delimiter: str = ",") -> list[dict[str, str]]:
    """Parse exported text back into header-keyed rows."""
    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    return [dict(row) for row in reader]

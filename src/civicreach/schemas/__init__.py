"""Pydantic schema definitions for regions, candidates and scored views."""

from __future__ import annotations

from .candidate import (
    BucketZone,
    Candidate,
    Dataset,
    EngagementLevel,
    EnhancedCandidate,
    ProximityMeasurement,
)
from .region import Institution, InstitutionCategory, Region

__all__ = [
    "BucketZone",
    "Candidate",
    "Dataset",
    "EngagementLevel",
    "EnhancedCandidate",
    "Institution",
    "InstitutionCategory",
    "ProximityMeasurement",
    "Region",
]

"""Compound filtering and single-key ordering of enhanced candidates."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Literal

from pydantic import BaseModel, ConfigDict

from ..schemas import BucketZone, EngagementLevel, EnhancedCandidate

ALL = "all"

DistanceRange = Literal["all", "near", "medium", "far"]
ImprovementRange = Literal["all", "high", "medium", "low"]

# Query distance ranges stay fixed; ProximityConfig cutoffs only move bucket zones.
NEAR_MAX_MILES = 1.5
MEDIUM_MAX_MILES = 3.0
HIGH_IMPROVEMENT_MIN = 2.0
MEDIUM_IMPROVEMENT_MIN = 1.0
# improvements are float differences; 2.0 can arrive as 1.9999999999999998
IMPROVEMENT_PRECISION = 9


class CandidateFilter(BaseModel):
    """Conjunctive predicate set; every field defaults to matching all."""

    search: str = ""
    engagement: EngagementLevel | Literal["all"] = ALL
    zip_code: str = ALL
    selected_zip_code: str | None = None
    distance: DistanceRange = ALL
    improvement: ImprovementRange = ALL
    bucket: BucketZone | Literal["all"] = ALL

    model_config = ConfigDict(extra="forbid", frozen=True)

    def matches(self, candidate: EnhancedCandidate) -> bool:
        return (
            self._matches_search(candidate)
            and self._matches_engagement(candidate)
            and self._matches_zip_code(candidate)
            and _in_distance_range(candidate.distance_to_center, self.distance)
            and _in_improvement_range(candidate.score_improvement, self.improvement)
            and (self.bucket == ALL or candidate.bucket_zone == self.bucket)
        )

    def _matches_search(self, candidate: EnhancedCandidate) -> bool:
        if not self.search:
            return True
        needle = self.search.lower()
        return any(
            needle in haystack.lower()
            for haystack in (candidate.name, candidate.zip_code, candidate.address)
        )

    def _matches_engagement(self, candidate: EnhancedCandidate) -> bool:
        return self.engagement == ALL or candidate.engagement_level == self.engagement

    def _matches_zip_code(self, candidate: EnhancedCandidate) -> bool:
        if self.zip_code == ALL:
            return True
        return candidate.zip_code == self.zip_code or (
            self.selected_zip_code is not None
            and candidate.zip_code == self.selected_zip_code
        )


def _in_distance_range(distance: float, selection: DistanceRange) -> bool:
    if selection == "near":
        return distance <= NEAR_MAX_MILES
    if selection == "medium":
        return NEAR_MAX_MILES < distance <= MEDIUM_MAX_MILES
    if selection == "far":
        return distance > MEDIUM_MAX_MILES
    return True


def _in_improvement_range(improvement: float, selection: ImprovementRange) -> bool:
    improvement = round(improvement, IMPROVEMENT_PRECISION)
    if selection == "high":
        return improvement >= HIGH_IMPROVEMENT_MIN
    if selection == "medium":
        return MEDIUM_IMPROVEMENT_MIN <= improvement < HIGH_IMPROVEMENT_MIN
    if selection == "low":
        return improvement < MEDIUM_IMPROVEMENT_MIN
    return True


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortKey(str, Enum):
    """Sortable columns; each variant owns its key function."""

    NAME = "name"
    ORIGINAL_SCORE = "original_score"
    ENHANCED_SCORE = "enhanced_score"
    ZIP_CODE = "zip_code"
    ENGAGEMENT_LEVEL = "engagement_level"

    def key_func(self) -> Callable[[EnhancedCandidate], Any]:
        return _SORT_KEYS[self]


_SORT_KEYS: dict[SortKey, Callable[[EnhancedCandidate], Any]] = {
    SortKey.NAME: lambda c: c.name.lower(),
    SortKey.ORIGINAL_SCORE: lambda c: c.original_score,
    SortKey.ENHANCED_SCORE: lambda c: c.enhanced_score,
    SortKey.ZIP_CODE: lambda c: c.zip_code.lower(),
    SortKey.ENGAGEMENT_LEVEL: lambda c: c.engagement_level.rank,
}


def query(
    candidates: Iterable[EnhancedCandidate],
    predicates: CandidateFilter | None = None,
    sort_key: SortKey = SortKey.ENHANCED_SCORE,
    sort_direction: SortDirection = SortDirection.DESC,
) -> list[EnhancedCandidate]:
    """Return a filtered, sorted copy of ``candidates``.

    Sorting is stable in both directions: records with equal keys keep their
    input order.
    """
    predicates = predicates or CandidateFilter()
    matched = [candidate for candidate in candidates if predicates.matches(candidate)]
    return sorted(
        matched,
        key=SortKey(sort_key).key_func(),
        reverse=SortDirection(sort_direction) is SortDirection.DESC,
    )

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .region import Region


class BucketZone(str, Enum):
    """Proximity bucket derived from distance to the nearest center."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EngagementLevel(str, Enum):
    """Final engagement classification derived from the enhanced score."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK: dict[EngagementLevel, int] = {
    EngagementLevel.HIGH: 3,
    EngagementLevel.MEDIUM: 2,
    EngagementLevel.LOW: 1,
}


class Candidate(BaseModel):
    """Voter profile with a behavioral engagement score."""

    candidate_id: str = Field(alias="id", min_length=1)
    name: str
    zip_code: str = Field(alias="zipCode")
    original_score: float = Field(alias="originalScore")
    address: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ProximityMeasurement(BaseModel):
    """Precomputed geographic inputs for one candidate."""

    candidate_id: str = Field(alias="voterId")
    distance_to_center: float = Field(alias="distanceToCenter")
    proximity_boost: float = Field(alias="proximityBoost")
    nearby_institutions: int | None = Field(default=None, alias="nearbyInstitutions", ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class EnhancedCandidate(Candidate):
    """Candidate with proximity context and the derived enhanced score.

    Records are never patched; rescoring produces new instances.
    """

    distance_to_center: float = Field(alias="distanceToCenter", ge=0.0)
    proximity_boost: float = Field(alias="proximityBoost")
    bucket_zone: BucketZone = Field(alias="bucketZone")
    nearby_institutions: int = Field(alias="nearbyInstitutions", ge=0)
    density_component: float = Field(default=0.0, alias="densityComponent")
    enhanced_score: float = Field(alias="enhancedScore")
    engagement_level: EngagementLevel = Field(alias="engagementLevel")
    score_improvement: float = Field(alias="scoreImprovement")

    @property
    def improvement_percentage(self) -> float:
        if self.original_score == 0:
            return 0.0
        return self.score_improvement / self.original_score * 100


class Dataset(BaseModel):
    """Everything the data provider supplies for one session."""

    regions: list[Region] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    measurements: list[ProximityMeasurement] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def region_index(self) -> dict[str, Region]:
        return {region.zip_code: region for region in self.regions}

    def measurement_index(self) -> dict[str, ProximityMeasurement]:
        return {item.candidate_id: item for item in self.measurements}

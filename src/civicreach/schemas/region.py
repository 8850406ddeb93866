from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstitutionCategory(str, Enum):
    """Kinds of community institution tracked per region."""

    COMMUNITY_CENTER = "Community Center"
    RELIGIOUS_INSTITUTION = "Religious Institution"
    LIBRARY = "Library"
    SCHOOL = "School"


class Institution(BaseModel):
    """Civic, religious or educational facility owned by a region."""

    name: str
    category: InstitutionCategory = Field(alias="type")
    address: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class Region(BaseModel):
    """Zip-code scoped area with aggregate civic statistics."""

    zip_code: str = Field(alias="zipCode", min_length=1)
    community_engagement_score: float = Field(
        alias="communityEngagementScore", ge=0.0, le=10.0
    )
    community_centers: int = Field(default=0, alias="communityCenters", ge=0)
    religious_institutions: int = Field(default=0, alias="religiousInstitutions", ge=0)
    highly_engaged_voters: int = Field(default=0, alias="highlyEngagedVoters", ge=0)
    avg_civic_engagement: float = Field(
        default=0.0, alias="avgCivicEngagement", ge=0.0, le=10.0
    )
    institutions: tuple[Institution, ...] = ()
    coordinates: tuple[float, float] | None = None

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @property
    def total_institutions(self) -> int:
        return self.community_centers + self.religious_institutions

"""Distance bucketing and engagement-level classification."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..schemas import BucketZone, EngagementLevel
from .errors import ValidationError


@dataclass(slots=True, frozen=True)
class BoostRange:
    """Score-point boost regime a proximity bucket implies."""

    minimum: float
    maximum: float

    def contains(self, boost: float) -> bool:
        return self.minimum <= boost <= self.maximum


def _default_boost_ranges() -> dict[BucketZone, BoostRange]:
    return {
        BucketZone.HIGH: BoostRange(1.0, 5.0),
        BucketZone.MEDIUM: BoostRange(0.5, 2.0),
        BucketZone.LOW: BoostRange(0.0, 1.0),
    }


@dataclass
class ProximityConfig:
    """Distance cutoffs (miles) for the proximity buckets."""

    near_max_miles: float = 1.5
    medium_max_miles: float = 3.0
    boost_ranges: dict[BucketZone, BoostRange] = field(default_factory=_default_boost_ranges)

    def __post_init__(self) -> None:
        if self.near_max_miles > self.medium_max_miles:
            raise ValueError("near_max_miles must not exceed medium_max_miles")
        ranges = _default_boost_ranges()
        for zone, value in self.boost_ranges.items():
            ranges[BucketZone(zone)] = (
                value if isinstance(value, BoostRange) else BoostRange(*value)
            )
        self.boost_ranges = ranges


class ProximityClassifier:
    """Map a distance to its bucket zone and implied boost range.

    Ties go to the closer bucket: exactly 1.5 miles is ``high``, exactly
    3.0 miles is ``medium``.
    """

    def __init__(self, *, config: ProximityConfig | None = None) -> None:
        self._config = config or ProximityConfig()

    def zone_for(self, distance_miles: float) -> BucketZone:
        if math.isnan(distance_miles) or distance_miles < 0:
            raise ValidationError(
                f"Distance must be a non-negative number of miles, got {distance_miles!r}",
                field="distance_to_center",
                value=distance_miles,
            )
        if distance_miles <= self._config.near_max_miles:
            return BucketZone.HIGH
        if distance_miles <= self._config.medium_max_miles:
            return BucketZone.MEDIUM
        return BucketZone.LOW

    def classify_distance(self, distance_miles: float) -> tuple[BucketZone, BoostRange]:
        zone = self.zone_for(distance_miles)
        return zone, self._config.boost_ranges[zone]


@dataclass
class EngagementThresholds:
    """Lower bounds (inclusive) of the High and Medium engagement levels."""

    high: float = 7.0
    medium: float = 5.0

    def __post_init__(self) -> None:
        if self.high < self.medium:
            raise ValueError("high threshold must be >= medium threshold")


class EngagementClassifier:
    """Total mapping from enhanced score to engagement level."""

    def __init__(self, *, thresholds: EngagementThresholds | None = None) -> None:
        self._thresholds = thresholds or EngagementThresholds()

    def classify_engagement(self, enhanced_score: float) -> EngagementLevel:
        if enhanced_score >= self._thresholds.high:
            return EngagementLevel.HIGH
        if enhanced_score >= self._thresholds.medium:
            return EngagementLevel.MEDIUM
        return EngagementLevel.LOW

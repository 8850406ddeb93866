"""Enhancement pass turning provider records into scored candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

import structlog

from ..schemas import (
    Candidate,
    Dataset,
    EnhancedCandidate,
    ProximityMeasurement,
    Region,
)
from .classifiers import EngagementClassifier, ProximityClassifier
from .errors import ValidationError
from .scoring import SCORE_MAX, SCORE_MIN, ScoreCalculator

OrphanPolicy = Literal["fail", "degrade"]


@dataclass
class EngineConfig:
    """Behavior switches for the enhancement pass."""

    orphan_policy: OrphanPolicy = "fail"

    def __post_init__(self) -> None:
        if self.orphan_policy not in ("fail", "degrade"):
            raise ValueError(f"Unknown orphan policy: {self.orphan_policy!r}")


class EnhancementEngine:
    """Score, bucket and classify every candidate of a dataset."""

    def __init__(
        self,
        *,
        calculator: ScoreCalculator,
        proximity: ProximityClassifier,
        engagement: EngagementClassifier,
        config: EngineConfig | None = None,
    ) -> None:
        self._calculator = calculator
        self._proximity = proximity
        self._engagement = engagement
        self._config = config or EngineConfig()
        self._logger = structlog.get_logger(__name__)

    def enhance(self, dataset: Dataset) -> list[EnhancedCandidate]:
        _reject_duplicates("candidate_id", (c.candidate_id for c in dataset.candidates))
        _reject_duplicates("candidate_id", (m.candidate_id for m in dataset.measurements))
        _reject_duplicates("zip_code", (r.zip_code for r in dataset.regions))
        regions = dataset.region_index()
        measurements = dataset.measurement_index()
        results = [
            self._enhance_with_lookup(candidate, regions, measurements)
            for candidate in dataset.candidates
        ]
        self._logger.info(
            "engine.enhanced",
            candidates=len(results),
            regions=len(regions),
            convention=self._calculator.convention,
        )
        return results

    def enhance_all(
        self,
        candidates: Iterable[Candidate],
        regions: Iterable[Region],
        measurements: Iterable[ProximityMeasurement],
    ) -> list[EnhancedCandidate]:
        dataset = Dataset(
            regions=list(regions),
            candidates=list(candidates),
            measurements=list(measurements),
        )
        return self.enhance(dataset)

    def enhance_candidate(
        self,
        candidate: Candidate,
        region: Region | None,
        measurement: ProximityMeasurement,
    ) -> EnhancedCandidate:
        if not SCORE_MIN <= candidate.original_score <= SCORE_MAX:
            raise ValidationError(
                f"Candidate {candidate.candidate_id!r} original score "
                f"{candidate.original_score} is outside [0, 10]",
                field="original_score",
                value=candidate.original_score,
            )
        if measurement.candidate_id != candidate.candidate_id:
            raise ValidationError(
                f"Measurement for {measurement.candidate_id!r} does not belong to "
                f"candidate {candidate.candidate_id!r}",
                field="candidate_id",
                value=measurement.candidate_id,
            )

        zone, boost_range = self._proximity.classify_distance(measurement.distance_to_center)
        if not boost_range.contains(measurement.proximity_boost):
            self._logger.warning(
                "engine.boost_outside_zone_range",
                candidate_id=candidate.candidate_id,
                bucket_zone=zone.value,
                proximity_boost=measurement.proximity_boost,
                expected_min=boost_range.minimum,
                expected_max=boost_range.maximum,
            )

        density = self._calculator.density_component(region)
        enhanced = self._calculator.compute_enhanced_score(
            candidate.original_score,
            measurement.proximity_boost,
            density,
        )
        nearby = measurement.nearby_institutions
        if nearby is None:
            nearby = len(region.institutions) if region is not None else 0

        record = EnhancedCandidate(
            candidate_id=candidate.candidate_id,
            name=candidate.name,
            zip_code=candidate.zip_code,
            original_score=candidate.original_score,
            address=candidate.address,
            distance_to_center=measurement.distance_to_center,
            proximity_boost=measurement.proximity_boost,
            bucket_zone=zone,
            nearby_institutions=nearby,
            density_component=density,
            enhanced_score=enhanced,
            engagement_level=self._engagement.classify_engagement(enhanced),
            score_improvement=enhanced - candidate.original_score,
        )
        self._logger.debug(
            "engine.candidate_enhanced",
            candidate_id=record.candidate_id,
            enhanced_score=record.enhanced_score,
            engagement_level=record.engagement_level.value,
            bucket_zone=record.bucket_zone.value,
        )
        return record

    def _enhance_with_lookup(
        self,
        candidate: Candidate,
        regions: dict[str, Region],
        measurements: dict[str, ProximityMeasurement],
    ) -> EnhancedCandidate:
        measurement = measurements.get(candidate.candidate_id)
        if measurement is None:
            raise ValidationError(
                f"No proximity measurement for candidate {candidate.candidate_id!r}",
                field="candidate_id",
                value=candidate.candidate_id,
            )

        region = regions.get(candidate.zip_code)
        if region is None:
            if self._config.orphan_policy == "fail":
                raise ValidationError(
                    f"Candidate {candidate.candidate_id!r} references unknown region "
                    f"{candidate.zip_code!r}",
                    field="zip_code",
                    value=candidate.zip_code,
                )
            self._logger.warning(
                "engine.orphan_candidate",
                candidate_id=candidate.candidate_id,
                zip_code=candidate.zip_code,
            )
        return self.enhance_candidate(candidate, region, measurement)


def _reject_duplicates(field: str, values: Iterable[str]) -> None:
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise ValidationError(
                f"Duplicate {field} {value!r} in dataset", field=field, value=value
            )
        seen.add(value)

"""Dataset loading and ranking pipeline assembly."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

import pendulum
import structlog
import yaml

from . import __version__
from .core import (
    CandidateFilter,
    EnhancementEngine,
    RegionStats,
    SortDirection,
    SortKey,
    impact_summary,
    query,
    summarize,
    summarize_region,
    summarize_regions,
)
from .core.errors import ValidationError
from .export import CANDIDATE_COLUMNS, ExportColumn, to_delimited_text
from .schemas import Candidate, Dataset, EnhancedCandidate, ProximityMeasurement, Region

_PROXIMITY_KEYS: dict[str, str] = {
    "distanceToCenter": "distance_to_center",
    "distance_to_center": "distance_to_center",
    "proximityBoost": "proximity_boost",
    "proximity_boost": "proximity_boost",
    "nearbyInstitutions": "nearby_institutions",
    "nearby_institutions": "nearby_institutions",
}

# Values the engine recomputes; provider copies are discarded.
_DERIVED_KEYS = frozenset(
    {
        "enhancedScore",
        "enhanced_score",
        "engagementLevel",
        "engagement_level",
        "bucketZone",
        "bucket_zone",
        "scoreImprovement",
        "score_improvement",
        "densityComponent",
        "density_component",
    }
)


class DatasetLoadError(ValueError):
    """Raised when dataset loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: Dataset):
        super().__init__("Dataset loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Dataset loading failed: {self.errors}"


class DatasetLoader:
    """Load regions, candidates and proximity measurements from JSON or YAML."""

    def load(self, path: Path) -> Dataset:
        raw = self._read(path)
        if not isinstance(raw, dict):
            raise ValueError(f"Dataset {path} must be a mapping with a 'regions' list")

        errors: list[str] = []
        regions = self._parse_list(raw.get("regions"), Region, "regions", errors)

        candidates: list[Candidate] = []
        measurements: list[ProximityMeasurement] = []
        for idx, record in enumerate(raw.get("candidates") or [], start=1):
            if not isinstance(record, dict):
                errors.append(f"candidates[{idx}]: expected a mapping")
                continue
            base, inline = self._split_candidate(record)
            try:
                candidate = Candidate.model_validate(base)
                if inline:
                    inline["candidate_id"] = candidate.candidate_id
                    measurements.append(ProximityMeasurement.model_validate(inline))
            except Exception as exc:  # noqa: BLE001
                errors.append(f"candidates[{idx}]: {exc}")
                continue
            candidates.append(candidate)

        measurements.extend(
            self._parse_list(raw.get("proximity"), ProximityMeasurement, "proximity", errors)
        )

        dataset = Dataset(regions=regions, candidates=candidates, measurements=measurements)
        if errors:
            raise DatasetLoadError(errors, dataset)
        return dataset

    @staticmethod
    def _read(path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() in (".yaml", ".yml"):
                try:
                    return yaml.safe_load(handle)
                except yaml.YAMLError as exc:
                    raise ValueError(f"Invalid dataset YAML: {exc}") from exc
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid dataset JSON: {exc}") from exc

    @staticmethod
    def _parse_list(records: Any, model: type, label: str, errors: list[str]) -> list:
        parsed = []
        for idx, record in enumerate(records or [], start=1):
            try:
                parsed.append(model.model_validate(record))
            except Exception as exc:  # noqa: BLE001
                errors.append(f"{label}[{idx}]: {exc}")
        return parsed

    @staticmethod
    def _split_candidate(record: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        base: dict[str, Any] = {}
        inline: dict[str, Any] = {}
        for key, value in record.items():
            if key in _PROXIMITY_KEYS:
                inline[_PROXIMITY_KEYS[key]] = value
            elif key not in _DERIVED_KEYS:
                base[key] = value
        return base, inline


class OutputWriter:
    """Persist ranking reports and exports."""

    def write_json(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    def write_text(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


class RankingPipeline:
    """Load, enhance, filter, summarize and persist a candidate dataset."""

    def __init__(
        self,
        *,
        engine: EnhancementEngine,
        loader: DatasetLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._loader = loader or DatasetLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def load(self, dataset_path: Path) -> tuple[Dataset, list[EnhancedCandidate]]:
        dataset = self._loader.load(dataset_path)
        enhanced = self._engine.enhance(dataset)
        self._logger.info(
            "pipeline.loaded",
            path=str(dataset_path),
            regions=len(dataset.regions),
            candidates=len(dataset.candidates),
        )
        return dataset, enhanced

    def run(
        self,
        *,
        dataset_path: Path,
        output_path: Path,
        predicates: CandidateFilter | None = None,
        sort_key: SortKey = SortKey.ENHANCED_SCORE,
        sort_direction: SortDirection = SortDirection.DESC,
        columns: Sequence[ExportColumn] = CANDIDATE_COLUMNS,
        export_path: Path | None = None,
    ) -> list[dict]:
        predicates = predicates or CandidateFilter()
        dataset, enhanced = self.load(dataset_path)
        ranked = query(enhanced, predicates, sort_key, sort_direction)
        self._logger.info(
            "pipeline.ranked",
            matched=len(ranked),
            total=len(enhanced),
            sort_key=SortKey(sort_key).value,
            sort_direction=SortDirection(sort_direction).value,
        )

        results = [candidate.model_dump(mode="json") for candidate in ranked]
        report = {
            "metadata": {
                "dataset": str(dataset_path),
                "total_candidates": len(enhanced),
                "matched_candidates": len(ranked),
                "filters": predicates.model_dump(mode="json"),
                "sort": {
                    "key": SortKey(sort_key).value,
                    "direction": SortDirection(sort_direction).value,
                },
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "stats": asdict(summarize(ranked)),
            "impact": asdict(impact_summary(ranked)),
            "regions": asdict(summarize_regions(dataset.regions)),
            "results": results,
        }
        self._writer.write_json(output_path, report)

        if export_path is not None:
            self._writer.write_text(export_path, to_delimited_text(ranked, columns))
            self._logger.info("pipeline.export_written", path=str(export_path), rows=len(ranked))

        return results

    def region_report(self, dataset_path: Path, zip_code: str) -> RegionStats:
        dataset, enhanced = self.load(dataset_path)
        region = dataset.region_index().get(zip_code)
        if region is None:
            raise ValidationError(
                f"Unknown region {zip_code!r}", field="zip_code", value=zip_code
            )
        return summarize_region(enhanced, region)

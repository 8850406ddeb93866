"""Summary statistics over enhanced candidate collections."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..schemas import EngagementLevel, EnhancedCandidate, Region

DENSITY_NORMALIZATION = 10.0


@dataclass(slots=True, frozen=True)
class Stats:
    """Engagement counts and score averages for a collection."""

    total: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0
    avg_original: float = 0.0
    avg_enhanced: float = 0.0


@dataclass(slots=True, frozen=True)
class RegionStats:
    """Region-scoped statistics including distribution percentages."""

    zip_code: str
    stats: Stats
    high_percentage: float
    medium_percentage: float
    low_percentage: float
    total_institutions: int
    institution_density: float


@dataclass(slots=True, frozen=True)
class RegionOverview:
    """Totals across every loaded region."""

    region_count: int = 0
    highly_engaged_voters: int = 0
    community_centers: int = 0
    religious_institutions: int = 0
    avg_community_engagement: float = 0.0


@dataclass(slots=True, frozen=True)
class ImpactSummary:
    """How much the proximity enhancement moved a collection."""

    total: int = 0
    avg_improvement: float = 0.0
    improvement_rate: float = 0.0
    high_engagement_share: float = 0.0
    most_improved_zip_code: str | None = None
    most_improved_avg: float = 0.0


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percentage(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def summarize(candidates: Iterable[EnhancedCandidate]) -> Stats:
    items = list(candidates)
    levels = Counter(candidate.engagement_level for candidate in items)
    return Stats(
        total=len(items),
        high_count=levels[EngagementLevel.HIGH],
        medium_count=levels[EngagementLevel.MEDIUM],
        low_count=levels[EngagementLevel.LOW],
        avg_original=_mean([c.original_score for c in items]),
        avg_enhanced=_mean([c.enhanced_score for c in items]),
    )


def summarize_region(candidates: Iterable[EnhancedCandidate], region: Region) -> RegionStats:
    """Summarize the candidates living in ``region``; others are ignored."""
    stats = summarize(c for c in candidates if c.zip_code == region.zip_code)
    return RegionStats(
        zip_code=region.zip_code,
        stats=stats,
        high_percentage=_percentage(stats.high_count, stats.total),
        medium_percentage=_percentage(stats.medium_count, stats.total),
        low_percentage=_percentage(stats.low_count, stats.total),
        total_institutions=region.total_institutions,
        institution_density=region.total_institutions / DENSITY_NORMALIZATION,
    )


def summarize_regions(regions: Iterable[Region]) -> RegionOverview:
    items = list(regions)
    return RegionOverview(
        region_count=len(items),
        highly_engaged_voters=sum(r.highly_engaged_voters for r in items),
        community_centers=sum(r.community_centers for r in items),
        religious_institutions=sum(r.religious_institutions for r in items),
        avg_community_engagement=_mean([r.community_engagement_score for r in items]),
    )


def impact_summary(candidates: Iterable[EnhancedCandidate]) -> ImpactSummary:
    items = list(candidates)
    stats = summarize(items)
    if not items:
        return ImpactSummary()

    by_zip: dict[str, list[float]] = defaultdict(list)
    for candidate in items:
        by_zip[candidate.zip_code].append(candidate.score_improvement)
    # first region wins ties, in input order
    best_zip = max(by_zip, key=lambda zip_code: _mean(by_zip[zip_code]))

    rate = 0.0
    if stats.avg_original:
        rate = (stats.avg_enhanced - stats.avg_original) / stats.avg_original * 100

    return ImpactSummary(
        total=stats.total,
        avg_improvement=_mean([c.score_improvement for c in items]),
        improvement_rate=rate,
        high_engagement_share=_percentage(stats.high_count, stats.total),
        most_improved_zip_code=best_zip,
        most_improved_avg=_mean(by_zip[best_zip]),
    )

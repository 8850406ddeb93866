"""Core scoring, classification, query and aggregation components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregation import (
    ImpactSummary,
    RegionOverview,
    RegionStats,
    Stats,
    impact_summary,
    summarize,
    summarize_region,
    summarize_regions,
)
from .classifiers import (
    BoostRange,
    EngagementClassifier,
    EngagementThresholds,
    ProximityClassifier,
    ProximityConfig,
)
from .engine import EngineConfig, EnhancementEngine
from .errors import ValidationError
from .query import CandidateFilter, SortDirection, SortKey, query
from .scoring import ScoreBreakdown, ScoreCalculator, ScoringConfig

__all__ = [
    "BoostRange",
    "CandidateFilter",
    "EngagementClassifier",
    "EngagementThresholds",
    "EngineConfig",
    "EnhancementEngine",
    "ImpactSummary",
    "ProximityClassifier",
    "ProximityConfig",
    "RegionOverview",
    "RegionStats",
    "ScoreBreakdown",
    "ScoreCalculator",
    "ScoringConfig",
    "SortDirection",
    "SortKey",
    "Stats",
    "ValidationError",
    "impact_summary",
    "query",
    "summarize",
    "summarize_region",
    "summarize_regions",
]

"""Enhanced score computation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from ..schemas import Region

ScoringConvention = Literal["additive", "weighted"]

SCORE_MIN = 0.0
SCORE_MAX = 10.0


@dataclass
class ScoringConfig:
    """Weights and unit conventions for the enhanced score.

    ``additive`` treats the proximity boost as final score points and adds it
    to the behavioral score; this is what the provider's reference records
    reproduce. ``weighted`` applies the 60/25/15 methodology with the boost
    rescaled onto the 0-10 sub-score range by ``proximity_scale``.
    """

    convention: ScoringConvention = "additive"
    behavioral_weight: float = 0.60
    proximity_weight: float = 0.25
    density_weight: float = 0.15
    proximity_scale: float = 2.0
    density_normalization: float = 10.0
    clamp: bool = False

    def __post_init__(self) -> None:
        if self.convention not in ("additive", "weighted"):
            raise ValueError(f"Unknown scoring convention: {self.convention!r}")
        total = self.behavioral_weight + self.proximity_weight + self.density_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Score weights must sum to 1.0, got {total:.4f}")
        if self.density_normalization <= 0:
            raise ValueError("density_normalization must be positive")


@dataclass(slots=True, frozen=True)
class ScoreBreakdown:
    """Per-component contributions to an enhanced score."""

    behavioral: float
    proximity: float
    density: float

    @property
    def total(self) -> float:
        return self.behavioral + self.proximity + self.density


class ScoreCalculator:
    """Combine behavioral, proximity and density components."""

    def __init__(self, *, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    @property
    def convention(self) -> ScoringConvention:
        return self._config.convention

    def density_component(self, region: Region | None) -> float:
        if region is None:
            return 0.0
        raw = region.total_institutions / self._config.density_normalization
        return _clamp(raw)

    def breakdown(
        self,
        original_score: float,
        proximity_boost: float,
        density_component: float,
    ) -> ScoreBreakdown:
        cfg = self._config
        if cfg.convention == "additive":
            return ScoreBreakdown(
                behavioral=original_score,
                proximity=proximity_boost,
                density=0.0,
            )
        return ScoreBreakdown(
            behavioral=original_score * cfg.behavioral_weight,
            proximity=proximity_boost * cfg.proximity_scale * cfg.proximity_weight,
            density=density_component * cfg.density_weight,
        )

    def compute_enhanced_score(
        self,
        original_score: float,
        proximity_boost: float,
        density_component: float,
    ) -> float:
        score = self.breakdown(original_score, proximity_boost, density_component).total
        if self._config.clamp:
            return _clamp(score)
        return score


def _clamp(value: float) -> float:
    return min(max(value, SCORE_MIN), SCORE_MAX)

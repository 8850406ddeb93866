"""Pydantic configuration schema for YAML settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ScoringSection(BaseModel):
    convention: Literal["additive", "weighted"] | None = None
    behavioral_weight: float | None = None
    proximity_weight: float | None = None
    density_weight: float | None = None
    proximity_scale: float | None = None
    density_normalization: float | None = None
    clamp: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ProximitySection(BaseModel):
    near_max_miles: float | None = None
    medium_max_miles: float | None = None
    boost_ranges: dict[Literal["high", "medium", "low"], tuple[float, float]] | None = None

    model_config = ConfigDict(extra="forbid")


class EngagementSection(BaseModel):
    high: float | None = None
    medium: float | None = None

    model_config = ConfigDict(extra="forbid")


class EngineSection(BaseModel):
    orphan_policy: Literal["fail", "degrade"] | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    scoring: ScoringSection = Field(default_factory=ScoringSection)
    proximity: ProximitySection = Field(default_factory=ProximitySection)
    engagement: EngagementSection = Field(default_factory=EngagementSection)
    engine: EngineSection = Field(default_factory=EngineSection)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for name in ("scoring", "proximity", "engagement", "engine"):
            section = getattr(self, name).model_dump(exclude_none=True)
            if section:
                settings[name] = section
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)

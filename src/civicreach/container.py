"""Dependency injection container for the ranking engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    EngagementClassifier,
    EngagementThresholds,
    EngineConfig,
    EnhancementEngine,
    ProximityClassifier,
    ProximityConfig,
    ScoreCalculator,
    ScoringConfig,
)
from .pipeline import DatasetLoader, OutputWriter, RankingPipeline


class RankingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    score_calculator = providers.Singleton(ScoreCalculator)
    proximity_classifier = providers.Singleton(ProximityClassifier)
    engagement_classifier = providers.Singleton(EngagementClassifier)
    engine_config = providers.Singleton(EngineConfig)

    engine = providers.Singleton(
        EnhancementEngine,
        calculator=score_calculator,
        proximity=proximity_classifier,
        engagement=engagement_classifier,
        config=engine_config,
    )

    loader = providers.Singleton(DatasetLoader)
    writer = providers.Singleton(OutputWriter)

    pipeline = providers.Factory(
        RankingPipeline,
        engine=engine,
        loader=loader,
        writer=writer,
    )


def create_container(*, settings: dict | None = None) -> RankingContainer:
    """Instantiate container with optional overrides."""

    container = RankingContainer()

    if not settings:
        return container

    if "scoring" in settings:
        scoring_config = ScoringConfig(**settings["scoring"])
        container.score_calculator.override(
            providers.Singleton(ScoreCalculator, config=scoring_config)
        )

    if "proximity" in settings:
        proximity_config = ProximityConfig(**settings["proximity"])
        container.proximity_classifier.override(
            providers.Singleton(ProximityClassifier, config=proximity_config)
        )

    if "engagement" in settings:
        thresholds = EngagementThresholds(**settings["engagement"])
        container.engagement_classifier.override(
            providers.Singleton(EngagementClassifier, thresholds=thresholds)
        )

    if "engine" in settings:
        container.engine_config.override(
            providers.Singleton(EngineConfig, **settings["engine"])
        )

    return container

from __future__ import annotations

import pytest

from civicreach.core import ScoreCalculator, ScoringConfig
from civicreach.schemas import Region


def build_region(**kwargs) -> Region:
    defaults = {
        "zip_code": "92604",
        "community_engagement_score": 9.1,
        "community_centers": 5,
        "religious_institutions": 7,
    }
    defaults.update(kwargs)
    return Region(**defaults)


def test_additive_convention_reproduces_reference_score():
    calculator = ScoreCalculator()
    density = calculator.density_component(build_region())

    score = calculator.compute_enhanced_score(7.2, 1.9, density)

    assert density == pytest.approx(1.2)
    assert score == pytest.approx(9.1)


def test_weighted_convention_applies_methodology_weights():
    calculator = ScoreCalculator(config=ScoringConfig(convention="weighted"))

    score = calculator.compute_enhanced_score(7.2, 1.9, 1.2)

    expected = 7.2 * 0.60 + 1.9 * 2.0 * 0.25 + 1.2 * 0.15
    assert score == pytest.approx(expected)
    assert score == pytest.approx(5.45)


def test_breakdown_components_sum_to_score():
    calculator = ScoreCalculator(config=ScoringConfig(convention="weighted"))

    breakdown = calculator.breakdown(8.0, 2.0, 1.0)

    assert breakdown.behavioral == pytest.approx(4.8)
    assert breakdown.proximity == pytest.approx(1.0)
    assert breakdown.density == pytest.approx(0.15)
    assert breakdown.total == pytest.approx(calculator.compute_enhanced_score(8.0, 2.0, 1.0))


def test_density_component_is_clamped_and_handles_missing_region():
    calculator = ScoreCalculator()

    dense = build_region(community_centers=80, religious_institutions=70)

    assert calculator.density_component(dense) == pytest.approx(10.0)
    assert calculator.density_component(None) == 0.0


def test_result_is_unclamped_by_default():
    calculator = ScoreCalculator()

    assert calculator.compute_enhanced_score(9.5, 4.7, 0.0) == pytest.approx(14.2)


def test_clamp_option_bounds_result():
    calculator = ScoreCalculator(config=ScoringConfig(clamp=True))

    assert calculator.compute_enhanced_score(9.5, 4.7, 0.0) == pytest.approx(10.0)
    assert calculator.compute_enhanced_score(0.5, -2.0, 0.0) == pytest.approx(0.0)


def test_scoring_config_rejects_weights_not_summing_to_one():
    with pytest.raises(ValueError, match="sum to 1.0"):
        ScoringConfig(behavioral_weight=0.7, proximity_weight=0.25, density_weight=0.15)


def test_scoring_config_rejects_unknown_convention():
    with pytest.raises(ValueError, match="convention"):
        ScoringConfig(convention="multiplicative")  # type: ignore[arg-type]

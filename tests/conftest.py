from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def dataset_payload() -> dict[str, Any]:
    return {
        "regions": [
            {
                "zipCode": "92604",
                "communityEngagementScore": 9.1,
                "communityCenters": 5,
                "religiousInstitutions": 7,
                "highlyEngagedVoters": 425,
                "avgCivicEngagement": 8.4,
                "coordinates": [33.6751, -117.842],
                "institutions": [
                    {"name": "Northwood Community Center", "type": "Community Center",
                     "address": "4531 Bryan Ave, Irvine, CA 92620"},
                    {"name": "Northwood Branch Library", "type": "Library",
                     "address": "4211 Yale Ave, Irvine, CA 92604"},
                ],
            },
            {
                "zipCode": "92603",
                "communityEngagementScore": 7.2,
                "communityCenters": 3,
                "religiousInstitutions": 4,
                "highlyEngagedVoters": 278,
                "avgCivicEngagement": 6.9,
                "institutions": [],
            },
            {
                "zipCode": "92807",
                "communityEngagementScore": 9.8,
                "communityCenters": 6,
                "religiousInstitutions": 8,
                "highlyEngagedVoters": 89,
                "avgCivicEngagement": 9.2,
                "institutions": [],
            },
        ],
        "candidates": [
            {"id": "1", "name": "Sarah Chen", "zipCode": "92604", "originalScore": 7.2,
             "address": "123 Oak Street, Irvine, CA 92604", "distanceToCenter": 0.8,
             "proximityBoost": 1.9, "nearbyInstitutions": 5,
             "enhancedScore": 1.0, "engagementLevel": "Low"},
            {"id": "4", "name": "David Thompson", "zipCode": "92603", "originalScore": 4.1,
             "address": "321 Elm Street, Irvine, CA 92603"},
            {"id": "9", "name": "Maria Gonzalez", "zipCode": "92807", "originalScore": 4.2,
             "address": "159 Valley View Dr, Anaheim, CA 92807", "distanceToCenter": 0.4,
             "proximityBoost": 4.7, "nearbyInstitutions": 6},
            {"id": "12", "name": "Ana Ruiz", "zipCode": "92604", "originalScore": 3.0,
             "address": "77 Yale Loop, Irvine, CA 92604"},
        ],
        "proximity": [
            {"voterId": "4", "distanceToCenter": 2.1, "proximityBoost": 1.3,
             "nearbyInstitutions": 3},
            {"voterId": "12", "distanceToCenter": 4.0, "proximityBoost": 0.5},
        ],
    }


@pytest.fixture
def dataset_path(tmp_path: Path, dataset_payload: dict[str, Any]) -> Path:
    path = tmp_path / "dataset.json"
    path.write_text(json.dumps(dataset_payload, ensure_ascii=False), encoding="utf-8")
    return path

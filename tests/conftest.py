from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
import pytest

from urbanplan_app.models import SurveyAnswer, SurveyResponse
from urbanplan_app.storage import InMemorySurveyRepository


def make_response(
    answers: dict,
    location: str = "Mumbai, Maharashtra",
    response_id: str = "r1",
    timestamp: datetime = datetime(2025, 1, 20, 10, 30, tzinfo=timezone.utc),
) -> SurveyResponse:
    categories = {
        "heat": "heat",
        "green": "green-space",
        "air": "air-quality",
        "infra": "infrastructure",
        "community": "community",
        "location": "community",
    }
    typed = tuple(
        SurveyAnswer(question_id, categories[question_id.split("-")[0]], value)
        for question_id, value in answers.items()
    )
    return SurveyResponse(id=response_id, timestamp=timestamp, answers=typed, location=location)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def repository() -> InMemorySurveyRepository:
    return InMemorySurveyRepository()


@pytest.fixture
def sample_responses() -> list:
    return [
        make_response(
            {"heat-1": 2, "heat-2": "Fans", "green-1": 4, "air-1": 1, "infra-1": 3},
            response_id="a",
        ),
        make_response(
            {"heat-1": 3, "green-1": 5, "air-1": 2, "infra-1": 3},
            location="Delhi, NCT",
            response_id="b",
        ),
        make_response({"heat-1": 1, "green-1": 4, "community-1": "More shade"}, response_id="c"),
    ]


@pytest.fixture
def client():
    from urbanplan_app.api import create_app

    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client

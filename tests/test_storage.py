from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from urbanplan_app.analysis import analyze_responses
from urbanplan_app.models import SurveyAnswer
from urbanplan_app.storage import (
    JsonFileSurveyRepository,
    MalformedSurveyData,
    parse_timestamp,
    record_response,
    response_from_record,
    response_to_record,
)

from conftest import make_response


def test_missing_file_loads_as_empty(tmp_path):
    repository = JsonFileSurveyRepository(tmp_path / "surveys.json")

    assert repository.load_all() == []


def test_round_trip_preserves_every_field(tmp_path):
    repository = JsonFileSurveyRepository(tmp_path / "surveys.json")
    original = make_response({"heat-1": 2, "heat-2": "Fans", "community-1": "Shade please"})

    repository.append(original)
    (loaded,) = repository.load_all()

    assert loaded == original
    assert loaded.timestamp == original.timestamp


def test_append_rewrites_the_whole_collection(tmp_path):
    path = tmp_path / "surveys.json"
    repository = JsonFileSurveyRepository(path)

    repository.append(make_response({"heat-1": 1}, response_id="a"))
    repository.append(make_response({"heat-1": 5}, response_id="b"))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [record["id"] for record in payload] == ["a", "b"]
    assert payload[0]["answers"] == [{"questionId": "heat-1", "category": "heat", "value": 1}]
    assert payload[0]["userType"] == "Resident"


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "surveys.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedSurveyData):
        JsonFileSurveyRepository(path).load_all()


def test_non_list_root_raises(tmp_path):
    path = tmp_path / "surveys.json"
    path.write_text('{"id": "x"}', encoding="utf-8")

    with pytest.raises(MalformedSurveyData):
        JsonFileSurveyRepository(path).load_all()


@pytest.mark.parametrize(
    "record",
    [
        {"timestamp": "2025-01-20T10:30:00Z", "answers": []},
        {"id": "x", "timestamp": "yesterday", "answers": []},
        {"id": "x", "timestamp": "2025-01-20T10:30:00Z"},
        {"id": "x", "timestamp": "2025-01-20T10:30:00Z", "responses": {"noise-1": 3}},
        {"id": "x", "timestamp": None, "answers": []},
        {"id": "x", "timestamp": 1737369000, "answers": []},
        {"id": "x", "timestamp": ["2025-01-20"], "answers": []},
        {"id": "x", "timestamp": "2025-01-20T10:30:00Z", "responses": {"heat-1": 7}},
        {"id": "x", "timestamp": "2025-01-20T10:30:00Z", "answers": [{"questionId": "air-1", "category": "air-quality", "value": 0}]},
        "not a record",
    ],
)
def test_malformed_records_raise(record):
    with pytest.raises(MalformedSurveyData):
        response_from_record(record)


def test_legacy_response_mapping_is_typed_through_catalog():
    record = {
        "id": "legacy",
        "timestamp": "2025-01-20T10:30:00.000Z",
        "responses": {"heat-1": 2, "green-2": "Parks", "location": "Delhi, NCT"},
        "location": "Delhi, NCT",
    }

    response = response_from_record(record)

    assert response.answers == (
        SurveyAnswer("heat-1", "heat", 2),
        SurveyAnswer("green-2", "green-space", "Parks"),
        SurveyAnswer("location", "community", "Delhi, NCT"),
    )
    assert response.timestamp == datetime(2025, 1, 20, 10, 30, tzinfo=timezone.utc)
    assert response.user_type == "Resident"


def test_timestamps_parse_back_to_the_same_instant():
    response = make_response({"heat-1": 3})
    record = response_to_record(response)

    assert isinstance(record["timestamp"], str)
    assert parse_timestamp(record["timestamp"]) == response.timestamp
    assert parse_timestamp("2025-01-20T10:30:00") == response.timestamp


def test_record_response_takes_location_from_answers(repository):
    answers = (SurveyAnswer("heat-1", "heat", 4), SurveyAnswer("location", "community", "Chennai, Tamil Nadu"))
    now = datetime(2025, 2, 1, tzinfo=timezone.utc)

    response = record_response(repository, answers, now=now)

    assert response.location == "Chennai, Tamil Nadu"
    assert response.timestamp == now
    assert len(response.id) == 32
    assert repository.load_all() == [response]


def test_record_response_defaults_to_unknown_location(repository):
    response = record_response(repository, (SurveyAnswer("heat-1", "heat", 4),))

    assert response.location == "Unknown"
    assert response.timestamp.tzinfo is not None


def test_aggregation_reads_from_any_repository(repository):
    for index in range(3):
        repository.append(make_response({"heat-1": 1}, response_id=str(index)))

    heat = analyze_responses(repository.load_all())[0]

    assert (heat.score, heat.trend, heat.priority) == (1.0, "declining", "high")


def test_out_of_range_stored_rating_fails_on_load(tmp_path):
    path = tmp_path / "surveys.json"
    path.write_text(
        json.dumps([{"id": "a", "timestamp": "2025-01-20T10:30:00Z", "responses": {"heat-1": 7}}]),
        encoding="utf-8",
    )

    with pytest.raises(MalformedSurveyData, match="heat-1"):
        JsonFileSurveyRepository(path).load_all()


def test_parse_timestamp_rejects_non_strings():
    with pytest.raises(ValueError):
        parse_timestamp(None)

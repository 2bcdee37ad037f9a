from __future__ import annotations

import pytest

from urbanplan_app.analysis import (
    NO_DATA_INSIGHT,
    NO_DATA_RECOMMENDATION,
    aggregate_category,
    analyze_responses,
    classify_priority,
    classify_trend,
    generate_insights,
    generate_recommendations,
    key_findings,
    overall_score,
    report_recommendations,
    round_score,
)
from urbanplan_app.constants import ANALYSIS_CATEGORIES

from conftest import make_response


@pytest.mark.parametrize(
    "score, trend, priority",
    [
        (1.0, "declining", "high"),
        (2.0, "declining", "high"),
        (2.1, "stable", "medium"),
        (3.0, "stable", "medium"),
        (3.1, "stable", "low"),
        (3.9, "stable", "low"),
        (4.0, "improving", "low"),
        (5.0, "improving", "low"),
    ],
)
def test_threshold_classification(score, trend, priority):
    assert classify_trend(score) == trend
    assert classify_priority(score) == priority


def test_round_score_is_half_up():
    assert round_score(2.25) == 2.3
    assert round_score(2.35) == 2.4
    assert round_score(10 / 3) == 3.3


def test_three_low_heat_ratings_are_declining_high_priority():
    responses = [make_response({"heat-1": 1}, response_id=str(i)) for i in range(3)]

    result = aggregate_category(responses, "heat")

    assert result.score == 1.0
    assert result.trend == "declining"
    assert result.priority == "high"
    assert result.insights[0] == "Limited data available (3 responses)"
    assert "Residents report severe heat discomfort" in result.insights
    assert result.recommendations[0] == "Implement green roof programs"


def test_average_divides_by_numeric_answers_not_responses():
    responses = [
        make_response({"heat-1": 2, "heat-2": "Fans"}, response_id="a"),
        make_response({"heat-1": 5}, response_id="b"),
        make_response({"heat-2": "Other"}, response_id="c"),
    ]

    result = aggregate_category(responses, "heat")

    assert result.score == 3.5
    assert result.survey_count == 3
    assert result.answer_count == 2


def test_category_without_numeric_answers_gets_no_data_result():
    responses = [make_response({"heat-2": "Fans"})]

    result = aggregate_category(responses, "heat")

    assert result.score == 0
    assert result.trend == "stable"
    assert result.priority == "low"
    assert result.insights == (NO_DATA_INSIGHT,)
    assert result.recommendations == (NO_DATA_RECOMMENDATION,)


def test_out_of_range_rating_is_rejected():
    with pytest.raises(ValueError):
        aggregate_category([make_response({"heat-1": 7})], "heat")


def test_unknown_category_and_view_are_rejected(sample_responses):
    with pytest.raises(ValueError):
        aggregate_category(sample_responses, "noise")
    with pytest.raises(ValueError):
        aggregate_category(sample_responses, "heat", view="summary")


def test_analyze_responses_scores_stay_in_range_and_are_idempotent(sample_responses):
    first = analyze_responses(sample_responses)
    second = analyze_responses(sample_responses)

    assert first == second
    assert [item.category for item in first] == list(ANALYSIS_CATEGORIES)
    for item in first:
        assert 0 <= item.score <= 5
        assert item.priority == classify_priority(item.score)


def test_limited_data_thresholds_differ_between_views():
    responses = [make_response({"green-1": 4}, response_id=str(i)) for i in range(4)]

    analysis_view = generate_insights("green-space", 4.0, len(responses), view="analysis")
    report_view = generate_insights("green-space", 4.0, len(responses), view="report")

    assert analysis_view[0] == "Limited data available (4 responses)"
    assert report_view == ["Adequate green space availability"]


def test_recommendation_bands():
    assert generate_recommendations("air-quality", 2.0)[0] == "Implement vehicle emission controls"
    assert generate_recommendations("air-quality", 3.0) == [
        "Strengthen pollution control measures",
        "Improve industrial emission standards",
    ]
    assert generate_recommendations("air-quality", 3.5) == ["Maintain air quality standards"]


def test_key_findings_and_report_recommendations():
    responses = [make_response({"heat-1": 1, "air-1": 2, "green-1": 3, "infra-1": 3})]
    categories = analyze_responses(responses, view="report")

    findings = key_findings(categories)

    assert findings == [
        "2 categories require immediate attention",
        "2 categories showing declining trends",
        "Overall urban planning satisfaction is below average",
    ]
    assert report_recommendations(categories) == [
        "Implement comprehensive heat island mitigation strategy",
        "Enact strict air quality improvement measures",
    ]
    assert overall_score(categories) == 2.3


def test_report_recommendations_default_when_nothing_is_urgent():
    categories = analyze_responses([make_response({"heat-1": 5, "green-1": 5, "air-1": 5, "infra-1": 5})])

    assert key_findings(categories) == ["Urban planning initiatives are well-received"]
    assert report_recommendations(categories) == [
        "Continue current urban planning strategies",
        "Monitor trends and adjust policies as needed",
    ]

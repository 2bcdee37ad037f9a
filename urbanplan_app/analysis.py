"""Category aggregation, trend classification and canned insight text."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Sequence, Tuple

from .constants import (
    ANALYSIS_CATEGORIES,
    ANALYSIS_LIMITED_DATA_THRESHOLD,
    DECLINING_THRESHOLD,
    IMPROVING_THRESHOLD,
    MEDIUM_PRIORITY_THRESHOLD,
    RATING_RANGE,
    REPORT_LIMITED_DATA_THRESHOLD,
)
from .models import CategoryAnalysis, SurveyResponse

# Insight text per view and category: (score <= 2, in between, score >= 4).
_INSIGHTS: Dict[str, Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]]]] = {
    "analysis": {
        "heat": (
            ("Residents report severe heat discomfort", "Urban heat island effect is significant"),
            ("Moderate heat stress reported",),
            ("Heat management is generally effective",),
        ),
        "green-space": (
            ("Insufficient green space coverage", "High demand for more parks and vegetation"),
            ("Moderate green space satisfaction",),
            ("Good green space availability",),
        ),
        "air-quality": (
            ("Poor air quality affecting residents", "Pollution sources need immediate attention"),
            ("Air quality concerns present",),
            ("Air quality is generally acceptable",),
        ),
        "infrastructure": (
            ("Infrastructure needs significant improvement", "Flood risk management inadequate"),
            ("Infrastructure requires moderate improvements",),
            ("Infrastructure is well-maintained",),
        ),
    },
    "report": {
        "heat": (
            ("Severe heat stress reported by residents",),
            ("Moderate heat concerns identified",),
            ("Heat management strategies are effective",),
        ),
        "green-space": (
            ("Insufficient green space coverage",),
            ("Green space needs improvement",),
            ("Adequate green space availability",),
        ),
        "air-quality": (
            ("Poor air quality affecting health",),
            ("Air quality requires attention",),
            ("Air quality standards met",),
        ),
        "infrastructure": (
            ("Infrastructure needs major upgrades",),
            ("Infrastructure improvements needed",),
            ("Infrastructure is well-maintained",),
        ),
    },
}

_LIMITED_DATA_THRESHOLDS = {
    "analysis": ANALYSIS_LIMITED_DATA_THRESHOLD,
    "report": REPORT_LIMITED_DATA_THRESHOLD,
}

# Recommendation text per category: (score <= 2, score <= 3, otherwise).
_RECOMMENDATIONS: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]]] = {
    "heat": (
        (
            "Implement green roof programs",
            "Increase tree canopy coverage by 30%",
            "Install cool pavement materials",
        ),
        ("Expand existing cooling infrastructure", "Create more shaded public spaces"),
        ("Maintain current heat management strategies",),
    ),
    "green-space": (
        (
            "Develop 5 new parks in underserved areas",
            "Implement street tree planting program",
            "Create community garden initiatives",
        ),
        ("Enhance existing green spaces", "Improve park accessibility"),
        ("Continue green space maintenance",),
    ),
    "air-quality": (
        (
            "Implement vehicle emission controls",
            "Increase air quality monitoring stations",
            "Promote public transportation",
        ),
        ("Strengthen pollution control measures", "Improve industrial emission standards"),
        ("Maintain air quality standards",),
    ),
    "infrastructure": (
        (
            "Upgrade drainage systems",
            "Implement flood early warning system",
            "Strengthen flood barriers",
        ),
        ("Improve existing infrastructure", "Enhance emergency response systems"),
        ("Maintain infrastructure standards",),
    ),
}

_REPORT_STRATEGIES = {
    "heat": "Implement comprehensive heat island mitigation strategy",
    "green-space": "Launch major green space expansion program",
    "air-quality": "Enact strict air quality improvement measures",
    "infrastructure": "Prioritize infrastructure modernization projects",
}

NO_DATA_INSIGHT = "No data available for analysis"
NO_DATA_RECOMMENDATION = "Encourage more survey participation"


def round_score(value: float) -> float:
    """Round half-up to one decimal place."""

    return math.floor(value * 10 + 0.5) / 10


def classify_trend(score: float) -> str:
    if score >= IMPROVING_THRESHOLD:
        return "improving"
    if score <= DECLINING_THRESHOLD:
        return "declining"
    return "stable"


def classify_priority(score: float) -> str:
    if score <= DECLINING_THRESHOLD:
        return "high"
    if score <= MEDIUM_PRIORITY_THRESHOLD:
        return "medium"
    return "low"


def _check_view(view: str) -> None:
    if view not in _INSIGHTS:
        raise ValueError(f"Unknown analysis view: {view!r}")


def _check_category(category: str) -> None:
    if category not in ANALYSIS_CATEGORIES:
        raise ValueError(f"Unknown analysis category: {category!r}")


def generate_insights(category: str, score: float, survey_count: int, view: str = "analysis") -> List[str]:
    _check_view(view)
    _check_category(category)
    insights: List[str] = []
    if survey_count < _LIMITED_DATA_THRESHOLDS[view]:
        insights.append(f"Limited data available ({survey_count} responses)")

    low, middle, high = _INSIGHTS[view][category]
    if score <= DECLINING_THRESHOLD:
        insights.extend(low)
    elif score >= IMPROVING_THRESHOLD:
        insights.extend(high)
    else:
        insights.extend(middle)
    return insights


def generate_recommendations(category: str, score: float) -> List[str]:
    _check_category(category)
    low, middle, high = _RECOMMENDATIONS[category]
    if score <= DECLINING_THRESHOLD:
        return list(low)
    if score <= MEDIUM_PRIORITY_THRESHOLD:
        return list(middle)
    return list(high)


def aggregate_category(
    responses: Sequence[SurveyResponse], category: str, view: str = "analysis"
) -> CategoryAnalysis:
    """Reduce responses to one category result.

    The average divides by the number of numeric answers, not responses.
    """

    _check_view(view)
    _check_category(category)
    surveys = [response for response in responses if response.answers_for(category)]
    values = [
        float(answer.value)
        for response in surveys
        for answer in response.answers_for(category)
        if answer.is_numeric
    ]
    low, high = RATING_RANGE
    out_of_range = [value for value in values if not low <= value <= high]
    if out_of_range:
        raise ValueError(
            f"{category} answers must be ratings between {low} and {high}, got {out_of_range[0]}"
        )

    if not values:
        return CategoryAnalysis(
            category=category,
            score=0.0,
            trend="stable",
            insights=(NO_DATA_INSIGHT,),
            recommendations=(NO_DATA_RECOMMENDATION,),
            priority="low",
            survey_count=len(surveys),
            answer_count=0,
        )

    score = round_score(sum(values) / len(values))
    return CategoryAnalysis(
        category=category,
        score=score,
        trend=classify_trend(score),
        insights=tuple(generate_insights(category, score, len(surveys), view)),
        recommendations=tuple(generate_recommendations(category, score)),
        priority=classify_priority(score),
        survey_count=len(surveys),
        answer_count=len(values),
    )


def analyze_responses(responses: Iterable[SurveyResponse], view: str = "analysis") -> List[CategoryAnalysis]:
    collected = list(responses)
    return [aggregate_category(collected, category, view) for category in ANALYSIS_CATEGORIES]


def overall_score(categories: Sequence[CategoryAnalysis]) -> float:
    if not categories:
        return 0.0
    return round_score(sum(item.score for item in categories) / len(categories))


def key_findings(categories: Sequence[CategoryAnalysis]) -> List[str]:
    findings: List[str] = []
    high_priority = [item for item in categories if item.priority == "high"]
    declining = [item for item in categories if item.trend == "declining"]

    if high_priority:
        findings.append(f"{len(high_priority)} categories require immediate attention")
    if declining:
        findings.append(f"{len(declining)} categories showing declining trends")

    if categories:
        average = sum(item.score for item in categories) / len(categories)
        if average < 3:
            findings.append("Overall urban planning satisfaction is below average")
        elif average > 4:
            findings.append("Urban planning initiatives are well-received")
    return findings


def report_recommendations(categories: Sequence[CategoryAnalysis]) -> List[str]:
    recommendations = [
        _REPORT_STRATEGIES[item.category]
        for item in categories
        if item.priority == "high" and item.category in _REPORT_STRATEGIES
    ]
    if not recommendations:
        recommendations = [
            "Continue current urban planning strategies",
            "Monitor trends and adjust policies as needed",
        ]
    return recommendations


__all__ = [
    "NO_DATA_INSIGHT",
    "NO_DATA_RECOMMENDATION",
    "round_score",
    "classify_trend",
    "classify_priority",
    "generate_insights",
    "generate_recommendations",
    "aggregate_category",
    "analyze_responses",
    "overall_score",
    "key_findings",
    "report_recommendations",
]

"""Survey question catalog, answer typing and the quick survey summary."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .constants import ANALYSIS_CATEGORIES, CATEGORY_DISPLAY, CITIES, RATING_RANGE
from .models import SurveyAnswer, SurveyQuestion, SurveyResponse


class InvalidSurveyAnswer(ValueError):
    """Raised when a submitted answer does not fit the question catalog."""


SURVEY_QUESTIONS: Tuple[SurveyQuestion, ...] = (
    SurveyQuestion(
        id="heat-1",
        type="rating",
        question="How would you rate the temperature comfort in your area during peak summer?",
        category="heat",
    ),
    SurveyQuestion(
        id="heat-2",
        type="multiple-choice",
        question="What cooling methods do you primarily use?",
        category="heat",
        options=("Air Conditioning", "Fans", "Natural ventilation", "Cooling centers", "Other"),
    ),
    SurveyQuestion(
        id="green-1",
        type="rating",
        question="How satisfied are you with the amount of green space in your neighborhood?",
        category="green-space",
    ),
    SurveyQuestion(
        id="green-2",
        type="multiple-choice",
        question="What type of green spaces do you use most?",
        category="green-space",
        options=("Parks", "Street trees", "Community gardens", "Rooftop gardens", "None available"),
    ),
    SurveyQuestion(
        id="air-1",
        type="rating",
        question="How would you rate the air quality in your area?",
        category="air-quality",
    ),
    SurveyQuestion(
        id="air-2",
        type="multiple-choice",
        question="What air quality issues do you notice most?",
        category="air-quality",
        options=("Vehicle emissions", "Industrial pollution", "Dust/construction", "Burning waste", "None"),
    ),
    SurveyQuestion(
        id="infra-1",
        type="rating",
        question="How would you rate the flood risk management in your area?",
        category="infrastructure",
    ),
    SurveyQuestion(
        id="infra-2",
        type="multiple-choice",
        question="What infrastructure improvements are most needed?",
        category="infrastructure",
        options=("Better drainage", "Flood barriers", "Water storage", "Emergency systems", "None needed"),
    ),
    SurveyQuestion(
        id="community-1",
        type="text",
        question="What specific urban planning concerns do you have?",
        category="community",
        required=False,
    ),
    SurveyQuestion(
        id="location",
        type="location",
        question="Select your area of residence",
        category="community",
        options=CITIES,
    ),
)

_QUESTIONS_BY_ID: Dict[str, SurveyQuestion] = {question.id: question for question in SURVEY_QUESTIONS}


def question_by_id(question_id: str) -> SurveyQuestion:
    try:
        return _QUESTIONS_BY_ID[question_id]
    except KeyError:
        raise InvalidSurveyAnswer(f"Unknown survey question: {question_id}") from None


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def build_answers(raw: Mapping[str, Any]) -> Tuple[SurveyAnswer, ...]:
    """Type a raw ``{question_id: value}`` form mapping against the catalog.

    Answers are returned in catalog order; blank values are dropped.
    """

    unknown = sorted(set(raw) - set(_QUESTIONS_BY_ID))
    if unknown:
        raise InvalidSurveyAnswer(f"Unknown survey question(s): {', '.join(unknown)}")

    answers: List[SurveyAnswer] = []
    for question in SURVEY_QUESTIONS:
        value = raw.get(question.id)
        if _is_empty(value):
            continue
        if isinstance(value, str):
            value = value.strip()
        answers.append(SurveyAnswer(question.id, question.category, value))
    return tuple(answers)


def validate_answers(answers: Sequence[SurveyAnswer]) -> None:
    """Raise InvalidSurveyAnswer when answers break the catalog rules."""

    answered = {answer.question_id for answer in answers}
    missing = [q.id for q in SURVEY_QUESTIONS if q.required and q.id not in answered]
    if missing:
        raise InvalidSurveyAnswer(f"Missing required answer(s): {', '.join(missing)}")

    low, high = RATING_RANGE
    for answer in answers:
        question = question_by_id(answer.question_id)
        if question.type == "rating":
            if (
                not answer.is_numeric
                or not math.isfinite(answer.value)
                or int(answer.value) != answer.value
            ):
                raise InvalidSurveyAnswer(f"{question.id} expects a whole-number rating")
            if not low <= answer.value <= high:
                raise InvalidSurveyAnswer(f"{question.id} rating must be between {low} and {high}")
        elif question.options and answer.value not in question.options:
            raise InvalidSurveyAnswer(f"{answer.value!r} is not a valid option for {question.id}")


def survey_summary(responses: Iterable[SurveyResponse]) -> pd.DataFrame:
    """Average numeric answers per analysed category.

    ``count`` is the number of numeric answers, not the number of responses.
    """

    scores: Dict[str, List[float]] = {category: [] for category in ANALYSIS_CATEGORIES}
    for response in responses:
        for answer in response.answers:
            if answer.category in scores and answer.is_numeric:
                scores[answer.category].append(float(answer.value))

    rows = []
    for category, values in scores.items():
        rows.append(
            {
                "category": category,
                "label": CATEGORY_DISPLAY[category],
                "average": sum(values) / len(values) if values else 0.0,
                "count": len(values),
            }
        )
    return pd.DataFrame(rows, columns=["category", "label", "average", "count"])


def responses_frame(responses: Iterable[SurveyResponse], location: Optional[str] = None) -> pd.DataFrame:
    rows = []
    for response in responses:
        if location and response.location != location:
            continue
        row: Dict[str, Any] = {
            "id": response.id,
            "timestamp": response.timestamp,
            "location": response.location,
            "user_type": response.user_type,
        }
        row.update(response.responses)
        rows.append(row)
    columns = ["id", "timestamp", "location", "user_type"] + [
        q.id for q in SURVEY_QUESTIONS if q.id != "location"
    ]
    return pd.DataFrame(rows).reindex(columns=columns)


__all__ = [
    "InvalidSurveyAnswer",
    "SURVEY_QUESTIONS",
    "question_by_id",
    "build_answers",
    "validate_answers",
    "survey_summary",
    "responses_frame",
]

"""Survey response persistence.

Responses live in a single JSON blob that is rewritten as a whole on every
submission. Aggregation code only ever sees a :class:`SurveyRepository`, so
the in-memory variant can stand in for the file during tests and previews.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from .constants import RATING_RANGE, SURVEY_STORE_PATH
from .models import SurveyAnswer, SurveyResponse
from .survey import InvalidSurveyAnswer, question_by_id

logger = logging.getLogger(__name__)


class MalformedSurveyData(ValueError):
    """Raised when the persisted survey collection cannot be parsed."""


class SurveyRepository(Protocol):
    def append(self, response: SurveyResponse) -> None:
        ...

    def load_all(self) -> List[SurveyResponse]:
        ...


class InMemorySurveyRepository:
    def __init__(self, responses: Optional[Sequence[SurveyResponse]] = None) -> None:
        self._responses: List[SurveyResponse] = list(responses or [])

    def append(self, response: SurveyResponse) -> None:
        self._responses.append(response)

    def load_all(self) -> List[SurveyResponse]:
        return list(self._responses)


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be an ISO-8601 string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def response_to_record(response: SurveyResponse) -> Dict[str, Any]:
    return {
        "id": response.id,
        "timestamp": response.timestamp.isoformat(),
        "answers": [
            {"questionId": answer.question_id, "category": answer.category, "value": answer.value}
            for answer in response.answers
        ],
        "location": response.location,
        "userType": response.user_type,
    }


def _legacy_answers(mapping: Dict[str, Any]) -> List[SurveyAnswer]:
    answers = []
    for question_id, value in mapping.items():
        try:
            category = question_by_id(question_id).category
        except InvalidSurveyAnswer as exc:
            raise MalformedSurveyData(str(exc)) from exc
        answers.append(SurveyAnswer(question_id, category, value))
    return answers


def _check_ratings(answers: Sequence[SurveyAnswer]) -> None:
    low, high = RATING_RANGE
    for answer in answers:
        if answer.is_numeric and not (math.isfinite(answer.value) and low <= answer.value <= high):
            raise MalformedSurveyData(
                f"Stored answer {answer.question_id} must be a rating between {low} and {high}, got {answer.value!r}"
            )


def response_from_record(record: Any) -> SurveyResponse:
    if not isinstance(record, dict):
        raise MalformedSurveyData(f"Survey record must be an object, got {type(record).__name__}")
    try:
        if "answers" in record:
            answers = [
                SurveyAnswer(item["questionId"], item["category"], item["value"])
                for item in record["answers"]
            ]
        elif isinstance(record.get("responses"), dict):
            answers = _legacy_answers(record["responses"])
        else:
            raise MalformedSurveyData(f"Survey record {record.get('id')!r} has no answers")
        _check_ratings(answers)
        return SurveyResponse(
            id=str(record["id"]),
            timestamp=parse_timestamp(record["timestamp"]),
            answers=tuple(answers),
            location=record.get("location") or "Unknown",
            user_type=record.get("userType") or "Resident",
        )
    except MalformedSurveyData:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedSurveyData(f"Invalid survey record: {exc}") from exc


class JsonFileSurveyRepository:
    """Append-only survey collection stored as one JSON array on disk."""

    def __init__(self, path: Union[str, Path] = SURVEY_STORE_PATH) -> None:
        self.path = Path(path)

    def load_all(self) -> List[SurveyResponse]:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError as exc:
            logger.error("Survey store %s is not valid JSON: %s", self.path, exc)
            raise MalformedSurveyData(f"Survey store {self.path} is not valid JSON") from exc
        if not isinstance(payload, list):
            logger.error("Survey store %s does not hold a JSON array", self.path)
            raise MalformedSurveyData(f"Survey store {self.path} must contain a JSON array")
        return [response_from_record(record) for record in payload]

    def append(self, response: SurveyResponse) -> None:
        responses = self.load_all()
        responses.append(response)
        self._write([response_to_record(item) for item in responses])

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def record_response(
    repository: SurveyRepository,
    answers: Sequence[SurveyAnswer],
    location: Optional[str] = None,
    user_type: str = "Resident",
    now: Optional[datetime] = None,
) -> SurveyResponse:
    """Persist a new response with a generated id and timestamp."""

    if location is None:
        location = next(
            (str(a.value) for a in answers if a.question_id == "location"), "Unknown"
        )
    response = SurveyResponse(
        id=uuid.uuid4().hex,
        timestamp=now or datetime.now(timezone.utc),
        answers=tuple(answers),
        location=location,
        user_type=user_type,
    )
    repository.append(response)
    logger.info("Recorded survey response %s for %s", response.id, response.location)
    return response


__all__ = [
    "MalformedSurveyData",
    "SurveyRepository",
    "InMemorySurveyRepository",
    "JsonFileSurveyRepository",
    "parse_timestamp",
    "response_to_record",
    "response_from_record",
    "record_response",
]

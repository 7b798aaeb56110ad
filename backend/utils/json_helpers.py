"""JSON Serialization Helpers - response DTO shaping and NaN/inf handling"""
import math
from typing import Any, Dict, Optional


def sanitize_for_json(obj: Any) -> Any:
    """
    Recursively sanitize an object to be JSON-compliant.
    Replaces NaN, inf, and -inf with None.
    """
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            return None
        return obj
    elif isinstance(obj, dict):
        return {key: sanitize_for_json(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [sanitize_for_json(item) for item in obj]
    return obj


def response_to_dict(response, question_texts: Optional[Dict[int, str]] = None) -> Dict[str, Any]:
    """
    Convert a SurveyResponse model to the admin-facing dictionary.
    When ``question_texts`` is given each answer is joined to its question text.
    """
    answers = []
    for answer in response.answers:
        item = {"question_id": answer.question_id, "response": answer.answer}
        if question_texts is not None:
            item["question_text"] = question_texts.get(answer.question_id, "")
        answers.append(item)

    return {
        "id": response.id,
        "survey_id": response.survey_id,
        "respondent_email": response.respondent_email,
        "submitted_at": response.submitted_at,
        "responses": answers,
    }


def user_response_to_dict(response, survey) -> Dict[str, Any]:
    """Shape one of the caller's own responses together with its survey's title and description."""
    return {
        "response_id": response.id,
        "survey_id": response.survey_id,
        "survey_title": survey.title if survey else "",
        "survey_description": survey.description if survey else "",
        "submitted_at": response.submitted_at,
        "responses": [
            {"question_id": a.question_id, "response": a.answer} for a in response.answers
        ],
    }

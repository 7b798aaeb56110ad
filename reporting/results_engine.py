"""Results Engine - per-question statistics over submitted responses"""
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional
import logging
import math

import numpy as np

from backend.models import Question, QuestionType, Survey, SurveyResponse

logger = logging.getLogger(__name__)


def safe_float(value) -> Optional[float]:
    """Convert value to float, returning None for unparseable, NaN or inf values."""
    if value is None:
        return None
    try:
        fval = float(str(value).strip())
    except (ValueError, TypeError):
        return None
    if math.isnan(fval) or math.isinf(fval):
        return None
    return fval


class ResultsEngine:
    """Summarise a survey's responses question by question.

    Rating questions with a ``max_rating`` are reduced to an average; every
    other question type is reduced to a histogram of literal answers.
    """

    @staticmethod
    def answers_by_question(responses: Iterable[SurveyResponse]) -> Dict[int, List[str]]:
        grouped: Dict[int, List[str]] = {}
        for response in responses:
            for answer in response.answers:
                grouped.setdefault(answer.question_id, []).append(answer.answer)
        return grouped

    def average_rating(self, question: Question, answers: List[str]) -> Optional[float]:
        ratings = []
        for raw in answers:
            value = safe_float(raw)
            if value is None:
                logger.warning(f"Skipping malformed rating {raw!r} for question {question.id}")
                continue
            ratings.append(value)
        if not ratings:
            return None
        return float(np.mean(ratings))

    @staticmethod
    def response_counts(answers: List[str]) -> Dict[str, int]:
        return dict(Counter(answers))

    def question_result(self, question: Question, answers: List[str]) -> Dict[str, Any]:
        result = {
            "question_id": question.id,
            "question_text": question.text,
            "question_type": question.type,
            "response_counts": {},
            "average_rating": None,
        }
        if question.type == QuestionType.RATING.value and question.max_rating is not None:
            result["average_rating"] = self.average_rating(question, answers)
        else:
            result["response_counts"] = self.response_counts(answers)
        return result

    def summarise(self, survey: Survey, responses: List[SurveyResponse]) -> Dict[str, Any]:
        grouped = self.answers_by_question(responses)
        return {
            "survey_id": survey.id,
            "survey_title": survey.title,
            "total_responses": len(responses),
            "question_results": [
                self.question_result(q, grouped.get(q.id, [])) for q in survey.questions
            ],
        }

"""Survey Service - surveys, their questions and submitted responses"""
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from backend.errors import DomainValidationError
from backend.models import Question, QuestionResponse, Survey, SurveyResponse, utcnow
from backend.schemas.survey import (
    QuestionCreate,
    QuestionUpdate,
    ResponseSubmit,
    SurveyCreate,
    SurveyProperties,
    SurveyUpdate,
)
from database.repositories import PagedList, PaginationParams, UnitOfWork

logger = logging.getLogger(__name__)


def build_question(dto: QuestionCreate, position: int) -> Question:
    return Question(
        text=dto.text,
        type=dto.type.value,
        required=dto.required,
        options=list(dto.options) if dto.options is not None else None,
        max_rating=dto.max_rating,
        position=position,
    )


class SurveyService:
    def __init__(self, db: Session):
        self.uow = UnitOfWork(db)

    # -- surveys -------------------------------------------------------

    def create(self, dto: SurveyCreate, creator_email: str) -> Survey:
        survey = Survey(
            title=dto.title,
            description=dto.description,
            start_date=dto.start_date,
            end_date=dto.end_date,
            created_by=creator_email,
            questions=[build_question(q, i) for i, q in enumerate(dto.questions)],
        )
        self.uow.surveys.add(survey)
        self.uow.complete()
        logger.info(f"Survey {survey.id} created by {creator_email} with {len(survey.questions)} questions")
        return survey

    def get_all(self) -> List[Survey]:
        return self.uow.surveys.get_all_with_questions()

    def get_all_paged(self, params: PaginationParams) -> PagedList[Survey]:
        return self.uow.surveys.get_paged_with_questions(params)

    def get_active_surveys(self, now: Optional[datetime] = None) -> List[Survey]:
        return self.uow.surveys.get_active_with_questions(now or utcnow())

    def get_by_id(self, survey_id: int) -> Optional[Survey]:
        return self.uow.surveys.get_by_id_with_questions(survey_id)

    def update(self, survey_id: int, dto: SurveyUpdate) -> Optional[Survey]:
        """Overwrite the survey and replace its whole question list with ``dto.questions``."""
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            return None

        survey.title = dto.title
        survey.description = dto.description
        survey.start_date = dto.start_date
        survey.end_date = dto.end_date

        survey.questions.clear()
        self.uow.flush()
        survey.questions.extend(build_question(q, i) for i, q in enumerate(dto.questions))

        self.uow.complete()
        logger.info(f"Survey {survey_id} updated, questions replaced ({len(survey.questions)})")
        return survey

    def update_properties(self, survey_id: int, props: SurveyProperties) -> Optional[Survey]:
        survey = self.uow.surveys.get_by_id(survey_id)
        if survey is None:
            return None

        survey.title = props.title
        survey.description = props.description
        survey.start_date = props.start_date
        survey.end_date = props.end_date
        survey.share_link = props.share_link

        self.uow.complete()
        return self.uow.surveys.get_by_id_with_questions(survey_id)

    def delete(self, survey_id: int) -> bool:
        survey = self.uow.surveys.get_by_id(survey_id)
        if survey is None:
            return False
        self.uow.surveys.remove(survey)
        self.uow.complete()
        logger.info(f"Survey {survey_id} deleted")
        return True

    # -- questions -----------------------------------------------------

    @staticmethod
    def _find_question(survey: Survey, question_id: int) -> Optional[Question]:
        return next((q for q in survey.questions if q.id == question_id), None)

    def get_question(self, survey_id: int, question_id: int) -> Optional[Question]:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            return None
        return self._find_question(survey, question_id)

    def add_question(self, survey_id: int, dto: QuestionCreate) -> Optional[Survey]:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            return None

        position = max((q.position for q in survey.questions), default=-1) + 1
        survey.questions.append(build_question(dto, position))
        self.uow.complete()
        return survey

    def update_question(self, survey_id: int, question_id: int, dto: QuestionUpdate) -> Optional[Survey]:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            return None
        question = self._find_question(survey, question_id)
        if question is None:
            return None

        question.text = dto.text
        question.type = dto.type.value
        question.required = dto.required
        question.options = list(dto.options) if dto.options is not None else None
        question.max_rating = dto.max_rating

        self.uow.complete()
        return survey

    def delete_question(self, survey_id: int, question_id: int) -> Optional[Survey]:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            return None
        question = self._find_question(survey, question_id)
        if question is None:
            return None

        survey.questions.remove(question)
        self.uow.complete()
        return survey

    # -- responses -----------------------------------------------------

    def submit_response(self, survey_id: int, respondent_email: str, dto: ResponseSubmit) -> SurveyResponse:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            raise DomainValidationError("Survey not found")

        answered_ids = {a.question_id for a in dto.responses}
        missing = [q for q in survey.questions if q.required and q.id not in answered_ids]
        if missing:
            raise DomainValidationError(
                "Missing required questions: " + ", ".join(q.text for q in missing)
            )

        unknown = sorted(answered_ids - {q.id for q in survey.questions})
        if unknown:
            raise DomainValidationError(
                "Answers reference questions not in this survey: " + ", ".join(str(i) for i in unknown)
            )

        response = SurveyResponse(
            survey_id=survey_id,
            respondent_email=respondent_email,
            submitted_at=utcnow(),
            answers=[QuestionResponse(question_id=a.question_id, answer=a.response) for a in dto.responses],
        )
        self.uow.responses.add(response)
        self.uow.complete()
        logger.info(f"Response {response.id} submitted to survey {survey_id} by {respondent_email}")
        return response

    def _require_survey(self, survey_id: int) -> Survey:
        survey = self.uow.surveys.get_by_id(survey_id)
        if survey is None:
            raise DomainValidationError("Survey not found")
        return survey

    def get_responses(self, survey_id: int) -> List[SurveyResponse]:
        self._require_survey(survey_id)
        return self.uow.responses.get_for_survey(survey_id)

    def get_response(self, survey_id: int, response_id: int) -> Optional[SurveyResponse]:
        self._require_survey(survey_id)
        return self.uow.responses.get_one_for_survey(survey_id, response_id)

    def get_responses_by_respondent(self, email: str) -> List[SurveyResponse]:
        return self.uow.responses.get_by_respondent(email)

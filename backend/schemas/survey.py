"""Survey, question and response DTOs"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional
from datetime import datetime, timezone

from backend.models.survey import QuestionType


class QuestionCreate(BaseModel):
    """A question definition.

    The payload must match the type: choice types carry a non-empty
    ``options`` list, ``rating`` carries ``max_rating``, every other type
    carries neither.
    """

    text: str = Field(..., min_length=3, max_length=500)
    type: QuestionType = QuestionType.TEXT
    required: bool = False
    options: Optional[List[str]] = None
    max_rating: Optional[int] = Field(default=None, ge=1, le=10)

    @model_validator(mode="after")
    def check_type_payload(self):
        if self.type.has_options:
            if not self.options:
                raise ValueError(f"'{self.type.value}' questions need at least one option")
        elif self.options is not None:
            raise ValueError(f"'{self.type.value}' questions do not take options")

        if self.type.has_max_rating:
            if self.max_rating is None:
                raise ValueError("'rating' questions need max_rating")
        elif self.max_rating is not None:
            raise ValueError(f"'{self.type.value}' questions do not take max_rating")
        return self


class QuestionUpdate(QuestionCreate):
    pass


class SurveyCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(default="", max_length=1000)
    start_date: datetime
    end_date: datetime
    questions: List[QuestionCreate] = Field(..., min_length=1)

    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """Offset-aware values are converted to UTC; naive values are taken as UTC already."""
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class SurveyUpdate(SurveyCreate):
    pass


class SurveyProperties(BaseModel):
    """Scalar survey fields, everything except the question list."""

    title: str
    description: str = ""
    start_date: datetime
    end_date: datetime
    share_link: Optional[str] = None

    class Config:
        from_attributes = True


class QuestionOut(BaseModel):
    id: int
    text: str
    type: str
    required: bool
    options: Optional[List[str]] = None
    max_rating: Optional[int] = None

    class Config:
        from_attributes = True


class SurveyOut(BaseModel):
    id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    created_by: str
    share_link: Optional[str] = None
    questions: List[QuestionOut] = []

    class Config:
        from_attributes = True


class PagedSurveys(BaseModel):
    items: List[SurveyOut]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int


class AnswerSubmit(BaseModel):
    question_id: int
    response: str


class ResponseSubmit(BaseModel):
    responses: List[AnswerSubmit] = Field(..., min_length=1)


class AnswerOut(BaseModel):
    question_id: int
    response: str
    question_text: Optional[str] = None


class SurveyResponseOut(BaseModel):
    id: int
    survey_id: int
    respondent_email: str
    submitted_at: datetime
    responses: List[AnswerOut]


class UserResponseOut(BaseModel):
    response_id: int
    survey_id: int
    survey_title: str
    survey_description: str
    submitted_at: datetime
    responses: List[AnswerOut]


class QuestionResultOut(BaseModel):
    question_id: int
    question_text: str
    question_type: str
    response_counts: Dict[str, int] = {}
    average_rating: Optional[float] = None


class SurveyResultsOut(BaseModel):
    survey_id: int
    survey_title: str
    total_responses: int
    question_results: List[QuestionResultOut]

"""Survey Models"""
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from database.base import Base
from datetime import datetime, timezone
import enum


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column in this schema stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class QuestionType(str, enum.Enum):
    TEXT = "text"
    MULTIPLE_CHOICE = "multiple_choice"
    CHECKBOX = "checkbox"
    RATING = "rating"
    DATE = "date"

    @property
    def has_options(self) -> bool:
        return self in (QuestionType.MULTIPLE_CHOICE, QuestionType.CHECKBOX)

    @property
    def has_max_rating(self) -> bool:
        return self is QuestionType.RATING


class Survey(Base):
    __tablename__ = "surveys"
    # freed ids must not be reused: stored answers reference them without a FK
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    created_by = Column(String(255), nullable=False)
    share_link = Column(String(500), nullable=True)
    questions = relationship(
        "Question",
        back_populates="survey",
        cascade="all, delete-orphan",
        order_by=lambda: [Question.position, Question.id],
    )

    def is_active(self, now: datetime) -> bool:
        return self.start_date <= now <= self.end_date


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    text = Column(String(500), nullable=False)
    type = Column(String(20), nullable=False, default=QuestionType.TEXT.value)
    required = Column(Boolean, nullable=False, default=False)
    options = Column(JSON, nullable=True)
    max_rating = Column(Integer, nullable=True)
    survey = relationship("Survey", back_populates="questions")

    @property
    def question_type(self) -> QuestionType:
        return QuestionType(self.type)


class SurveyResponse(Base):
    __tablename__ = "survey_responses"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    # no FK: responses outlive the survey they answered
    survey_id = Column(Integer, nullable=False, index=True)
    respondent_email = Column(String(255), nullable=False, index=True)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)
    answers = relationship(
        "QuestionResponse",
        back_populates="survey_response",
        cascade="all, delete-orphan",
        order_by="QuestionResponse.id",
    )


class QuestionResponse(Base):
    __tablename__ = "question_responses"
    id = Column(Integer, primary_key=True, index=True)
    survey_response_id = Column(
        Integer, ForeignKey("survey_responses.id", ondelete="CASCADE"), index=True, nullable=False
    )
    # no FK: a full survey update may drop questions that were already answered
    question_id = Column(Integer, nullable=False, index=True)
    answer = Column(Text, nullable=False, default="")
    survey_response = relationship("SurveyResponse", back_populates="answers")

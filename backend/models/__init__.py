"""ORM models"""
from .survey import Survey, Question, QuestionType, SurveyResponse, QuestionResponse, utcnow
from .user import User, UserRole, RefreshToken

__all__ = [
    "Survey",
    "Question",
    "QuestionType",
    "SurveyResponse",
    "QuestionResponse",
    "User",
    "UserRole",
    "RefreshToken",
    "utcnow",
]

from .auth_service import AuthService
from .survey_service import SurveyService
from .results_service import ResultsService
from .user_service import UserService

__all__ = ["AuthService", "SurveyService", "ResultsService", "UserService"]

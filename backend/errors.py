"""Domain errors raised by the service layer and mapped to HTTP codes in backend.main"""


class SurveyAppError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SurveyAppError):
    status_code = 404


class DomainValidationError(SurveyAppError):
    """A business rule was violated (missing required answers, unknown survey...)."""

    status_code = 400


class AuthenticationError(SurveyAppError):
    status_code = 401

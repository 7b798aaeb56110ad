"""FastAPI providers for settings and per-request services"""
from fastapi import Depends
from sqlalchemy.orm import Session

from backend.services import AuthService, ResultsService, SurveyService, UserService
from config.settings import Settings
from database.connection import get_db

settings = Settings()


def get_settings() -> Settings:
    return settings


def get_auth_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(db, settings)


def get_survey_service(db: Session = Depends(get_db)) -> SurveyService:
    return SurveyService(db)


def get_results_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> ResultsService:
    return ResultsService(db, settings)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

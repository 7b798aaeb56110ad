from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import backend.models  # noqa: F401  registers the mappers on Base
from backend.dependencies import get_settings
from backend.main import app
from backend.models import utcnow
from backend.schemas.survey import QuestionCreate, SurveyCreate
from config.settings import Settings
from database.base import Base
from database.connection import get_db


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret",
        BASE_URL="http://surveys.test/",
        ACCESS_TOKEN_EXPIRE_MINUTES=5,
        REFRESH_TOKEN_EXPIRE_DAYS=7,
    )


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def TestingSessionLocal(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db(TestingSessionLocal):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(TestingSessionLocal, settings):
    def _get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_survey_dto(title="Customer feedback", questions=None, starts_in_days=-1, ends_in_days=1):
    now = utcnow()
    if questions is None:
        questions = [
            QuestionCreate(text="Your name?", type="text", required=True),
            QuestionCreate(text="Favourite colour?", type="multiple_choice", options=["red", "blue"]),
            QuestionCreate(text="Rate us", type="rating", max_rating=5),
        ]
    return SurveyCreate(
        title=title,
        description="Tell us what you think",
        start_date=now + timedelta(days=starts_in_days),
        end_date=now + timedelta(days=ends_in_days),
        questions=questions,
    )


@pytest.fixture
def survey_dto():
    return make_survey_dto()


@pytest.fixture
def survey_factory():
    return make_survey_dto

from datetime import timedelta

import pytest

from backend.models import utcnow


def _login(client, email, password, role=None):
    body = {"email": email, "password": password}
    if role:
        body["role"] = role
    assert client.post("/api/auth/register", json=body).status_code == 200
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def admin_tokens(client):
    return _login(client, "admin@example.com", "admin-pw", role="Admin")


@pytest.fixture
def user_tokens(client):
    return _login(client, "user@example.com", "user-pw")


@pytest.fixture
def admin_headers(admin_tokens):
    return {"Authorization": f"Bearer {admin_tokens['token']}"}


@pytest.fixture
def user_headers(user_tokens):
    return {"Authorization": f"Bearer {user_tokens['token']}"}


def survey_payload(title="Customer feedback", starts_in_days=-1, ends_in_days=1):
    now = utcnow()
    return {
        "title": title,
        "description": "Tell us what you think",
        "start_date": (now + timedelta(days=starts_in_days)).isoformat(),
        "end_date": (now + timedelta(days=ends_in_days)).isoformat(),
        "questions": [
            {"text": "Your name?", "type": "text", "required": True},
            {"text": "Favourite colour?", "type": "multiple_choice", "options": ["red", "blue"]},
            {"text": "Rate us", "type": "rating", "max_rating": 5},
        ],
    }


@pytest.fixture
def payload_factory():
    return survey_payload


@pytest.fixture
def created_survey(client, admin_headers):
    r = client.post("/api/v1/survey", json=survey_payload(), headers=admin_headers)
    assert r.status_code == 201, r.text
    return r.json()

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from backend.errors import AuthenticationError
from backend.models import RefreshToken, User, utcnow
from backend.services.auth_service import AuthService


@pytest.fixture
def auth(db, settings):
    return AuthService(db, settings)


@pytest.fixture
def alice(auth):
    assert auth.register("alice@example.com", "s3cret!")
    return auth.get_user("alice@example.com")


def test_register_hashes_password(auth, alice):
    assert alice.role == "User"
    assert alice.password_hash != "s3cret!"
    assert alice.password_hash.startswith("$2")


def test_register_same_email_twice_fails(auth, alice, db):
    assert auth.register("alice@example.com", "another-password") is False
    assert db.query(User).count() == 1


@pytest.mark.parametrize("email,password", [("", "pw"), ("   ", "pw"), ("bob@example.com", ""), ("bob@example.com", "  ")])
def test_register_blank_fields_fail_without_storage(settings, email, password):
    session = MagicMock()
    assert AuthService(session, settings).register(email, password) is False
    session.query.assert_not_called()
    session.add.assert_not_called()
    session.commit.assert_not_called()


def test_register_rejects_unknown_role(auth, db):
    assert auth.register("carol@example.com", "pw", role="Superuser") is False
    assert db.query(User).count() == 0


def test_register_uses_injected_roles(db, settings):
    auth = AuthService(db, settings, allowed_roles=["User"])
    assert auth.register("dave@example.com", "pw", role="Admin") is False
    assert isinstance(auth.allowed_roles, frozenset)


def test_login_with_wrong_password_returns_none(auth, alice):
    assert auth.login("alice@example.com", "wrong") is None


def test_login_with_unknown_email_returns_none(auth):
    assert auth.login("nobody@example.com", "s3cret!") is None


def test_login_issues_access_and_refresh_tokens(auth, alice, db):
    access, refresh = auth.login("alice@example.com", "s3cret!")

    claims = auth.decode_access_token(access)
    assert claims["sub"] == str(alice.id)
    assert claims["email"] == "alice@example.com"
    assert claims["role"] == "User"

    stored = db.query(RefreshToken).filter(RefreshToken.token == refresh).one()
    assert stored.is_active is True
    assert stored.revoked_at is None
    assert stored.user_id == alice.id


def test_decode_rejects_token_signed_with_other_key(auth, alice, db, settings):
    other = AuthService(db, settings.model_copy(update={"SECRET_KEY": "someone-else"}))
    access, _ = other.generate_tokens(alice)
    with pytest.raises(AuthenticationError):
        auth.decode_access_token(access)


def test_refresh_rotates_token(auth, alice, db):
    _, refresh = auth.generate_tokens(alice)

    access, new_refresh = auth.refresh_access_token(refresh)

    assert new_refresh != refresh
    assert auth.decode_access_token(access)["sub"] == str(alice.id)
    old = db.query(RefreshToken).filter(RefreshToken.token == refresh).one()
    assert old.is_active is False
    assert old.revoked_at is not None


def test_rotated_token_cannot_be_reused(auth, alice):
    _, refresh = auth.generate_tokens(alice)
    auth.refresh_access_token(refresh)
    with pytest.raises(AuthenticationError):
        auth.refresh_access_token(refresh)


def test_refresh_unknown_token_fails(auth):
    with pytest.raises(AuthenticationError):
        auth.refresh_access_token("not-a-token")


@pytest.mark.parametrize(
    "change",
    [
        {"expires_at": "past"},
        {"revoked_at": "now"},
        {"is_active": False},
    ],
)
def test_refresh_invalid_token_fails_without_issuing(auth, alice, db, change):
    _, refresh = auth.generate_tokens(alice)
    stored = db.query(RefreshToken).filter(RefreshToken.token == refresh).one()
    now = utcnow()
    if "expires_at" in change:
        stored.expires_at = now - timedelta(seconds=1)
    if "revoked_at" in change:
        stored.revoked_at = now
    if "is_active" in change:
        stored.is_active = False
    db.commit()

    with pytest.raises(AuthenticationError):
        auth.refresh_access_token(refresh)
    assert db.query(RefreshToken).count() == 1


def test_token_invalid_exactly_at_expiry():
    now = utcnow()
    token = RefreshToken(token="t", user_id=1, expires_at=now, is_active=True)
    assert token.is_valid(now - timedelta(microseconds=1))
    assert not token.is_valid(now)


def test_consume_succeeds_only_once(auth, alice):
    _, refresh = auth.generate_tokens(alice)
    now = utcnow()
    assert auth.uow.refresh_tokens.consume(refresh, now) is True
    assert auth.uow.refresh_tokens.consume(refresh, now) is False


def test_revoke_is_idempotent(auth, alice, db):
    _, refresh = auth.generate_tokens(alice)

    auth.revoke_refresh_token(refresh)
    stored = db.query(RefreshToken).filter(RefreshToken.token == refresh).one()
    first_revoked_at = stored.revoked_at
    assert stored.is_active is False
    assert first_revoked_at is not None

    auth.revoke_refresh_token(refresh)
    auth.revoke_refresh_token("missing")
    db.refresh(stored)
    assert stored.revoked_at == first_revoked_at

    with pytest.raises(AuthenticationError):
        auth.refresh_access_token(refresh)


def test_ensure_user_is_idempotent(auth, db):
    first = auth.ensure_user("admin@example.com", "pw", role="Admin")
    second = auth.ensure_user("admin@example.com", "other", role="Admin")
    assert first.id == second.id
    assert first.role == "Admin"
    assert db.query(User).count() == 1

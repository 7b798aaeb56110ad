"""Authentication Service - registration, login and refresh-token rotation"""
from datetime import timedelta
from typing import Any, Dict, Iterable, Optional, Tuple
import base64
import logging
import secrets

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from backend.errors import AuthenticationError
from backend.models import RefreshToken, User, UserRole, utcnow
from config.settings import Settings
from database.repositories import UnitOfWork

logger = logging.getLogger(__name__)

TokenPair = Tuple[str, str]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    try:
        # Bcrypt has a 72-byte limit, so truncate if necessary
        password_bytes = plain_password.encode('utf-8')[:72]
        if isinstance(hashed_password, str):
            hash_bytes = hashed_password.encode('utf-8')
        else:
            hash_bytes = hashed_password
        return bcrypt.checkpw(password_bytes, hash_bytes)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
        logger.warning("Password truncated to 72 bytes for bcrypt compatibility")
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode('utf-8')


def generate_refresh_token_value() -> str:
    return base64.b64encode(secrets.token_bytes(32)).decode('ascii')


class AuthService:
    """Registers users and issues access / refresh token pairs.

    ``allowed_roles`` defaults to ``settings.ALLOWED_ROLES`` and is frozen at
    construction.
    """

    def __init__(self, db: Session, settings: Settings, allowed_roles: Optional[Iterable[str]] = None):
        self.uow = UnitOfWork(db)
        self.settings = settings
        self.allowed_roles = frozenset(allowed_roles if allowed_roles is not None else settings.ALLOWED_ROLES)

    # -- users ---------------------------------------------------------

    def register(self, email: str, password: str, role: str = UserRole.USER.value) -> bool:
        if not email or not email.strip() or not password or not password.strip():
            return False

        if self.uow.users.email_exists(email):
            logger.info(f"Registration rejected, email already in use: {email}")
            return False

        if role not in self.allowed_roles:
            logger.info(f"Registration rejected, unknown role: {role}")
            return False

        self.uow.users.add(User(email=email, password_hash=get_password_hash(password), role=role))
        self.uow.complete()
        logger.info(f"Registered user {email} with role {role}")
        return True

    def ensure_user(self, email: str, password: str, role: str = UserRole.USER.value) -> User:
        """Return the user with `email`, registering it first if needed."""
        if not self.uow.users.email_exists(email):
            self.register(email, password, role)
        return self.uow.users.get_by_email(email)

    def get_user(self, email: str) -> Optional[User]:
        return self.uow.users.get_by_email(email)

    def login(self, email: str, password: str) -> Optional[TokenPair]:
        user = self.uow.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return self.generate_tokens(user)

    # -- tokens --------------------------------------------------------

    def create_access_token(self, user: User) -> str:
        now = utcnow()
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "iss": self.settings.JWT_ISSUER,
            "aud": self.settings.JWT_AUDIENCE,
            "iat": now,
            "exp": now + timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        }
        return jwt.encode(claims, self.settings.SECRET_KEY, algorithm=self.settings.ALGORITHM)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.settings.SECRET_KEY,
                algorithms=[self.settings.ALGORITHM],
                audience=self.settings.JWT_AUDIENCE,
                issuer=self.settings.JWT_ISSUER,
            )
        except JWTError as e:
            raise AuthenticationError("Could not validate credentials") from e

    def _issue_refresh_token(self, user_id: int) -> str:
        now = utcnow()
        value = generate_refresh_token_value()
        self.uow.refresh_tokens.add(
            RefreshToken(
                token=value,
                user_id=user_id,
                created_at=now,
                expires_at=now + timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS),
                is_active=True,
            )
        )
        return value

    def generate_tokens(self, user: User) -> TokenPair:
        access_token = self.create_access_token(user)
        refresh_token = self._issue_refresh_token(user.id)
        self.uow.complete()
        return access_token, refresh_token

    def refresh_access_token(self, refresh_token: str) -> TokenPair:
        stored = self.uow.refresh_tokens.get_by_token(refresh_token)
        if stored is None or not self.uow.refresh_tokens.consume(refresh_token, utcnow()):
            self.uow.rollback()
            raise AuthenticationError("Invalid or expired refresh token.")

        user = stored.user
        access_token = self.create_access_token(user)
        new_refresh_token = self._issue_refresh_token(user.id)
        self.uow.complete()
        logger.info(f"Rotated refresh token for user {user.id}")
        return access_token, new_refresh_token

    def revoke_refresh_token(self, refresh_token: str) -> None:
        stored = self.uow.refresh_tokens.get_by_token(refresh_token)
        if stored is None or not stored.is_active:
            return
        stored.is_active = False
        stored.revoked_at = utcnow()
        self.uow.complete()

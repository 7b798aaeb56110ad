"""Authentication Routes"""
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging

from backend.dependencies import get_auth_service
from backend.errors import AuthenticationError
from backend.models.user import User, UserRole
from backend.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserOut,
)
from backend.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    """Decoded claims of the bearer access token"""
    if credentials is None:
        raise _credentials_exception()
    try:
        return auth.decode_access_token(credentials.credentials)
    except AuthenticationError:
        raise _credentials_exception()


async def get_current_user(
    claims: dict = Depends(get_token_claims),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Get current authenticated user from token"""
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        raise _credentials_exception()

    user = auth.uow.users.get_by_id(user_id)
    if user is None:
        raise _credentials_exception()
    return user


def require_privilege(required_role: UserRole):
    """Dependency to require specific privilege level"""
    async def privilege_checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_privilege(required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient privileges. Required: {required_role.value}"
            )
        return current_user
    return privilege_checker


require_admin = require_privilege(UserRole.ADMIN)
require_user = require_privilege(UserRole.USER)


@router.post("/register", response_model=MessageResponse)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Register a new user"""
    logger.info(f"Attempting to register user {request.email}")
    if not request.email.strip() or not request.password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required.")

    role = request.role or UserRole.USER.value
    if not auth.register(request.email, request.password, role):
        if auth.get_user(request.email) is not None:
            logger.warning(f"Registration failed: user {request.email} already exists")
            raise HTTPException(status_code=409, detail="A user with this email already exists.")
        raise HTTPException(status_code=400, detail="Invalid registration data. Please check your input.")

    return {"message": "Registration successful."}


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Login and get an access / refresh token pair"""
    tokens = auth.login(request.email, request.password)
    if tokens is None:
        logger.warning(f"Login failed: invalid credentials for {request.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = auth.get_user(request.email)
    access_token, refresh_token = tokens
    logger.info(f"User {request.email} logged in with role {user.role}")
    return {"token": access_token, "refresh_token": refresh_token, "role": user.role}


@router.post("/refresh", response_model=TokenResponse)
async def refresh(request: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange a refresh token for a new pair; the old refresh token is retired"""
    access_token, refresh_token = auth.refresh_access_token(request.refresh_token)
    return {"token": access_token, "refresh_token": refresh_token}


@router.post("/revoke", response_model=MessageResponse)
async def revoke(request: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    auth.revoke_refresh_token(request.refresh_token)
    return {"message": "Refresh token revoked."}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: RefreshRequest,
    current_user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    auth.revoke_refresh_token(request.refresh_token)
    logger.info(f"User {current_user.email} logged out")
    return {"message": "Logout successful."}


@router.get("/user", response_model=UserOut)
async def get_current_user_info(
    claims: dict = Depends(get_token_claims),
    auth: AuthService = Depends(get_auth_service),
):
    """Get current user information"""
    user = auth.get_user(claims.get("email") or "")
    if user is None:
        raise HTTPException(status_code=404, detail="User not found.")
    return user

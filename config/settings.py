"""Settings"""
from pydantic_settings import BaseSettings
from typing import Optional
import os

# Resolve project root (directory containing config/ and backend/) so .env is found regardless of cwd
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

class Settings(BaseSettings):
    APP_NAME: str = "Survey API"
    DEBUG: bool = os.getenv("DEBUG", "False") == "True"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./survey.db")
    BACKEND_CORS_ORIGINS: list = ["http://localhost:4200"]
    # JWT
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "survey-api"
    JWT_AUDIENCE: str = "survey-app"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    ALLOWED_ROLES: tuple = ("User", "Admin")
    # Optional bootstrap admin, created on startup when both are set
    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None
    # Share links point at the frontend
    BASE_URL: str = "http://localhost:4200"
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 50
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = _ENV_PATH
        env_file_encoding = "utf-8"

"""Database Connection"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import logging
from config.settings import Settings

logger = logging.getLogger(__name__)
settings = Settings()

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_SQLITE_PATH = os.path.join(_PROJECT_ROOT, "survey.db")
_SQLITE_URL = f"sqlite:///{_SQLITE_PATH}"

def make_sqlite_engine_kw(echo: bool = False):
    return {
        "echo": echo,
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }

def make_pooled_engine_kw(echo: bool = False):
    return {"echo": echo, "pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

def build_engine(db_url: str, echo: bool = False):
    """Create an engine with pool settings suited to the backend in `db_url`."""
    if db_url.startswith("sqlite"):
        if db_url.startswith("sqlite:///./"):
            db_url = _SQLITE_URL
        return create_engine(db_url, **make_sqlite_engine_kw(echo))
    return create_engine(db_url, **make_pooled_engine_kw(echo))

engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

async def init_db():
    try:
        from database.base import Base
        import backend.models  # noqa: F401  registers the mappers on Base
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized")

        if settings.DEFAULT_ADMIN_EMAIL and settings.DEFAULT_ADMIN_PASSWORD:
            from backend.services.auth_service import AuthService
            db = SessionLocal()
            try:
                AuthService(db, settings).ensure_user(
                    settings.DEFAULT_ADMIN_EMAIL, settings.DEFAULT_ADMIN_PASSWORD, role="Admin"
                )
            finally:
                db.close()
    except Exception as e:
        logger.error(f"Database init failed: {e}")
        raise

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

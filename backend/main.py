"""Survey API - FastAPI Backend"""
import os
import sys

# Project root (parent of backend/) so "config", "backend", "database" resolve when running python backend/main.py
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

# Load .env from project root
_env_file = os.path.join(_project_root, ".env")
if os.path.isfile(_env_file):
    from dotenv import load_dotenv
    load_dotenv(_env_file)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import traceback
from contextlib import asynccontextmanager

from config.settings import Settings
from backend.errors import SurveyAppError
from backend.routers import admin, auth, questions, reports, responses, surveys, user
from database.connection import init_db

settings = Settings()
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Survey API")
    await init_db()
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Survey API",
    description="Survey management, response collection and reporting",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SurveyAppError)
async def survey_app_error_handler(request: Request, exc: SurveyAppError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    detail = "An internal server error occurred."
    if settings.DEBUG and settings.ENVIRONMENT == "development":
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=500,
        content={
            "type": "about:blank",
            "title": "An unexpected error occurred.",
            "status": 500,
            "detail": detail,
        },
        media_type="application/problem+json",
    )


app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(surveys.router, prefix="/api/v{version}/survey", tags=["surveys"])
app.include_router(questions.router, prefix="/api/surveys/{survey_id}/questions", tags=["questions"])
app.include_router(responses.router, prefix="/api/surveys/{survey_id}/responses", tags=["responses"])
app.include_router(reports.router, prefix="/api/surveys/{survey_id}", tags=["results"])
app.include_router(user.router, prefix="/api/user", tags=["user"])
app.include_router(admin.router, prefix="/api/admin/users", tags=["admin"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "survey-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")

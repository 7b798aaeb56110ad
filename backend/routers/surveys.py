"""Survey Routes (admin CRUD, versioned under /api/v{version}/survey)"""
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional
import logging

from backend.dependencies import get_settings, get_survey_service
from backend.models.user import User
from backend.routers.auth import require_admin
from backend.schemas.survey import PagedSurveys, SurveyCreate, SurveyOut, SurveyUpdate
from backend.services.survey_service import SurveyService
from config.settings import Settings
from database.repositories import PaginationParams

logger = logging.getLogger(__name__)

SUPPORTED_API_VERSIONS = frozenset({1, 2})


def check_api_version(version: int):
    if version not in SUPPORTED_API_VERSIONS:
        raise HTTPException(status_code=404, detail=f"API version {version} is not supported")


router = APIRouter(dependencies=[Depends(check_api_version), Depends(require_admin)])


@router.post("", response_model=SurveyOut, status_code=201)
async def create_survey(
    payload: SurveyCreate,
    current_user: User = Depends(require_admin),
    surveys: SurveyService = Depends(get_survey_service),
):
    return surveys.create(payload, current_user.email)


@router.get("")
async def list_surveys(
    page_number: Optional[int] = Query(default=None, alias="pageNumber", ge=1),
    page_size: Optional[int] = Query(default=None, alias="pageSize", ge=1),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    surveys: SurveyService = Depends(get_survey_service),
    settings: Settings = Depends(get_settings),
):
    """All surveys, or one page of them when ``pageNumber`` is given."""
    if page_number is None:
        return [SurveyOut.model_validate(s) for s in surveys.get_all()]

    params = PaginationParams(
        page_number=page_number,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
        sort_by=sort_by,
        sort_order=sort_order,
    ).clamped(settings.MAX_PAGE_SIZE)
    page = surveys.get_all_paged(params)
    return PagedSurveys(
        items=[SurveyOut.model_validate(s) for s in page.items],
        total_count=page.total_count,
        current_page=page.current_page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )


@router.get("/{survey_id}", response_model=SurveyOut)
async def get_survey(survey_id: int, surveys: SurveyService = Depends(get_survey_service)):
    survey = surveys.get_by_id(survey_id)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey not found")
    return survey


@router.put("/{survey_id}", response_model=SurveyOut)
async def update_survey(
    survey_id: int,
    payload: SurveyUpdate,
    surveys: SurveyService = Depends(get_survey_service),
):
    survey = surveys.update(survey_id, payload)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey not found")
    return survey


@router.delete("/{survey_id}")
async def delete_survey(survey_id: int, surveys: SurveyService = Depends(get_survey_service)):
    if not surveys.delete(survey_id):
        raise HTTPException(status_code=404, detail="Survey not found")
    return {"status": "deleted"}

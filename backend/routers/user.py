"""User Routes - active surveys and the caller's own responses"""
from fastapi import APIRouter, HTTPException, Depends
from typing import List
import logging

from backend.dependencies import get_survey_service
from backend.models import utcnow
from backend.models.user import User
from backend.routers.auth import require_user
from backend.schemas.survey import SurveyOut, UserResponseOut
from backend.services.survey_service import SurveyService
from backend.utils.json_helpers import user_response_to_dict

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/surveys", response_model=List[SurveyOut])
async def available_surveys(
    current_user: User = Depends(require_user),
    surveys: SurveyService = Depends(get_survey_service),
):
    active = surveys.get_active_surveys(utcnow())
    logger.info(f"Retrieved {len(active)} active surveys for {current_user.email}")
    return active


@router.get("/surveys/{survey_id}", response_model=SurveyOut)
async def available_survey(
    survey_id: int,
    current_user: User = Depends(require_user),
    surveys: SurveyService = Depends(get_survey_service),
):
    survey = surveys.get_by_id(survey_id)
    if survey is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    if not survey.is_active(utcnow()):
        logger.warning(f"Survey {survey_id} requested by {current_user.email} is not active")
        raise HTTPException(status_code=404, detail="Survey is not currently active")
    return survey


@router.get("/responses", response_model=List[UserResponseOut])
async def my_responses(
    current_user: User = Depends(require_user),
    surveys: SurveyService = Depends(get_survey_service),
):
    out = []
    for response in surveys.get_responses_by_respondent(current_user.email):
        out.append(user_response_to_dict(response, surveys.get_by_id(response.survey_id)))
    logger.info(f"Retrieved {len(out)} responses for {current_user.email}")
    return out

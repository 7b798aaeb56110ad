"""Response Routes - submission by any signed-in user, review by admins"""
from fastapi import APIRouter, HTTPException, Depends
from typing import List
import logging

from backend.dependencies import get_survey_service
from backend.models.user import User
from backend.routers.auth import get_current_user, require_admin
from backend.schemas.survey import ResponseSubmit, SurveyResponseOut
from backend.services.survey_service import SurveyService
from backend.utils.json_helpers import response_to_dict

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=SurveyResponseOut, status_code=201)
async def submit_response(
    survey_id: int,
    payload: ResponseSubmit,
    current_user: User = Depends(get_current_user),
    surveys: SurveyService = Depends(get_survey_service),
):
    response = surveys.submit_response(survey_id, current_user.email, payload)
    return response_to_dict(response)


@router.get("", response_model=List[SurveyResponseOut], dependencies=[Depends(require_admin)])
async def list_responses(survey_id: int, surveys: SurveyService = Depends(get_survey_service)):
    responses = surveys.get_responses(survey_id)
    survey = surveys.get_by_id(survey_id)
    texts = {q.id: q.text for q in survey.questions}
    return [response_to_dict(r, texts) for r in responses]


@router.get("/{response_id}", response_model=SurveyResponseOut, dependencies=[Depends(require_admin)])
async def get_response(survey_id: int, response_id: int, surveys: SurveyService = Depends(get_survey_service)):
    response = surveys.get_response(survey_id, response_id)
    if response is None:
        raise HTTPException(status_code=404, detail="Response not found")
    survey = surveys.get_by_id(survey_id)
    return response_to_dict(response, {q.id: q.text for q in survey.questions})

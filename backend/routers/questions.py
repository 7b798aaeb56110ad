"""Question Routes (nested under a survey)"""
from fastapi import APIRouter, HTTPException, Depends
from typing import List

from backend.dependencies import get_survey_service
from backend.routers.auth import require_admin
from backend.schemas.survey import QuestionCreate, QuestionOut, QuestionUpdate, SurveyOut
from backend.services.survey_service import SurveyService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[QuestionOut])
async def list_questions(survey_id: int, surveys: SurveyService = Depends(get_survey_service)):
    survey = surveys.get_by_id(survey_id)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey not found")
    return survey.questions


@router.post("", response_model=SurveyOut, status_code=201)
async def add_question(
    survey_id: int,
    payload: QuestionCreate,
    surveys: SurveyService = Depends(get_survey_service),
):
    survey = surveys.add_question(survey_id, payload)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey not found")
    return survey


@router.get("/{question_id}", response_model=QuestionOut)
async def get_question(survey_id: int, question_id: int, surveys: SurveyService = Depends(get_survey_service)):
    question = surveys.get_question(survey_id, question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Survey or question not found")
    return question


@router.put("/{question_id}", response_model=SurveyOut)
async def update_question(
    survey_id: int,
    question_id: int,
    payload: QuestionUpdate,
    surveys: SurveyService = Depends(get_survey_service),
):
    survey = surveys.update_question(survey_id, question_id, payload)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey or question not found")
    return survey


@router.delete("/{question_id}", response_model=SurveyOut)
async def delete_question(survey_id: int, question_id: int, surveys: SurveyService = Depends(get_survey_service)):
    survey = surveys.delete_question(survey_id, question_id)
    if not survey:
        raise HTTPException(status_code=404, detail="Survey or question not found")
    return survey

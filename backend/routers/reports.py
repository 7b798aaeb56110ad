"""Report Routes - aggregated results, exports and share links"""
from fastapi import APIRouter, Depends, Response

from backend.dependencies import get_results_service
from backend.routers.auth import require_admin
from backend.schemas.survey import SurveyResultsOut
from backend.services.results_service import ResultsService
from backend.utils.json_helpers import sanitize_for_json

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/results", response_model=SurveyResultsOut)
async def get_results(survey_id: int, results: ResultsService = Depends(get_results_service)):
    return sanitize_for_json(results.get_survey_results(survey_id))


@router.get("/export/csv")
async def export_csv(survey_id: int, results: ResultsService = Depends(get_results_service)):
    return Response(
        content=results.export_to_csv(survey_id),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="survey_{survey_id}_responses.csv"'},
    )


@router.get("/export/pdf")
async def export_pdf(survey_id: int, results: ResultsService = Depends(get_results_service)):
    return Response(
        content=results.export_to_pdf(survey_id),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="survey_{survey_id}_responses.pdf"'},
    )


@router.get("/share-link")
async def share_link(survey_id: int, results: ResultsService = Depends(get_results_service)):
    return {"shareLink": results.generate_share_link(survey_id)}

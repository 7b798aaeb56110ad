"""Results Service - aggregated results, exports and share links"""
from typing import Any, Dict, List, Tuple
import logging

from sqlalchemy.orm import Session

from backend.errors import NotFoundError
from backend.models import Survey, SurveyResponse
from backend.schemas.survey import SurveyProperties
from backend.services.survey_service import SurveyService
from config.settings import Settings
from database.repositories import UnitOfWork
from reporting import CsvExporter, PdfExporter, ResultsEngine

logger = logging.getLogger(__name__)


class ResultsService:
    def __init__(self, db: Session, settings: Settings):
        self.uow = UnitOfWork(db)
        self.surveys = SurveyService(db)
        self.settings = settings
        self.engine = ResultsEngine()
        self.csv_exporter = CsvExporter()
        self.pdf_exporter = PdfExporter()

    def _load(self, survey_id: int) -> Tuple[Survey, List[SurveyResponse]]:
        survey = self.uow.surveys.get_by_id_with_questions(survey_id)
        if survey is None:
            raise NotFoundError("Survey not found")
        return survey, self.uow.responses.get_for_survey(survey_id)

    def get_survey_results(self, survey_id: int) -> Dict[str, Any]:
        survey, responses = self._load(survey_id)
        return self.engine.summarise(survey, responses)

    def export_to_csv(self, survey_id: int) -> bytes:
        survey, responses = self._load(survey_id)
        return self.csv_exporter.export(survey, responses)

    def export_to_pdf(self, survey_id: int) -> bytes:
        survey, responses = self._load(survey_id)
        return self.pdf_exporter.export(survey, responses)

    def build_share_link(self, survey_id: int) -> str:
        return f"{self.settings.BASE_URL.rstrip('/')}/survey/{survey_id}"

    def generate_share_link(self, survey_id: int) -> str:
        survey = self.uow.surveys.get_by_id(survey_id)
        if survey is None:
            raise NotFoundError("Survey not found")

        props = SurveyProperties.model_validate(survey)
        props.share_link = self.build_share_link(survey_id)
        self.surveys.update_properties(survey_id, props)
        logger.info(f"Share link for survey {survey_id}: {props.share_link}")
        return props.share_link

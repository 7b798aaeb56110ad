"""Exporters - render survey responses as CSV or PDF bytes"""
from html import escape
from typing import List
import io
import logging

import fitz  # PyMuPDF
import pandas as pd

from backend.models import Survey, SurveyResponse

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CsvExporter:
    """One header row plus one row per response, columns in survey question order."""

    @staticmethod
    def columns(survey: Survey) -> List[str]:
        return ["Respondent Email", "Submission Date"] + [
            f"Q{q.id}: {q.text}" for q in survey.questions
        ]

    def export(self, survey: Survey, responses: List[SurveyResponse]) -> bytes:
        rows = []
        for response in responses:
            by_question = {a.question_id: a.answer for a in response.answers}
            row = [response.respondent_email, response.submitted_at.strftime(DATE_FORMAT)]
            row.extend(by_question.get(q.id, "") for q in survey.questions)
            rows.append(row)

        df = pd.DataFrame(rows, columns=self.columns(survey), dtype=object)
        return df.to_csv(index=False, lineterminator="\n").encode("utf-8")


class PdfReportWriter:
    """Collects HTML blocks and lays them out on A4 pages with a PyMuPDF Story.

    The Story engine wraps text, breaks pages and substitutes fallback fonts
    for scripts the base font lacks.
    """

    MARGIN = 50
    CSS = """
        body { font-family: sans-serif; font-size: 12px; }
        h1 { font-size: 20px; text-align: center; margin-bottom: 8px; }
        h2 { font-size: 14px; font-weight: normal; margin-top: 12px; margin-bottom: 2px; }
        p { margin: 2px 0; }
    """

    def __init__(self):
        self.blocks: List[str] = []

    @staticmethod
    def _text(text: str) -> str:
        return escape(text).replace("\n", "<br>")

    def heading(self, text: str, level: int = 1):
        self.blocks.append(f"<h{level}>{self._text(text)}</h{level}>")

    def paragraph(self, text: str, bold: bool = False):
        body = self._text(text)
        self.blocks.append(f"<p><b>{body}</b></p>" if bold else f"<p>{body}</p>")

    def tobytes(self) -> bytes:
        story = fitz.Story(html="".join(self.blocks), user_css=self.CSS)
        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)
        mediabox = fitz.paper_rect("a4")
        where = mediabox + (self.MARGIN, self.MARGIN, -self.MARGIN, -self.MARGIN)
        more = True
        while more:
            device = writer.begin_page(mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()
        writer.close()
        return buffer.getvalue()


class PdfExporter:
    def export(self, survey: Survey, responses: List[SurveyResponse]) -> bytes:
        questions = {q.id: q for q in survey.questions}
        writer = PdfReportWriter()
        writer.heading(f"Survey Results: {survey.title}")

        for response in responses:
            writer.heading(f"Response from: {response.respondent_email}", level=2)
            writer.paragraph(f"Submitted on: {response.submitted_at.strftime(DATE_FORMAT)}")
            for answer in response.answers:
                question = questions.get(answer.question_id)
                if question is None:
                    continue
                writer.paragraph(f"Q: {question.text}", bold=True)
                writer.paragraph(f"A: {answer.answer}")

        data = writer.tobytes()
        logger.info(f"Rendered PDF for survey {survey.id}: {len(responses)} responses, {len(data)} bytes")
        return data

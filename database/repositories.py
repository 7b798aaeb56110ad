"""Repositories and unit of work over a SQLAlchemy session"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar
import math

from sqlalchemy.orm import Session, selectinload

from backend.models import Survey, SurveyResponse, User, RefreshToken

T = TypeVar("T")

SORTABLE_SURVEY_FIELDS = {
    "id": Survey.id,
    "title": Survey.title,
    "start_date": Survey.start_date,
    "end_date": Survey.end_date,
    "created_by": Survey.created_by,
}


@dataclass
class PaginationParams:
    page_number: int = 1
    page_size: int = 10
    sort_by: Optional[str] = None
    sort_order: str = "asc"

    def clamped(self, max_page_size: int) -> "PaginationParams":
        return PaginationParams(
            page_number=max(1, self.page_number),
            page_size=min(max(1, self.page_size), max_page_size),
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )


@dataclass
class PagedList(Generic[T]):
    items: List[T] = field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0


class Repository(Generic[T]):
    model: Type[T]

    def __init__(self, db: Session):
        self.db = db

    def add(self, entity: T) -> T:
        self.db.add(entity)
        return entity

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self.db.get(self.model, entity_id)

    def get_all(self) -> List[T]:
        return self.db.query(self.model).all()

    def remove(self, entity: T) -> None:
        self.db.delete(entity)


class SurveyRepository(Repository[Survey]):
    model = Survey

    def _with_questions(self):
        return self.db.query(Survey).options(selectinload(Survey.questions))

    def get_all_with_questions(self) -> List[Survey]:
        return self._with_questions().order_by(Survey.id).all()

    def get_by_id_with_questions(self, survey_id: int) -> Optional[Survey]:
        return self._with_questions().filter(Survey.id == survey_id).first()

    def get_active_with_questions(self, now: datetime) -> List[Survey]:
        return (
            self._with_questions()
            .filter(Survey.start_date <= now, Survey.end_date >= now)
            .order_by(Survey.id)
            .all()
        )

    def get_paged_with_questions(self, params: PaginationParams) -> PagedList[Survey]:
        column = SORTABLE_SURVEY_FIELDS.get((params.sort_by or "id").lower(), Survey.id)
        ordering = column.desc() if params.sort_order.lower() == "desc" else column.asc()

        query = self._with_questions()
        total = query.count()
        items = (
            query.order_by(ordering, Survey.id)
            .offset((params.page_number - 1) * params.page_size)
            .limit(params.page_size)
            .all()
        )
        return PagedList(
            items=items,
            total_count=total,
            current_page=params.page_number,
            page_size=params.page_size,
        )


class SurveyResponseRepository(Repository[SurveyResponse]):
    model = SurveyResponse

    def _with_answers(self):
        return self.db.query(SurveyResponse).options(selectinload(SurveyResponse.answers))

    def get_for_survey(self, survey_id: int) -> List[SurveyResponse]:
        return (
            self._with_answers()
            .filter(SurveyResponse.survey_id == survey_id)
            .order_by(SurveyResponse.id)
            .all()
        )

    def get_one_for_survey(self, survey_id: int, response_id: int) -> Optional[SurveyResponse]:
        return (
            self._with_answers()
            .filter(SurveyResponse.survey_id == survey_id, SurveyResponse.id == response_id)
            .first()
        )

    def get_by_respondent(self, email: str) -> List[SurveyResponse]:
        return (
            self._with_answers()
            .filter(SurveyResponse.respondent_email == email)
            .order_by(SurveyResponse.id)
            .all()
        )

    def count_for_survey(self, survey_id: int) -> int:
        return self.db.query(SurveyResponse).filter(SurveyResponse.survey_id == survey_id).count()


class UserRepository(Repository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def email_exists(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None


class RefreshTokenRepository(Repository[RefreshToken]):
    model = RefreshToken

    def get_by_token(self, token: str) -> Optional[RefreshToken]:
        return self.db.query(RefreshToken).filter(RefreshToken.token == token).first()

    def consume(self, token: str, now: datetime) -> bool:
        """Atomically retire `token` if it is still valid.

        Returns True only for the caller whose UPDATE flipped the row, so two
        concurrent rotations of the same token cannot both succeed.
        """
        updated = (
            self.db.query(RefreshToken)
            .filter(
                RefreshToken.token == token,
                RefreshToken.is_active.is_(True),
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > now,
            )
            .update({"is_active": False, "revoked_at": now}, synchronize_session="fetch")
        )
        return updated == 1


class UnitOfWork:
    """Groups the repositories that share one session and commits them together."""

    def __init__(self, db: Session):
        self.db = db
        self.surveys = SurveyRepository(db)
        self.responses = SurveyResponseRepository(db)
        self.users = UserRepository(db)
        self.refresh_tokens = RefreshTokenRepository(db)

    def complete(self) -> None:
        self.db.commit()

    def flush(self) -> None:
        self.db.flush()

    def rollback(self) -> None:
        self.db.rollback()

"""User Service - user administration"""
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from backend.models import User, UserRole
from database.repositories import UnitOfWork

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.uow = UnitOfWork(db)

    def get_all_users(self) -> List[User]:
        return self.uow.users.get_all()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.uow.users.get_by_email(email)

    def promote_to_admin(self, user_id: int) -> bool:
        user = self.uow.users.get_by_id(user_id)
        if user is None:
            return False
        user.role = UserRole.ADMIN.value
        self.uow.complete()
        logger.info(f"User {user_id} promoted to admin")
        return True

    def delete_user(self, user_id: int) -> bool:
        user = self.uow.users.get_by_id(user_id)
        if user is None:
            return False
        self.uow.users.remove(user)
        self.uow.complete()
        logger.info(f"User {user_id} deleted")
        return True

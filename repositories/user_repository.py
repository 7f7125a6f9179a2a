"""
User Repository - Data access layer for user accounts
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    id_field = "user_id"

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email (emails are stored lowercased)"""
        return (
            self.db.query(AppUser)
            .filter(AppUser.email == email.strip().lower())
            .first()
        )

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def create_user(self, user: AppUser) -> AppUser:
        """Insert a new account"""
        try:
            return self.create(user)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                "User already exists", code="EMAIL_TAKEN", details={"email": user.email}
            )

    def search_by_email(
        self, fragment: str, exclude_user_id: UUID, limit: int = 10
    ) -> List[AppUser]:
        """Case-insensitive substring search on email, excluding one account"""
        return (
            self.db.query(AppUser)
            .filter(
                AppUser.email.contains(fragment.strip().lower(), autoescape=True),
                AppUser.user_id != exclude_user_id,
            )
            .order_by(AppUser.email.asc())
            .limit(limit)
            .all()
        )

    def delete_user(self, user: AppUser) -> None:
        """Delete user and all related data (cascade)"""
        self.delete_entity(user)

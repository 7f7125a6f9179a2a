"""
Shared Recipe Repository - Data access layer for recipe shares between accounts
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import SharedRecipe
from domain.enums import ShareStatus


class SharedRecipeRepository(BaseRepository[SharedRecipe]):
    """Repository for shared recipe data access"""

    id_field = "share_id"

    def __init__(self, db: Session):
        super().__init__(db, SharedRecipe)

    def get_received(
        self, user_id: UUID, status: Optional[ShareStatus] = None
    ) -> List[SharedRecipe]:
        """Shares addressed to ``user_id`` with recipe and owner loaded"""
        query = (
            self.db.query(SharedRecipe)
            .options(joinedload(SharedRecipe.recipe), joinedload(SharedRecipe.owner))
            .filter(SharedRecipe.shared_with_user_id == user_id)
        )
        if status:
            query = query.filter(SharedRecipe.status == status)
        return query.order_by(SharedRecipe.shared_at.desc()).all()

    def get_sent(self, user_id: UUID) -> List[SharedRecipe]:
        """Shares created by ``user_id`` with recipe and recipient loaded"""
        return (
            self.db.query(SharedRecipe)
            .options(
                joinedload(SharedRecipe.recipe), joinedload(SharedRecipe.recipient)
            )
            .filter(SharedRecipe.owner_id == user_id)
            .order_by(SharedRecipe.shared_at.desc())
            .all()
        )

    def get_for_recipient(
        self, recipe_id: UUID, recipient_id: UUID
    ) -> Optional[SharedRecipe]:
        return (
            self.db.query(SharedRecipe)
            .filter(
                SharedRecipe.recipe_id == recipe_id,
                SharedRecipe.shared_with_user_id == recipient_id,
            )
            .first()
        )

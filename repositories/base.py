"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Subclasses name their primary key column in ``id_field`` and, for
    per-user records, the owning column in ``owner_field``.
    """

    id_field: str = ""
    owner_field: str = "user_id"

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def _id_column(self):
        if not self.id_field:
            raise NotImplementedError(
                f"{self.__class__.__name__} must set id_field to its primary key column"
            )
        return getattr(self.model, self.id_field)

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity UUID

        Returns:
            Entity or None if not found
        """
        return self.db.query(self.model).filter(self._id_column() == entity_id).first()

    def get_owned(self, entity_id: UUID, user_id: UUID) -> Optional[ModelType]:
        """Get entity by ID only if it belongs to ``user_id``"""
        return (
            self.db.query(self.model)
            .filter(
                self._id_column() == entity_id,
                getattr(self.model, self.owner_field) == user_id,
            )
            .first()
        )

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Update existing entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete_entity(self, entity: ModelType) -> None:
        """Delete an already loaded entity"""
        self.db.delete(entity)
        self.db.commit()


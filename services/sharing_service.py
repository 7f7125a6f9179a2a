from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import SharedRecipe, UserRecipe, AppUser
from domain.enums import ShareStatus
from domain.mappers import UserMapper
from domain.schemas.share_schemas import ShareRecipeRequest
from repositories import (
    SharedRecipeRepository,
    UserRecipeRepository,
    UserRepository,
)
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
)
from services.notification_service import NotificationService

logger = logging.getLogger("kitchensathi.sharing")

MIN_SEARCH_LENGTH = 3
MAX_SEARCH_RESULTS = 10


class SharingService:
    """
    Sharing user recipes between accounts.

    A share is created pending; the recipient accepts or rejects it. Owners see
    what they sent, recipients what they received.
    """

    @staticmethod
    def _get_share(db: Session, share_id: UUID) -> SharedRecipe:
        share = SharedRecipeRepository(db).get_by_id(share_id)
        if not share:
            raise NotFoundError("Shared recipe not found")
        return share

    @staticmethod
    def received(
        db: Session, user_id: UUID, status: Optional[ShareStatus] = None
    ) -> List[SharedRecipe]:
        return SharedRecipeRepository(db).get_received(user_id, status)

    @staticmethod
    def sent(db: Session, user_id: UUID) -> List[SharedRecipe]:
        return SharedRecipeRepository(db).get_sent(user_id)

    @staticmethod
    def get_shared_recipe(db: Session, user_id: UUID, recipe_id: UUID) -> UserRecipe:
        """
        A recipe as seen through a share.

        The owner always sees it; anyone else needs an accepted share.
        """
        recipe = UserRecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        if recipe.user_id == user_id:
            return recipe

        share = SharedRecipeRepository(db).get_for_recipient(recipe_id, user_id)
        if not share or share.status != ShareStatus.ACCEPTED:
            raise NotFoundError("Recipe not found or access denied")
        return recipe

    @staticmethod
    def share_recipe(
        db: Session, owner_id: UUID, payload: ShareRecipeRequest
    ) -> SharedRecipe:
        """
        Share one of the caller's recipes with another account.

        Args:
            db: Database session
            owner_id: Caller, must own the recipe
            payload: Recipe, recipient email and an optional message

        Returns:
            The pending SharedRecipe

        Raises:
            NotFoundError: recipe not owned by the caller, or unknown recipient
            ServiceValidationError: sharing with yourself, or the recipient
                does not accept shared recipes
            ConflictError: already shared with that recipient
        """
        users = UserRepository(db)
        shares = SharedRecipeRepository(db)

        recipe = UserRecipeRepository(db).get_owned(payload.recipe_id, owner_id)
        if not recipe:
            raise NotFoundError("Recipe not found")

        recipient = users.get_by_email(payload.user_email)
        if not recipient:
            raise NotFoundError("User not found with that email")
        if recipient.user_id == owner_id:
            raise ServiceValidationError("Cannot share recipe with yourself")
        if not UserMapper.preferences(recipient).allow_sharing:
            raise ServiceValidationError(
                "This user does not accept shared recipes", code="SHARING_DISABLED"
            )
        if shares.get_for_recipient(recipe.recipe_id, recipient.user_id):
            raise ConflictError(
                "Recipe already shared with this user", code="ALREADY_SHARED"
            )

        share = SharedRecipe(
            recipe_id=recipe.recipe_id,
            owner_id=owner_id,
            shared_with_user_id=recipient.user_id,
            message=payload.message,
            status=ShareStatus.PENDING,
        )
        try:
            db.add(share)
            recipe.share_count = (recipe.share_count or 0) + 1
            db.commit()
            db.refresh(share)
        except Exception:
            db.rollback()
            logger.exception(f"share_create_failed recipe_id={recipe.recipe_id}")
            raise

        owner = users.get_by_id(owner_id)
        SharingService._notify(
            db,
            lambda: NotificationService.notify_recipe_shared(
                db,
                recipient.user_id,
                owner.name if owner else "Someone",
                recipe.recipe_id,
                recipe.name,
                share.share_id,
            ),
            share.share_id,
        )

        logger.info(
            f"recipe_shared share_id={share.share_id} recipe_id={recipe.recipe_id} "
            f"owner_id={owner_id} recipient_id={recipient.user_id}"
        )
        return share

    @staticmethod
    def update_status(
        db: Session, user_id: UUID, share_id: UUID, status: ShareStatus
    ) -> SharedRecipe:
        """Recipient accepts or rejects a share; the owner is notified"""
        share = SharingService._get_share(db, share_id)
        if share.shared_with_user_id != user_id:
            raise NotFoundError("Shared recipe not found")

        share.status = status
        share = SharedRecipeRepository(db).update(share)

        recipient = UserRepository(db).get_by_id(user_id)
        SharingService._notify(
            db,
            lambda: NotificationService.notify_share_status(
                db,
                share.owner_id,
                recipient.name if recipient else "Someone",
                share.recipe.name if share.recipe else "your recipe",
                share.share_id,
                accepted=status == ShareStatus.ACCEPTED,
            ),
            share.share_id,
        )

        logger.info(f"share_status share_id={share_id} status={status.value}")
        return share

    @staticmethod
    def delete_share(db: Session, user_id: UUID, share_id: UUID) -> None:
        """Owner revokes or recipient dismisses a share"""
        share = SharingService._get_share(db, share_id)
        if user_id not in (share.owner_id, share.shared_with_user_id):
            raise NotFoundError("Shared recipe not found")

        try:
            if user_id == share.owner_id and share.recipe is not None:
                share.recipe.share_count = max(0, (share.recipe.share_count or 0) - 1)
            db.delete(share)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"share_delete_failed share_id={share_id}")
            raise

        logger.info(f"share_deleted share_id={share_id} by={user_id}")

    @staticmethod
    def search_users(db: Session, user_id: UUID, email: str) -> List[AppUser]:
        """Accounts whose email contains ``email``, excluding the caller"""
        email = (email or "").strip()
        if len(email) < MIN_SEARCH_LENGTH:
            raise ServiceValidationError(
                f"Search query must be at least {MIN_SEARCH_LENGTH} characters"
            )
        return UserRepository(db).search_by_email(email, user_id, MAX_SEARCH_RESULTS)

    @staticmethod
    def _notify(db: Session, send, share_id: UUID) -> None:
        """Notifications are best effort; the share itself is already stored."""
        try:
            send()
        except Exception:
            db.rollback()
            logger.exception(f"share_notification_failed share_id={share_id}")

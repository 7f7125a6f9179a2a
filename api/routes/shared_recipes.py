"""Recipe sharing between accounts"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.enums import ShareStatus
from domain.schemas.auth_schemas import MessageResponse, UserSummary
from domain.schemas.user_recipe_schemas import UserRecipeResponse
from domain.schemas.share_schemas import (
    ShareRecipeRequest,
    ShareStatusUpdate,
    SharedRecipeResponse,
    ShareCreatedResponse,
)
from services.sharing_service import SharingService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/shared-recipes", tags=["Shared Recipes"])
logger = logging.getLogger("kitchensathi.api.shared_recipes")


def _shares(shares) -> List[SharedRecipeResponse]:
    return [SharedRecipeResponse.model_validate(s) for s in shares]


@router.get("/received", response_model=List[SharedRecipeResponse])
def received_shares(
    share_status: Optional[ShareStatus] = Query(None, alias="status"),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Shares addressed to the caller, with recipe and owner"""
    return _shares(SharingService.received(db, current.user_id, share_status))


@router.get("/sent", response_model=List[SharedRecipeResponse])
def sent_shares(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _shares(SharingService.sent(db, current.user_id))


@router.get("/recipe/{recipe_id}", response_model=UserRecipeResponse)
def shared_recipe(
    recipe_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """A recipe the caller owns or has accepted a share of"""
    recipe = SharingService.get_shared_recipe(db, current.user_id, recipe_id)
    return UserRecipeResponse.model_validate(recipe)


@router.get("/users/search", response_model=List[UserSummary])
def search_users(
    email: str = Query(..., description="At least 3 characters of the email"),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    users = SharingService.search_users(db, current.user_id, email)
    return [UserSummary.model_validate(u) for u in users]


@router.post(
    "/share", response_model=ShareCreatedResponse, status_code=status.HTTP_201_CREATED
)
def share_recipe(
    payload: ShareRecipeRequest,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    share = SharingService.share_recipe(db, current.user_id, payload)
    return ShareCreatedResponse(
        message="Recipe shared successfully",
        share=SharedRecipeResponse.model_validate(share),
    )


@router.patch("/{share_id}/status", response_model=SharedRecipeResponse)
def update_share_status(
    share_id: UUID,
    payload: ShareStatusUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Accept or reject a share addressed to the caller"""
    share = SharingService.update_status(
        db, current.user_id, share_id, ShareStatus(payload.status)
    )
    return SharedRecipeResponse.model_validate(share)


@router.delete("/{share_id}", response_model=MessageResponse)
def delete_share(
    share_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    SharingService.delete_share(db, current.user_id, share_id)
    return MessageResponse(message="Share removed successfully")

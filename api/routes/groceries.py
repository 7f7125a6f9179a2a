"""Grocery list and expiry tracking routes"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session
from domain.enums import GroceryStatus
from domain.schemas.grocery_schemas import (
    GroceryItemCreate,
    GroceryItemUpdate,
    GroceryStatusUpdate,
    GroceryExpiryUpdate,
    GroceryItemResponse,
    ExpiryStatsResponse,
    ResetNotificationsResponse,
)
from services.grocery_service import GroceryService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/groceries", tags=["Groceries"])
logger = logging.getLogger("kitchensathi.api.groceries")


def _items(items) -> List[GroceryItemResponse]:
    return [GroceryItemResponse.model_validate(i) for i in items]


@router.get("", response_model=List[GroceryItemResponse])
def list_groceries(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """All of the caller's grocery items, newest first"""
    return _items(GroceryService.list_items(db, current.user_id))


@router.post("", response_model=GroceryItemResponse, status_code=status.HTTP_201_CREATED)
def add_grocery(
    payload: GroceryItemCreate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    item = GroceryService.add_item(db, current.user_id, payload)
    return GroceryItemResponse.model_validate(item)


# ---------------------------------------------------------------------------
# Expiry (declared before /{item_id} so the literal paths win)
# ---------------------------------------------------------------------------


@router.get("/expiring", response_model=List[GroceryItemResponse])
def expiring_groceries(
    days: int = Query(7, ge=1, le=365),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Unused items expiring within ``days`` days, soonest first"""
    return _items(GroceryService.expiring_items(db, current.user_id, days))


@router.get("/expired", response_model=List[GroceryItemResponse])
def expired_groceries(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _items(GroceryService.expired_items(db, current.user_id))


@router.get("/expiry/stats", response_model=ExpiryStatsResponse)
def expiry_stats(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return GroceryService.expiry_stats(db, current.user_id)


@router.post("/expiry/reset-notifications", response_model=ResetNotificationsResponse)
def reset_expiry_notifications(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Re-arm expiry alerts for all of the caller's items"""
    count = GroceryService.reset_expiry_notifications(db, current.user_id)
    return ResetNotificationsResponse(
        message=f"Reset notifications for {count} items", modified_count=count
    )


@router.get("/by-status/{item_status}", response_model=List[GroceryItemResponse])
def groceries_by_status(
    item_status: GroceryStatus,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _items(GroceryService.list_by_status(db, current.user_id, item_status))


# ---------------------------------------------------------------------------
# Single item
# ---------------------------------------------------------------------------


@router.get("/{item_id}", response_model=GroceryItemResponse)
def get_grocery(
    item_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return GroceryItemResponse.model_validate(
        GroceryService.get_item(db, current.user_id, item_id)
    )


@router.patch("/{item_id}", response_model=GroceryItemResponse)
def update_grocery(
    item_id: UUID,
    payload: GroceryItemUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Partial update. Send ``"expiry_date": null`` to clear the date; a status
    change follows the pending -> completed -> used lifecycle.
    """
    item = GroceryService.update_item(db, current.user_id, item_id, payload)
    return GroceryItemResponse.model_validate(item)


@router.patch("/{item_id}/status", response_model=GroceryItemResponse)
def update_grocery_status(
    item_id: UUID,
    payload: GroceryStatusUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    item = GroceryService.set_status(db, current.user_id, item_id, payload.status)
    return GroceryItemResponse.model_validate(item)


@router.post("/{item_id}/mark-completed", response_model=GroceryItemResponse)
def mark_grocery_completed(
    item_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    item = GroceryService.mark_completed(db, current.user_id, item_id)
    return GroceryItemResponse.model_validate(item)


@router.post("/{item_id}/mark-used", response_model=GroceryItemResponse)
def mark_grocery_used(
    item_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    item = GroceryService.mark_used(db, current.user_id, item_id)
    return GroceryItemResponse.model_validate(item)


@router.patch("/{item_id}/expiry", response_model=GroceryItemResponse)
def update_grocery_expiry(
    item_id: UUID,
    payload: GroceryExpiryUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    item = GroceryService.update_expiry(db, current.user_id, item_id, payload)
    return GroceryItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_grocery(
    item_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    GroceryService.delete_item(db, current.user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

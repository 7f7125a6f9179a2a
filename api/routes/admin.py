"""Operator routes (admin role only)"""

from typing import Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from domain.models import get_db_session
from services.expiry_service import ExpiryService
from api.dependencies import CurrentUser, require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("kitchensathi.api.admin")


@router.post("/expiry-check", response_model=Dict[str, int])
def run_expiry_check(
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db_session),
):
    """Run one expiry alert pass now and return its counters."""
    logger.info(f"expiry_check_triggered by={current.user_id}")
    return ExpiryService.check_and_notify(db)

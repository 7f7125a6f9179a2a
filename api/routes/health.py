"""Health check and service info routes"""

from fastapi import APIRouter
import logging

from api.responses import ApiInfoResponse, HealthResponse
from app.config import settings
from app.security import utcnow

router = APIRouter(tags=["Health"])
logger = logging.getLogger("kitchensathi.api.health")


@router.get("", response_model=ApiInfoResponse)
def api_info():
    return ApiInfoResponse(message=f"{settings.app_name} API - AI Meal Planning")


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        time=utcnow(),
    )

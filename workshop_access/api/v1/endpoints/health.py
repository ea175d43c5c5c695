"""Liveness endpoint. No actor header or engine access required."""

from fastapi import APIRouter

from workshop_access.core.config import get_settings
from workshop_access.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(service=settings.app_name, version=settings.app_version)

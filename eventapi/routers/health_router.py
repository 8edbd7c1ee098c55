from fastapi import APIRouter

from eventapi.config import settings
from eventapi.schemas.health import HealthCheckResponse
from eventapi.utils.timezone_utils import utcnow

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""

    return HealthCheckResponse(environment=settings.ENVIRONMENT, timestamp=utcnow())

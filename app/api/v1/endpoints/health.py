from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.health import HealthCheckResponse

router = APIRouter()


@router.get("/health")
async def health_check() -> HealthCheckResponse:
    """
    Liveness check. The service has no external dependencies, so a
    response always means healthy.
    """
    return HealthCheckResponse(
        service="geoheat-backend",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=True,
    )

"""Public health check for load balancers and uptime probes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import check_db_connected, get_db
from storefront.schemas.common import ApiResponse
from storefront.schemas.health import HealthStatus

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthStatus])
def get_health(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[HealthStatus]:
    """200 with status 'ok' when the database answers, 503 with 'degraded' otherwise."""
    connected = check_db_connected(db)
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ApiResponse(
        success=connected,
        data=HealthStatus(
            status="ok" if connected else "degraded",
            environment=settings.APP_ENV,
            database="connected" if connected else "disconnected",
        ),
    )

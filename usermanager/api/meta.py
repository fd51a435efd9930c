"""CSRF token issuance and health check."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from usermanager.core.config import settings
from usermanager.core.csrf import issue_csrf_token
from usermanager.core.database import check_db_connected, get_db
from usermanager.schemas.auth import CsrfTokenResponse
from usermanager.schemas.health import HealthResponse

router = APIRouter()


@router.get("/csrf-token", response_model=CsrfTokenResponse)
def get_csrf_token(request: Request, response: Response) -> CsrfTokenResponse:
    """Token for the CSRF-Token header of state-changing requests."""
    return CsrfTokenResponse(csrf_token=issue_csrf_token(request, response))


@router.get("/health", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """Service health and database connectivity, for load balancers and monitoring."""
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )

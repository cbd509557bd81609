"""Liveness plus store reachability; never gated."""

from fastapi import APIRouter

from news_api.api.deps import AppSettings, DbSession
from news_api.core.database import check_db_connected
from news_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse, summary="Service and database status")
def get_health(db: DbSession, settings: AppSettings) -> HealthResponse:
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )

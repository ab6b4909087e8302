"""Health router reporting service liveness and platform database readiness."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from recon_feed.db import DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create the `/health` router.

    The platform database holds the mapping lookups every run needs, so an
    unreachable database degrades the whole service.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health`.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return liveness plus lookup database readiness."""

        target_label = db_health_service.db_connection_label()
        try:
            lookup_health = db_health_service.db_check_health()
        except ConnectionError as error:
            return JSONResponse(
                content={
                    "status": "degraded",
                    "app": "up",
                    "database": "down",
                    "detail": str(error),
                    "target": target_label,
                },
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return JSONResponse(
            content={
                "status": "ok",
                "app": "up",
                "database": lookup_health.status,
                "detail": lookup_health.detail,
                "target": target_label,
            },
            status_code=status.HTTP_200_OK,
        )

    return router

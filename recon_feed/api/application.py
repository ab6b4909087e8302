"""FastAPI application factory for the reconciliation feed service."""

from fastapi import FastAPI

from recon_feed.config import AppSettings
from recon_feed.db import DatabaseHealthPort
from recon_feed.jobs import JobOrchestratorPort

from .routers import api_create_health_router, api_create_recon_run_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    recon_orchestrator: JobOrchestratorPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        recon_orchestrator: Job orchestrator for reconciliation run triggers.

    Returns:
        FastAPI: Framework application instance.
    """
    application = FastAPI(title="Recon Feed")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identification metadata."""

        return {
            "service": "recon-feed",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(api_create_recon_run_router(recon_orchestrator=recon_orchestrator))

    return application

"""API router package for endpoint composition."""

from .health import api_create_health_router
from .recon_runs import api_create_recon_run_router

__all__ = ["api_create_health_router", "api_create_recon_run_router"]

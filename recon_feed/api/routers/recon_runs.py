"""Reconciliation run router composition for scheduler-triggered runs."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from recon_feed.jobs import JobOrchestratorPort


def api_create_recon_run_router(recon_orchestrator: JobOrchestratorPort) -> APIRouter:
    """Create router exposing the reconciliation run trigger.

    Args:
        recon_orchestrator: Job orchestrator executing reconciliation runs.

    Returns:
        APIRouter: Router exposing `/recon/run`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if recon_orchestrator is None:
        raise ValueError("recon_orchestrator must not be None")

    router = APIRouter(prefix="/recon", tags=["recon"])

    @router.post("/run")
    def api_recon_run_trigger(include_diagnostics: bool = Query(default=False)) -> JSONResponse:
        """Trigger one reconciliation run and report its outcome.

        Args:
            include_diagnostics: Include the stage timeline in the response.

        Returns:
            JSONResponse: Run result payload; HTTP 200 for success, 500 for a failed run.
        """

        execution_result = recon_orchestrator.job_execute(job_name="recon_run")
        payload: dict[str, object] = {
            "job_name": execution_result.job_name,
            "status": execution_result.status,
            "event_count": execution_result.event_count,
            "succeeded_count": execution_result.succeeded_count,
            "failed_count": execution_result.failed_count,
        }
        if execution_result.status != "success":
            payload["error_code"] = execution_result.error_code
            payload["error_message"] = execution_result.error_message
        if include_diagnostics:
            payload["diagnostics"] = list(execution_result.diagnostics)

        response_status = (
            status.HTTP_200_OK if execution_result.status == "success" else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(content=payload, status_code=response_status)

    return router

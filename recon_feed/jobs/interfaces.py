"""Typed interfaces for job-layer orchestration responsibilities."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for one reconciliation run.

    Attributes:
        job_name: Job identifier.
        status: Final execution state (`success` or `failed`).
        error_code: Stable failure classification when failed.
        error_message: Human-readable failure message when failed.
        event_count: Number of events assembled and submitted.
        succeeded_count: Events the service reported as created.
        failed_count: Events the service reported as rejected.
        diagnostics: Ordered stage timeline events.
    """

    job_name: str
    status: str
    error_code: str | None = None
    error_message: str | None = None
    event_count: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    diagnostics: tuple[dict[str, object], ...] = field(default_factory=tuple)


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating reconciliation runs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.
        """

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            ValueError: Raised when the job name is unsupported.
        """

"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from recon_feed.domain import ReconBatchAttributes, ReconciliationEvent, ReconSubmissionResult


class ReconSubmissionPort(Protocol):
    """Port definition for submitting one batch of reconciliation events."""

    def adapter_source_name(self) -> str:
        """Return adapter target identifier for diagnostics and telemetry.

        Returns:
            str: Human-readable downstream service identifier.
        """

    def adapter_submit_events(
        self,
        batch_attributes: ReconBatchAttributes,
        events: tuple[ReconciliationEvent, ...],
    ) -> ReconSubmissionResult:
        """Create all events in one batch call.

        Args:
            batch_attributes: Profile, date format and duplicate suppression options.
            events: Ordered events to create.

        Returns:
            ReconSubmissionResult: Partitioned success/failure report.

        Raises:
            ReconConnectionError: Raised when the service cannot be reached.
            SubmissionError: Raised when the service rejects the batch.
        """

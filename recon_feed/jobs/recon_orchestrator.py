"""Job-layer reconciliation run orchestrator with stage timeline diagnostics."""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import Callable
from datetime import datetime

from recon_feed.adapters import ReconSubmissionPort
from recon_feed.config import DEFAULT_DATE_FORMAT
from recon_feed.db import LookupServicePort, SourceConnectorPort
from recon_feed.domain import ReconBatchAttributes, ReconciliationEvent, ReconRunError
from recon_feed.mapping import mapping_derive_recon_mapping

from .interfaces import JobExecutionResult, JobOrchestratorPort
from .recon_pipeline import job_recon_build_events
from .timeline import JobStageTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconRunConfig:
    """Validated options for one reconciliation run.

    Attributes:
        data_source_url: Resolved SQLAlchemy URL of the source database.
        resource_object_name: Reconciliation profile name events are created for.
        table_name: Source table to scan.
        filter_clause: Optional SQL clause appended to the scan query.
        date_format: Date pattern the service uses to parse date fields.
        ignore_duplicate_event: Skip events that would not change anything.
        mapping_lookup: Lookup definition holding field mappings; blank for identity mode.
        it_resource_name: Resource instance identifier substituted for the server sentinel.
        link_column_name: Column relating parent rows to child table rows.
        action_date: Optional deferred processing timestamp for every event.
        column_match_case_insensitive: Match mapped column names ignoring case.
    """

    data_source_url: str
    resource_object_name: str
    table_name: str
    filter_clause: str = ""
    date_format: str = DEFAULT_DATE_FORMAT
    ignore_duplicate_event: bool = False
    mapping_lookup: str = ""
    it_resource_name: str | None = None
    link_column_name: str | None = None
    action_date: datetime | None = None
    column_match_case_insensitive: bool = False


class ReconEventsJobOrchestrator(JobOrchestratorPort):
    """Run one full scan, map, assemble and batch-submit reconciliation cycle."""

    _RECON_JOB_NAME = "recon_run"

    def __init__(
        self,
        source_connector: SourceConnectorPort,
        lookup_service: LookupServicePort,
        submission_adapter: ReconSubmissionPort,
        config: ReconRunConfig,
    ):
        """Initialize reconciliation orchestrator dependencies.

        Args:
            source_connector: DB-layer connector acquiring the source reader.
            lookup_service: DB-layer service acquiring the lookup session.
            submission_adapter: Adapter creating events in the reconciliation service.
            config: Reconciliation run configuration.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if source_connector is None:
            raise ValueError("source_connector must not be None")
        if lookup_service is None:
            raise ValueError("lookup_service must not be None")
        if submission_adapter is None:
            raise ValueError("submission_adapter must not be None")
        if not config.data_source_url.strip():
            raise ValueError("config.data_source_url must not be blank")
        if not config.resource_object_name.strip():
            raise ValueError("config.resource_object_name must not be blank")
        if not config.table_name.strip():
            raise ValueError("config.table_name must not be blank")
        if not config.date_format.strip():
            raise ValueError("config.date_format must not be blank")

        self._source_connector = source_connector
        self._lookup_service = lookup_service
        self._submission_adapter = submission_adapter
        self._config = config

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names."""

        return (self._RECON_JOB_NAME,)

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one reconciliation run.

        Events are submitted once, as a single batch, only after the full scan
        succeeds. Any failure discards the assembled events.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            ValueError: Raised when job name is unsupported.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._RECON_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        config = self._config
        timeline = JobStageTimeline()
        timeline.timeline_record(
            stage="run",
            status="started",
            details={
                "resource_object_name": config.resource_object_name,
                "table_name": config.table_name,
                "mapping_lookup": config.mapping_lookup,
            },
        )
        logger.info(
            "recon_run_started",
            extra={"resource_object_name": config.resource_object_name, "table_name": config.table_name},
        )

        try:
            events = self._job_collect_events(timeline=timeline)

            if not events:
                timeline.timeline_record(stage="submit", status="skipped", details={"submission_skip_reason": "no_rows"})
                succeeded_count = 0
                failed_count = 0
            else:
                timeline.timeline_record(
                    stage="submit",
                    status="started",
                    details={"target": self._submission_adapter.adapter_source_name()},
                )
                submission_result = self._submission_adapter.adapter_submit_events(
                    batch_attributes=ReconBatchAttributes(
                        profile_name=config.resource_object_name,
                        date_format=config.date_format,
                        ignore_duplicate_event=config.ignore_duplicate_event,
                    ),
                    events=events,
                )
                succeeded_count = len(submission_result.succeeded_event_keys)
                failed_count = len(submission_result.failed_event_keys)
                timeline.timeline_record(
                    stage="submit",
                    status="completed",
                    details={
                        "succeeded_event_keys": list(submission_result.succeeded_event_keys),
                        "failed_event_keys": list(submission_result.failed_event_keys),
                    },
                )

            run_duration_ms = timeline.timeline_elapsed_ms()
            timeline.timeline_record(stage="run", status="success", details={"duration_ms": run_duration_ms})
            logger.info(
                "recon_run_completed",
                extra={
                    "event_count": len(events),
                    "succeeded_count": succeeded_count,
                    "failed_count": failed_count,
                    "duration_ms": run_duration_ms,
                },
            )
            return JobExecutionResult(
                job_name=normalized_job_name,
                status="success",
                event_count=len(events),
                succeeded_count=succeeded_count,
                failed_count=failed_count,
                diagnostics=timeline.timeline_events(),
            )
        except Exception as error:  # pylint: disable=broad-exception-caught
            error_code = self._job_error_code_for_exception(error)
            timeline.timeline_record(
                stage="run",
                status="failed",
                details={
                    "error_code": error_code,
                    "error_type": type(error).__name__,
                    "error_message": str(error),
                    "traceback": traceback.format_exc(),
                },
            )
            logger.error(
                "recon_run_failed",
                extra={"error_code": error_code, "error_type": type(error).__name__},
                exc_info=True,
            )
            return JobExecutionResult(
                job_name=normalized_job_name,
                status="failed",
                error_code=error_code,
                error_message=str(error),
                diagnostics=timeline.timeline_events(),
            )

    def _job_collect_events(self, timeline: JobStageTimeline) -> tuple[ReconciliationEvent, ...]:
        """Derive mappings and assemble events while the run's resources are held.

        The source connection is held for the whole scan and every child query.
        The lookup session is released as soon as the mapping is derived.

        Args:
            timeline: Run stage timeline.

        Returns:
            tuple[ReconciliationEvent, ...]: Events in source row order.

        Raises:
            ReconRunError: Raised when any lookup, mapping or query stage fails.
        """

        config = self._config
        with self._source_connector.db_source_open(
            config.data_source_url,
            case_insensitive=config.column_match_case_insensitive,
        ) as source_reader:
            with self._lookup_service.db_lookup_session() as lookup_session:
                timeline.timeline_record(stage="lookup", status="started")
                raw_mapping = lookup_session.db_lookup_values(config.mapping_lookup)
                derived_mapping = mapping_derive_recon_mapping(raw_mapping)
                timeline.timeline_record(
                    stage="lookup",
                    status="completed",
                    details={
                        "scalar_field_count": len(derived_mapping.attribute_mapping),
                        "child_group_names": sorted(derived_mapping.child_groups),
                    },
                )

            timeline.timeline_record(stage="extract", status="started")
            events = job_recon_build_events(
                source_reader=source_reader,
                derived_mapping=derived_mapping,
                table_name=config.table_name,
                filter_clause=config.filter_clause,
                it_resource_name=config.it_resource_name,
                link_column_name=config.link_column_name,
                action_date=config.action_date,
            )
        timeline.timeline_record(stage="extract", status="completed", details={"event_count": len(events)})
        return events

    def _job_error_code_for_exception(self, error: Exception) -> str:
        """Map a caught exception to its stable failure code."""

        if isinstance(error, ReconRunError):
            return error.error_code
        if isinstance(error, ConnectionError):
            return "RECON_CONNECTION_ERROR"
        if isinstance(error, ValueError):
            return "RECON_CONTRACT_ERROR"
        return "RECON_UNEXPECTED_ERROR"


class DeferredReconJobOrchestrator(JobOrchestratorPort):
    """Resolve run options and build the orchestrator at trigger time.

    Long-lived surfaces such as the API start without any run options; each
    trigger builds a fresh orchestrator so option changes apply to the next run.
    """

    _RECON_JOB_NAME = "recon_run"

    def __init__(self, orchestrator_factory: Callable[[], JobOrchestratorPort]):
        """Initialize deferred orchestrator.

        Args:
            orchestrator_factory: Builds a fully configured orchestrator for one run.

        Raises:
            ValueError: Raised when orchestrator_factory is None.
        """

        if orchestrator_factory is None:
            raise ValueError("orchestrator_factory must not be None")
        self._orchestrator_factory = orchestrator_factory

    def job_supported_names(self) -> tuple[str, ...]:
        return (self._RECON_JOB_NAME,)

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Build the run orchestrator and execute one run.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: Run result, or a failed result when run options are invalid.

        Raises:
            ValueError: Raised when job name is unsupported.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._RECON_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        timeline = JobStageTimeline()
        try:
            orchestrator = self._orchestrator_factory()
        except (ReconRunError, ValueError) as error:
            error_code = error.error_code if isinstance(error, ReconRunError) else "RECON_CONFIGURATION_ERROR"
            timeline.timeline_record(
                stage="configure",
                status="failed",
                details={"error_code": error_code, "error_type": type(error).__name__, "error_message": str(error)},
            )
            logger.error("recon_run_configuration_failed", extra={"error_code": error_code})
            return JobExecutionResult(
                job_name=normalized_job_name,
                status="failed",
                error_code=error_code,
                error_message=str(error),
                diagnostics=timeline.timeline_events(),
            )
        return orchestrator.job_execute(normalized_job_name)

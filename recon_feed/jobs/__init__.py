"""Job layer package for reconciliation workflow orchestration boundaries."""

from .interfaces import JobExecutionResult, JobOrchestratorPort
from .recon_orchestrator import DeferredReconJobOrchestrator, ReconEventsJobOrchestrator, ReconRunConfig
from .recon_pipeline import job_recon_build_events
from .timeline import JobStageTimeline

__all__ = [
	"DeferredReconJobOrchestrator",
	"JobExecutionResult",
	"JobOrchestratorPort",
	"JobStageTimeline",
	"ReconEventsJobOrchestrator",
	"ReconRunConfig",
	"job_recon_build_events",
]

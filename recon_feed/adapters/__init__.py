"""Adapter layer package for reconciliation service integration boundaries."""

from .interfaces import ReconSubmissionPort
from .recon_web_service import ReconWebServiceAdapter, adapter_serialize_event

__all__ = [
	"ReconSubmissionPort",
	"ReconWebServiceAdapter",
	"adapter_serialize_event",
]

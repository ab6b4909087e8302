"""Domain models and typed errors used across application layer boundaries."""

from .errors import (
	ColumnNotFoundError,
	ConfigurationError,
	LookupNotFoundError,
	MappingFormatError,
	QueryError,
	ReconConnectionError,
	ReconRunError,
	SubmissionError,
)
from .models import (
	ChangeType,
	ChildRecord,
	ChildRecordSet,
	EventAttributes,
	HealthStatus,
	ReconBatchAttributes,
	ReconciliationEvent,
	ReconSubmissionResult,
)

__all__ = [
	"ChangeType",
	"ChildRecord",
	"ChildRecordSet",
	"ColumnNotFoundError",
	"ConfigurationError",
	"EventAttributes",
	"HealthStatus",
	"LookupNotFoundError",
	"MappingFormatError",
	"QueryError",
	"ReconBatchAttributes",
	"ReconConnectionError",
	"ReconRunError",
	"ReconSubmissionResult",
	"ReconciliationEvent",
	"SubmissionError",
]

"""Typed domain models shared across runtime layers.

Event payloads are plain mappings keyed by reconciliation field names; the
event wrapper adds the processing flags the reconciliation service expects.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

EventAttributes = dict[str, str | None]
ChildRecord = dict[str, str | None]
ChildRecordSet = dict[str, tuple[ChildRecord, ...]]


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


class ChangeType(str, Enum):
    """Change classification attached to each reconciliation event."""

    INCREMENTAL = "CHANGELOG"


@dataclass(frozen=True)
class ReconciliationEvent:
    """One reconciliation event built from a single source row.

    Attributes:
        attributes: Scalar reconciliation field values.
        children: Child records keyed by multivalued group name; empty when none.
        finished: Whether the event is complete without a deferred child step.
        change_type: Change classification.
        action_date: Optional deferred processing timestamp.
    """

    attributes: Mapping[str, str | None]
    children: Mapping[str, tuple[ChildRecord, ...]] = field(default_factory=dict)
    finished: bool = True
    change_type: ChangeType = ChangeType.INCREMENTAL
    action_date: datetime | None = None


@dataclass(frozen=True)
class ReconBatchAttributes:
    """Batch-level options sent with one event submission.

    Attributes:
        profile_name: Resource object (reconciliation profile) name.
        date_format: Date pattern used by the service to parse date fields.
        ignore_duplicate_event: Skip events that would not change anything.
    """

    profile_name: str
    date_format: str
    ignore_duplicate_event: bool


@dataclass(frozen=True)
class ReconSubmissionResult:
    """Partitioned outcome reported by the reconciliation service.

    Attributes:
        succeeded_event_keys: Service identifiers of created events.
        failed_event_keys: Service identifiers or indexes of rejected events.
    """

    succeeded_event_keys: tuple[str, ...]
    failed_event_keys: tuple[str, ...]

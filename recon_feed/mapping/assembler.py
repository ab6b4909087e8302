"""Reconciliation event assembly and run-level event collection."""

from __future__ import annotations

from datetime import datetime

from recon_feed.domain import ChangeType, ChildRecordSet, EventAttributes, ReconciliationEvent


class ReconEventAssembler:
    """Collect reconciliation events for one run in source row order."""

    def __init__(self, child_groups_configured: bool, action_date: datetime | None = None):
        """Initialize assembler for one run.

        Args:
            child_groups_configured: Whether the run derived at least one child group.
            action_date: Optional deferred processing timestamp applied to every event.
        """

        self._finished = not child_groups_configured
        self._action_date = action_date
        self._events: list[ReconciliationEvent] = []

    def assembler_append(
        self,
        attributes: EventAttributes,
        children: ChildRecordSet | None = None,
    ) -> ReconciliationEvent:
        """Build one event and append it to the run output.

        Args:
            attributes: Scalar reconciliation field values.
            children: Optional child records keyed by group name.

        Returns:
            ReconciliationEvent: Appended event.
        """

        event = ReconciliationEvent(
            attributes=attributes,
            children=children or {},
            finished=self._finished,
            change_type=ChangeType.INCREMENTAL,
            action_date=self._action_date,
        )
        self._events.append(event)
        return event

    def assembler_events(self) -> tuple[ReconciliationEvent, ...]:
        """Return all assembled events in append order."""

        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

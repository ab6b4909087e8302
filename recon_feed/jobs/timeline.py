"""Stage timeline recorder for run diagnostics."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any


def _job_utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobStageTimeline:
    """Ordered stage events of one run.

    Every event carries the UTC wall time and the milliseconds elapsed since the
    timeline was created, so a returned diagnostics tuple shows where a run spent
    its time without separate metrics.
    """

    def __init__(self, clock: Callable[[], datetime] = _job_utc_now):
        self._clock = clock
        self._started_at = clock()
        self._events: list[dict[str, object]] = []

    def timeline_record(self, stage: str, status: str, details: dict[str, Any] | None = None) -> dict[str, object]:
        """Append one stage event.

        Args:
            stage: Stage name (`run`, `lookup`, `extract`, `submit`).
            status: Stage status marker.
            details: Optional structured details; omitted from the event when empty.

        Returns:
            dict[str, object]: Recorded event.
        """

        recorded_at = self._clock()
        stage_event: dict[str, object] = {
            "stage": stage,
            "status": status,
            "at_utc": recorded_at.isoformat(),
            "elapsed_ms": self._job_elapsed_ms(recorded_at),
        }
        if details:
            stage_event["details"] = details
        self._events.append(stage_event)
        return stage_event

    def timeline_elapsed_ms(self) -> int:
        """Return milliseconds elapsed since the timeline started."""

        return self._job_elapsed_ms(self._clock())

    def timeline_events(self) -> tuple[dict[str, object], ...]:
        return tuple(self._events)

    def _job_elapsed_ms(self, moment: datetime) -> int:
        return max(0, int((moment - self._started_at).total_seconds() * 1000))

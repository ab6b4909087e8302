"""Reconciliation service HTTP adapter for batch event creation."""

from __future__ import annotations

import json
import logging
import socket
from typing import Callable, Final
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from recon_feed.domain import (
    ReconBatchAttributes,
    ReconConnectionError,
    ReconciliationEvent,
    ReconSubmissionResult,
    SubmissionError,
)

from .interfaces import ReconSubmissionPort

logger = logging.getLogger(__name__)


def adapter_serialize_event(event: ReconciliationEvent) -> dict[str, object]:
    """Render one event as the JSON object accepted by the service.

    Args:
        event: Reconciliation event.

    Returns:
        dict[str, object]: JSON-compatible event payload.
    """

    return {
        "attributes": dict(event.attributes),
        "children": {group_name: [dict(record) for record in records] for group_name, records in event.children.items()},
        "finished": event.finished,
        "changeType": event.change_type.value,
        "actionDate": event.action_date.isoformat() if event.action_date is not None else None,
    }


class ReconWebServiceAdapter(ReconSubmissionPort):
    """Adapter posting event batches to the reconciliation service."""

    _EVENTS_PATH: Final[str] = "/reconciliation/events"
    _USER_AGENT: Final[str] = "recon-feed/1.0 (Python/urllib.request)"

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 60.0,
        url_opener: Callable[..., object] | None = None,
    ):
        """Initialize reconciliation service adapter.

        Args:
            base_url: Base URL of the reconciliation service.
            token: Optional bearer token.
            timeout_seconds: HTTP request timeout in seconds.
            url_opener: Optional `urlopen`-compatible callable.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = (base_url or "").strip()
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._token = (token or "").strip() or None
        self._timeout_seconds = timeout_seconds
        self._url_opener = url_opener or urlopen

    def adapter_source_name(self) -> str:
        """Return stable adapter target label."""

        return "recon_web_service"

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
            ReconConnectionError: Raised when the service cannot be reached or times out.
            SubmissionError: Raised when the service rejects the batch or answers malformed JSON.
        """

        request_payload = {
            "profileName": batch_attributes.profile_name,
            "dateFormat": batch_attributes.date_format,
            "ignoreDuplicateEvent": batch_attributes.ignore_duplicate_event,
            "events": [adapter_serialize_event(event) for event in events],
        }
        status_code, response_body = self._adapter_http_post(
            url=f"{self._base_url}{self._EVENTS_PATH}",
            payload=request_payload,
        )

        try:
            response_payload = json.loads(response_body.decode("utf-8"))
        except ValueError as error:
            raise SubmissionError("reconciliation service returned non-JSON response", status_code) from error
        if not isinstance(response_payload, dict):
            raise SubmissionError("reconciliation service response must be a JSON object", status_code)

        result = ReconSubmissionResult(
            succeeded_event_keys=self._adapter_extract_keys(response_payload, "success"),
            failed_event_keys=self._adapter_extract_keys(response_payload, "failed"),
        )
        logger.info(
            "recon_batch_submitted",
            extra={
                "profile_name": batch_attributes.profile_name,
                "submitted_count": len(events),
                "succeeded_count": len(result.succeeded_event_keys),
                "failed_count": len(result.failed_event_keys),
            },
        )
        return result

    def _adapter_http_post(self, url: str, payload: dict[str, object]) -> tuple[int, bytes]:
        """Execute one JSON POST and return status code and body bytes.

        Args:
            url: Endpoint URL.
            payload: JSON request body.

        Returns:
            tuple[int, bytes]: HTTP status code and response payload.

        Raises:
            ReconConnectionError: Raised for network failures and timeouts.
            SubmissionError: Raised for non-success HTTP status.
        """

        headers = {
            "User-Agent": self._USER_AGENT,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._token is not None:
            headers["Authorization"] = f"Bearer {self._token}"

        request = Request(url, data=json.dumps(payload).encode("utf-8"), method="POST", headers=headers)
        try:
            with self._url_opener(request, timeout=self._timeout_seconds) as response:
                status_code = int(response.getcode() or 200)
                response_body = response.read()
        except TimeoutError as error:
            raise ReconConnectionError("reconciliation service request timed out") from error
        except HTTPError as error:
            error_body = error.read().decode("utf-8", errors="replace")[:500]
            raise SubmissionError(
                f"reconciliation service rejected batch: status={error.code}, body={error_body}",
                status_code=error.code,
            ) from error
        except URLError as error:
            if isinstance(error.reason, (TimeoutError, socket.timeout)):
                raise ReconConnectionError("reconciliation service request timed out") from error
            raise ReconConnectionError(f"reconciliation service unreachable: {error.reason}") from error

        if status_code >= 400:
            raise SubmissionError(f"reconciliation service rejected batch: status={status_code}", status_code)
        return status_code, bytes(response_body)

    def _adapter_extract_keys(self, response_payload: dict[str, object], field_name: str) -> tuple[str, ...]:
        raw_keys = response_payload.get(field_name) or []
        if not isinstance(raw_keys, list):
            raise SubmissionError(f"reconciliation service field {field_name!r} must be a list")
        return tuple(str(key) for key in raw_keys)

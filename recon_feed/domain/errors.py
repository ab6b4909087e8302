"""Project-native typed exceptions for reconciliation run failures.

Every error below is fatal to a run. The job orchestrator maps each one to its
`error_code` when it finalizes a failed run.
"""

from __future__ import annotations


class ReconRunError(Exception):
    """Base exception for reconciliation run failures.

    Attributes:
        error_code: Stable classification code surfaced to operators.
    """

    error_code = "RECON_UNEXPECTED_ERROR"

    def __init__(self, message: str):
        super().__init__(message)


class ConfigurationError(ReconRunError, ValueError):
    """Missing or invalid recognized run option."""

    error_code = "RECON_CONFIGURATION_ERROR"


class LookupNotFoundError(ConfigurationError):
    """Configured mapping lookup definition does not exist."""

    error_code = "RECON_LOOKUP_NOT_FOUND_ERROR"


class ReconConnectionError(ReconRunError, ConnectionError):
    """Database or service handle could not be obtained."""

    error_code = "RECON_CONNECTION_ERROR"


class QueryError(ReconRunError, RuntimeError):
    """Malformed table/filter/SQL or query execution failure."""

    error_code = "RECON_QUERY_ERROR"


class MappingFormatError(ReconRunError, ValueError):
    """Malformed delimiter-based mapping entry."""

    error_code = "RECON_MAPPING_FORMAT_ERROR"


class ColumnNotFoundError(ReconRunError, LookupError):
    """Expected column is absent from a result row.

    Attributes:
        column_name: Requested column name.
        available_columns: Column names present in the result shape.
    """

    error_code = "RECON_COLUMN_NOT_FOUND_ERROR"

    def __init__(self, message: str, column_name: str, available_columns: tuple[str, ...] = ()):
        super().__init__(message)
        self.column_name = column_name
        self.available_columns = available_columns


class SubmissionError(ReconRunError, RuntimeError):
    """Batch event creation was rejected by the reconciliation service.

    Attributes:
        status_code: Optional HTTP status code returned by the service.
    """

    error_code = "RECON_SUBMISSION_ERROR"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

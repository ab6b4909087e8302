"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol

from recon_feed.domain import HealthStatus
from recon_feed.mapping import SourceRow

LOOKUP_DEFINITION_TABLE = "lookup_definition"
LOOKUP_VALUE_TABLE = "lookup_value"


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class SourceTableReaderPort(Protocol):
    """Port for scanning one source table and its related child tables."""

    def db_source_scan(self, table_name: str, filter_clause: str = "") -> Iterator[SourceRow]:
        """Yield rows of `SELECT * FROM <table> [<filter>]` in result order.

        Args:
            table_name: Source table name.
            filter_clause: Optional clause appended verbatim.

        Returns:
            Iterator[SourceRow]: Lazy, non-restartable row sequence.

        Raises:
            QueryError: Raised when the query is malformed or fails.
        """

    def db_child_rows(self, table_name: str, link_column_name: str, link_value: str | None) -> list[SourceRow]:
        """Return child rows whose link column equals the given value.

        Raises:
            QueryError: Raised when the query is malformed or fails.
        """


class SourceConnectorPort(Protocol):
    """Port for acquiring a source table reader bound to one exclusive connection."""

    def db_source_open(
        self,
        database_url: str,
        case_insensitive: bool = False,
    ) -> AbstractContextManager[SourceTableReaderPort]:
        """Open a reader released on every exit path.

        Raises:
            ReconConnectionError: Raised when the source database is unreachable.
        """


class LookupSessionPort(Protocol):
    """Port for reading lookup definitions within one open session."""

    def db_lookup_values(self, lookup_name: str) -> dict[str, str]:
        """Return code key to decode values of one lookup definition.

        Raises:
            LookupNotFoundError: Raised when the lookup definition does not exist.
            QueryError: Raised when the lookup query fails.
        """


class LookupServicePort(Protocol):
    """Port for acquiring one lookup session per run."""

    def db_lookup_session(self) -> AbstractContextManager[LookupSessionPort]:
        """Open a lookup session released on every exit path.

        Raises:
            ReconConnectionError: Raised when the platform database is unreachable.
        """

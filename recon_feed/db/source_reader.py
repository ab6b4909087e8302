"""Source table scans and child table queries over one exclusive connection."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import Connection, Engine, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from recon_feed.domain import QueryError
from recon_feed.mapping import SourceRow

from .interfaces import SourceTableReaderPort
from .session import db_create_engine, db_open_connection

logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$#]*$")


def db_validate_identifier(identifier: str, label: str, allow_schema: bool = False) -> str:
    """Validate a table or column name before it is placed in SQL text.

    Args:
        identifier: Candidate identifier.
        label: Option label used in error messages.
        allow_schema: Accept one `schema.name` qualifier.

    Returns:
        str: Stripped identifier.

    Raises:
        QueryError: Raised when the identifier is not a plain SQL name.
    """

    normalized_identifier = (identifier or "").strip()
    segments = normalized_identifier.split(".")
    max_segments = 2 if allow_schema else 1
    if not normalized_identifier or len(segments) > max_segments:
        raise QueryError(f"invalid {label} {identifier!r}")
    if not all(_IDENTIFIER_PATTERN.match(segment) for segment in segments):
        raise QueryError(f"invalid {label} {identifier!r}")
    return normalized_identifier


class SQLAlchemySourceTableReader(SourceTableReaderPort):
    """Source reader issuing plain SQL on one open connection."""

    def __init__(self, connection: Connection, case_insensitive: bool = False):
        """Initialize source reader.

        Args:
            connection: Open SQLAlchemy connection owned by the caller.
            case_insensitive: Build rows that match column names ignoring case.

        Raises:
            ValueError: Raised when connection is None.
        """

        if connection is None:
            raise ValueError("connection must not be None")

        self._connection = connection
        self._case_insensitive = case_insensitive

    def db_source_scan(self, table_name: str, filter_clause: str = "") -> Iterator[SourceRow]:
        """Yield rows of `SELECT * FROM <table> [<filter>]` in result order.

        Args:
            table_name: Source table name, optionally schema-qualified.
            filter_clause: Optional clause appended verbatim, e.g. `WHERE STATUS = 'A'`.

        Returns:
            Iterator[SourceRow]: Lazy, non-restartable row sequence.

        Raises:
            QueryError: Raised when the table name is invalid or the query fails.
        """

        normalized_table_name = db_validate_identifier(table_name, "table name", allow_schema=True)
        normalized_filter = (filter_clause or "").strip()
        query = f"SELECT * FROM {normalized_table_name}"
        if normalized_filter:
            query = f"{query} {normalized_filter}"
        return self._db_iter_rows(query)

    def db_child_rows(self, table_name: str, link_column_name: str, link_value: str | None) -> list[SourceRow]:
        """Return child rows whose link column equals the given value.

        Args:
            table_name: Child table name, optionally schema-qualified.
            link_column_name: Link column name.
            link_value: Parent correlation value bound as a parameter.

        Returns:
            list[SourceRow]: Matching child rows in query order.

        Raises:
            QueryError: Raised when a name is invalid or the query fails.
        """

        normalized_table_name = db_validate_identifier(table_name, "child table name", allow_schema=True)
        normalized_link_column = db_validate_identifier(link_column_name, "link column name")
        statement = text(
            f"SELECT * FROM {normalized_table_name} WHERE {normalized_link_column} = :link_value"
        ).bindparams(bindparam("link_value"))
        try:
            result = self._connection.execute(statement, {"link_value": link_value})
            column_names = tuple(result.keys())
            return [
                SourceRow(column_names=column_names, values=tuple(row), case_insensitive=self._case_insensitive)
                for row in result
            ]
        except SQLAlchemyError as error:
            raise QueryError(f"child query failed for table {normalized_table_name}: {error}") from error

    def _db_iter_rows(self, query: str) -> Iterator[SourceRow]:
        try:
            result = self._connection.execute(text(query))
        except SQLAlchemyError as error:
            raise QueryError(f"source query failed: {query}: {error}") from error

        column_names = tuple(result.keys())
        logger.info("source_scan_started", extra={"query": query, "column_count": len(column_names)})
        try:
            for row in result:
                yield SourceRow(column_names=column_names, values=tuple(row), case_insensitive=self._case_insensitive)
        except SQLAlchemyError as error:
            raise QueryError(f"source row fetch failed: {query}: {error}") from error
        finally:
            result.close()


class SQLAlchemySourceConnector:
    """Acquire one source reader per run from a database URL.

    Each run gets a fresh engine that is disposed on exit; connections are not
    reused across runs.
    """

    def __init__(self, engine_factory: Callable[[str], Engine] = db_create_engine):
        self._engine_factory = engine_factory

    @contextmanager
    def db_source_open(self, database_url: str, case_insensitive: bool = False) -> Iterator[SQLAlchemySourceTableReader]:
        """Open a reader bound to one exclusive connection.

        Args:
            database_url: Source database SQLAlchemy URL.
            case_insensitive: Match column names ignoring case.

        Returns:
            Iterator[SQLAlchemySourceTableReader]: Context-managed reader.

        Raises:
            ReconConnectionError: Raised when the source database is unreachable.
        """

        engine = self._engine_factory(database_url)
        try:
            with db_open_connection(engine) as connection:
                yield SQLAlchemySourceTableReader(connection=connection, case_insensitive=case_insensitive)
        finally:
            engine.dispose()

"""Lookup table reader for mapping definitions stored in the platform database."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Connection, Engine, text
from sqlalchemy.exc import SQLAlchemyError

from recon_feed.domain import LookupNotFoundError, QueryError

from .interfaces import LOOKUP_DEFINITION_TABLE, LOOKUP_VALUE_TABLE, LookupServicePort, LookupSessionPort
from .session import db_open_connection

logger = logging.getLogger(__name__)


class SQLAlchemyLookupSession(LookupSessionPort):
    """Lookup reads bound to one open platform database connection."""

    def __init__(self, connection: Connection):
        if connection is None:
            raise ValueError("connection must not be None")
        self._connection = connection

    def db_lookup_values(self, lookup_name: str) -> dict[str, str]:
        """Return code key to decode values of one lookup definition.

        A blank lookup name yields an empty map.

        Args:
            lookup_name: Lookup definition name.

        Returns:
            dict[str, str]: Code key to decode, ordered by code key.

        Raises:
            LookupNotFoundError: Raised when the lookup definition does not exist.
            QueryError: Raised when the lookup query fails.
        """

        normalized_name = (lookup_name or "").strip()
        if not normalized_name:
            return {}

        try:
            definition_row = self._connection.execute(
                text(f"SELECT lookup_name FROM {LOOKUP_DEFINITION_TABLE} WHERE lookup_name = :lookup_name"),
                {"lookup_name": normalized_name},
            ).fetchone()
            if definition_row is None:
                raise LookupNotFoundError(f"lookup definition {normalized_name!r} does not exist")

            value_rows = self._connection.execute(
                text(
                    f"SELECT code_key, decode FROM {LOOKUP_VALUE_TABLE} "
                    "WHERE lookup_name = :lookup_name ORDER BY code_key"
                ),
                {"lookup_name": normalized_name},
            ).mappings().fetchall()
        except SQLAlchemyError as error:
            raise QueryError(f"lookup read failed for {normalized_name!r}") from error

        lookup_values = {str(row["code_key"]): str(row["decode"] or "") for row in value_rows}
        logger.info("lookup_loaded", extra={"lookup_name": normalized_name, "entry_count": len(lookup_values)})
        return lookup_values


class SQLAlchemyLookupService(LookupServicePort):
    """Lookup service handing out one session per run."""

    def __init__(self, engine: Engine):
        """Initialize lookup service.

        Args:
            engine: Platform database engine holding the lookup tables.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    @contextmanager
    def db_lookup_session(self) -> Iterator[SQLAlchemyLookupSession]:
        """Open a lookup session released on every exit path.

        Raises:
            ReconConnectionError: Raised when the platform database is unreachable.
        """

        with db_open_connection(self._engine) as connection:
            yield SQLAlchemyLookupSession(connection=connection)

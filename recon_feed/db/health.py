"""Platform database readiness check over the mapping lookup tables."""

from __future__ import annotations

import time

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from recon_feed.domain import HealthStatus

from .interfaces import LOOKUP_DEFINITION_TABLE, LOOKUP_VALUE_TABLE, DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Readiness of the lookup tables every reconciliation run derives its mapping from."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Count lookup definitions and values in one short connection.

        Returns:
            HealthStatus: `ok` with table counts and round-trip time.

        Raises:
            ConnectionError: Raised when the database or a lookup table is unreachable.
        """

        started_at = time.perf_counter()
        try:
            with self._engine.connect() as connection:
                definition_count = connection.execute(text(f"SELECT COUNT(*) FROM {LOOKUP_DEFINITION_TABLE}")).scalar_one()
                value_count = connection.execute(text(f"SELECT COUNT(*) FROM {LOOKUP_VALUE_TABLE}")).scalar_one()
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error

        elapsed_ms = int((time.perf_counter() - started_at) * 1000)
        return HealthStatus(
            status="ok",
            detail=(
                f"database connectivity verified; {definition_count} lookup definitions, "
                f"{value_count} lookup values, {elapsed_ms} ms"
            ),
        )

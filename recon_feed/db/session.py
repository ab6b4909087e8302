"""Database engine and connection utilities.

This module centralizes database connectivity primitives to enforce the db-layer
boundary for all SQLAlchemy usage.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from recon_feed.domain import ReconConnectionError


def db_create_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for one database.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Engine: Configured SQLAlchemy engine.

    Raises:
        ValueError: Raised when the database URL is blank.
        ReconConnectionError: Raised when the URL cannot be parsed or the driver is unavailable.
    """

    if not database_url.strip():
        raise ValueError("database_url must not be blank")

    try:
        return create_engine(database_url, pool_pre_ping=True)
    except (ArgumentError, ImportError) as error:
        raise ReconConnectionError(f"cannot create engine for configured database: {error}") from error


@contextmanager
def db_open_connection(engine: Engine) -> Iterator[Connection]:
    """Open one exclusive connection and release it on every exit path.

    Args:
        engine: SQLAlchemy engine.

    Returns:
        Iterator[Connection]: Context-managed open connection.

    Raises:
        ReconConnectionError: Raised when the connection cannot be established.
    """

    try:
        connection = engine.connect()
    except SQLAlchemyError as error:
        raise ReconConnectionError(
            f"database connection failed for {engine.url.render_as_string(hide_password=True)}"
        ) from error

    try:
        yield connection
    finally:
        connection.close()

"""Shared SQLite fixtures for database-backed regression tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine, text

_SCHEMA_STATEMENTS = (
    "CREATE TABLE lookup_definition (lookup_name VARCHAR(255) PRIMARY KEY, description TEXT)",
    "CREATE TABLE lookup_value ("
    "lookup_value_id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "lookup_name VARCHAR(255) NOT NULL REFERENCES lookup_definition(lookup_name), "
    "code_key VARCHAR(255) NOT NULL, decode VARCHAR(1024) NOT NULL)",
    "CREATE TABLE USERS (USR_LOGIN TEXT, USR_EMAIL TEXT, USR_STATUS TEXT, USR_BADGE INTEGER)",
    "CREATE TABLE ENT_TABLE (USR_LOGIN TEXT, ENT_NAME TEXT, ENT_START TEXT)",
    "CREATE TABLE ROLE_TABLE (USR_LOGIN TEXT, ROLE_CODE TEXT)",
)

_SEED_STATEMENTS = (
    "INSERT INTO USERS VALUES ('jdoe', 'jdoe@x.com', 'A', 101)",
    "INSERT INTO USERS VALUES ('asmith', NULL, 'A', 102)",
    "INSERT INTO USERS VALUES ('bgone', 'bgone@x.com', 'D', 103)",
    "INSERT INTO ENT_TABLE VALUES ('jdoe', 'VPN', '2026-01-01')",
    "INSERT INTO ENT_TABLE VALUES ('jdoe', 'WIKI', '2026-02-01')",
    "INSERT INTO ENT_TABLE VALUES ('bgone', 'VPN', '2025-06-01')",
    "INSERT INTO ROLE_TABLE VALUES ('asmith', 'ADMIN')",
    "INSERT INTO lookup_definition (lookup_name) VALUES ('Lookup.USERS.ReconMap')",
    "INSERT INTO lookup_definition (lookup_name) VALUES ('Lookup.Empty')",
    "INSERT INTO lookup_value (lookup_name, code_key, decode) VALUES "
    "('Lookup.USERS.ReconMap', 'User ID', 'USR_LOGIN'), "
    "('Lookup.USERS.ReconMap', 'Email', 'USR_EMAIL'), "
    "('Lookup.USERS.ReconMap', 'IT Resource', '__SERVER__'), "
    "('Lookup.USERS.ReconMap', 'Entitlements~Name', 'ENT_TABLE~ENT_NAME'), "
    "('Lookup.USERS.ReconMap', 'Entitlements~Start Date', 'ENT_TABLE~ENT_START'), "
    "('Lookup.USERS.ReconMap', 'Roles~Code', 'ROLE_TABLE~ROLE_CODE')",
)


@pytest.fixture
def sqlite_database_url(tmp_path: Path) -> str:
    """Create a seeded SQLite database file and return its URL.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        str: SQLAlchemy URL of the seeded database.
    """

    database_url = f"sqlite:///{tmp_path / 'recon_source.db'}"
    engine = create_engine(database_url)
    try:
        with engine.begin() as connection:
            for statement in (*_SCHEMA_STATEMENTS, *_SEED_STATEMENTS):
                connection.execute(text(statement))
    finally:
        engine.dispose()
    return database_url


@pytest.fixture
def sqlite_engine(sqlite_database_url: str) -> Iterator[Engine]:
    """Return an engine bound to the seeded SQLite database."""

    engine = create_engine(sqlite_database_url)
    yield engine
    engine.dispose()

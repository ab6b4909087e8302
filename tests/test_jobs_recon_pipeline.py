"""Regression tests for the reconciliation event pipeline over SQLite tables."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest
from sqlalchemy import Engine

from recon_feed.db import SQLAlchemySourceTableReader
from recon_feed.domain import ColumnNotFoundError
from recon_feed.jobs import job_recon_build_events
from recon_feed.mapping import mapping_derive_recon_mapping


def test_job_recon_build_events_translates_scalar_rows(sqlite_engine: Engine) -> None:
    """Build one finished event per row from a scalar-only mapping.

    Args:
        sqlite_engine: Seeded SQLite engine fixture.

    Returns:
        None: Assertions validate translated events.

    Raises:
        AssertionError: Raised when events deviate from the mapped rows.
    """

    derived_mapping = mapping_derive_recon_mapping({"User ID": "USR_LOGIN", "Email": "USR_EMAIL"})

    with sqlite_engine.connect() as connection:
        events = job_recon_build_events(
            source_reader=SQLAlchemySourceTableReader(connection=connection),
            derived_mapping=derived_mapping,
            table_name="USERS",
            filter_clause="WHERE USR_LOGIN = 'jdoe'",
        )

    assert len(events) == 1
    assert events[0].attributes == {"User ID": "jdoe", "Email": "jdoe@x.com"}
    assert events[0].finished is True
    assert events[0].children == {}


def test_job_recon_build_events_joins_child_groups(sqlite_engine: Engine) -> None:
    """Attach renamed child records of every group to each parent event.

    Args:
        sqlite_engine: Seeded SQLite engine fixture.

    Returns:
        None: Assertions validate joined children and event flags.

    Raises:
        AssertionError: Raised when child records are missing or misassigned.
    """

    derived_mapping = mapping_derive_recon_mapping(
        {
            "Entitlements~Name": "ENT_TABLE~ENT_NAME",
            "Entitlements~Start Date": "ENT_TABLE~ENT_START",
            "Roles~Code": "ROLE_TABLE~ROLE_CODE",
            "User ID": "USR_LOGIN",
            "IT Resource": "__SERVER__",
        }
    )
    action_date = datetime(2026, 10, 20, tzinfo=timezone.utc)

    with sqlite_engine.connect() as connection:
        events = job_recon_build_events(
            source_reader=SQLAlchemySourceTableReader(connection=connection),
            derived_mapping=derived_mapping,
            table_name="USERS",
            filter_clause="ORDER BY USR_LOGIN",
            it_resource_name="Badge Server",
            link_column_name="USR_LOGIN",
            action_date=action_date,
        )

    events_by_login = {event.attributes["User ID"]: event for event in events}
    assert list(events_by_login) == ["asmith", "bgone", "jdoe"]
    assert sorted(events_by_login["jdoe"].children["Entitlements"], key=lambda record: record["Name"]) == [
        {"Name": "VPN", "Start Date": "2026-01-01"},
        {"Name": "WIKI", "Start Date": "2026-02-01"},
    ]
    assert events_by_login["jdoe"].children["Roles"] == ()
    assert events_by_login["asmith"].children == {"Entitlements": (), "Roles": ({"Code": "ADMIN"},)}
    assert all(event.attributes["IT Resource"] == "Badge Server" for event in events)
    assert all(event.finished is False for event in events)
    assert all(event.action_date == action_date for event in events)


def test_job_recon_build_events_identity_mode_skips_child_join(
    sqlite_engine: Engine,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Copy row columns verbatim and skip child groups when no scalar mapping exists."""

    derived_mapping = mapping_derive_recon_mapping({"Entitlements~Name": "ENT_TABLE~ENT_NAME"})

    with caplog.at_level(logging.WARNING, logger="recon_feed.jobs.recon_pipeline"):
        with sqlite_engine.connect() as connection:
            events = job_recon_build_events(
                source_reader=SQLAlchemySourceTableReader(connection=connection),
                derived_mapping=derived_mapping,
                table_name="USERS",
                link_column_name="USR_LOGIN",
            )

    assert len(events) == 3
    assert events[0].attributes == {
        "USR_LOGIN": "jdoe",
        "USR_EMAIL": "jdoe@x.com",
        "USR_STATUS": "A",
        "USR_BADGE": "101",
    }
    assert all(event.children == {} and event.finished is True for event in events)
    assert "child_groups_not_joined" in caplog.messages


def test_job_recon_build_events_without_link_column_leaves_children_unjoined(sqlite_engine: Engine) -> None:
    """Build finished events without children when no link column is configured."""

    derived_mapping = mapping_derive_recon_mapping({"User ID": "USR_LOGIN", "Roles~Code": "ROLE_TABLE~ROLE_CODE"})

    with sqlite_engine.connect() as connection:
        events = job_recon_build_events(
            source_reader=SQLAlchemySourceTableReader(connection=connection),
            derived_mapping=derived_mapping,
            table_name="USERS",
        )

    assert [event.attributes for event in events] == [{"User ID": "jdoe"}, {"User ID": "asmith"}, {"User ID": "bgone"}]
    assert all(event.finished is True and event.children == {} for event in events)


def test_job_recon_build_events_raises_for_unknown_mapped_column(sqlite_engine: Engine) -> None:
    """Abort the build when a mapped column is absent from the scan."""

    derived_mapping = mapping_derive_recon_mapping({"Phone": "USR_PHONE"})

    with sqlite_engine.connect() as connection:
        with pytest.raises(ColumnNotFoundError, match="USR_PHONE"):
            job_recon_build_events(
                source_reader=SQLAlchemySourceTableReader(connection=connection),
                derived_mapping=derived_mapping,
                table_name="USERS",
            )

"""Regression tests for runtime and reconciliation run settings."""

from __future__ import annotations

from datetime import datetime

import pytest

from recon_feed.bootstrap import bootstrap_build_run_config
from recon_feed.config import (
    AppSettings,
    config_load_run_settings,
    config_load_settings,
    config_resolve_data_source_url,
)
from recon_feed.domain import ConfigurationError


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run every test without a dotenv file and without RECON_ variables."""

    monkeypatch.chdir(tmp_path)
    for name in (
        "RECON_DATA_SOURCE",
        "RECON_RESOURCE_OBJECT_NAME",
        "RECON_TABLE_NAME",
        "RECON_MAPPING_LOOKUP",
        "RECON_LINK_COLUMN_NAME",
        "LOG_LEVEL",
        "DATA_SOURCES",
    ):
        monkeypatch.delenv(name, raising=False)


def test_config_load_run_settings_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load run options from RECON_ variables with defaults applied.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate loaded options.

    Raises:
        AssertionError: Raised when options or defaults are wrong.
    """

    monkeypatch.setenv("RECON_RESOURCE_OBJECT_NAME", "Badge Users")
    monkeypatch.setenv("RECON_TABLE_NAME", " USERS ")
    monkeypatch.setenv("RECON_LINK_COLUMN_NAME", "  ")

    run_settings = config_load_run_settings()

    assert run_settings.resource_object_name == "Badge Users"
    assert run_settings.table_name == "USERS"
    assert run_settings.data_source == "default"
    assert run_settings.date_format == "yyyy-MM-dd"
    assert run_settings.mapping_lookup == ""
    assert run_settings.link_column_name is None
    assert run_settings.ignore_duplicate_event is False


def test_config_load_run_settings_prefers_explicit_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let non-None overrides win over environment values."""

    monkeypatch.setenv("RECON_RESOURCE_OBJECT_NAME", "Badge Users")
    monkeypatch.setenv("RECON_TABLE_NAME", "USERS")

    run_settings = config_load_run_settings(
        table_name="HR.USERS",
        mapping_lookup=None,
        action_date="2026-10-20T06:00:00",
    )

    assert run_settings.table_name == "HR.USERS"
    assert run_settings.mapping_lookup == ""
    assert run_settings.action_date == datetime(2026, 10, 20, 6, 0)


def test_config_load_run_settings_wraps_missing_options() -> None:
    """Raise ConfigurationError when required run options are missing."""

    with pytest.raises(ConfigurationError, match="run configuration validation failed"):
        config_load_run_settings(resource_object_name="Badge Users")


def test_config_load_settings_wraps_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise ConfigurationError for an unsupported log level."""

    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_resolve_data_source_url_uses_named_sources() -> None:
    """Resolve named sources and fall back to the platform URL for the default name.

    Returns:
        None: Assertions validate data source resolution.

    Raises:
        AssertionError: Raised when names resolve incorrectly.
    """

    settings = AppSettings(database_url="sqlite:///platform.db", data_sources={"hr": " sqlite:///hr.db "})

    assert config_resolve_data_source_url(settings, "hr") == "sqlite:///hr.db"
    assert config_resolve_data_source_url(settings, "default") == "sqlite:///platform.db"
    with pytest.raises(ConfigurationError, match="unknown data source 'crm'"):
        config_resolve_data_source_url(settings, "crm")


def test_bootstrap_build_run_config_resolves_source_url() -> None:
    """Build the orchestrator config from validated settings."""

    settings = AppSettings(database_url="sqlite:///platform.db", data_sources={"hr": "sqlite:///hr.db"})
    run_settings = config_load_run_settings(
        data_source="hr",
        resource_object_name="Badge Users",
        table_name="USERS",
        link_column_name="USR_LOGIN",
    )

    run_config = bootstrap_build_run_config(settings, run_settings)

    assert run_config.data_source_url == "sqlite:///hr.db"
    assert run_config.link_column_name == "USR_LOGIN"
    assert run_config.column_match_case_insensitive is False

"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy import Engine

from recon_feed.adapters import ReconWebServiceAdapter
from recon_feed.api import create_api_application
from recon_feed.config import (
    AppSettings,
    ReconRunSettings,
    config_load_run_settings,
    config_load_settings,
    config_resolve_data_source_url,
)
from recon_feed.db import (
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyLookupService,
    SQLAlchemySourceConnector,
    db_create_engine,
)
from recon_feed.jobs import DeferredReconJobOrchestrator, ReconEventsJobOrchestrator, ReconRunConfig


def bootstrap_build_run_config(settings: AppSettings, run_settings: ReconRunSettings) -> ReconRunConfig:
    """Resolve run options into the orchestrator configuration.

    Args:
        settings: Runtime settings holding named data sources.
        run_settings: Validated run options.

    Returns:
        ReconRunConfig: Orchestrator configuration.

    Raises:
        ConfigurationError: Raised when the data source name is unknown.
    """

    return ReconRunConfig(
        data_source_url=config_resolve_data_source_url(settings, run_settings.data_source),
        resource_object_name=run_settings.resource_object_name,
        table_name=run_settings.table_name,
        filter_clause=run_settings.filter_clause,
        date_format=run_settings.date_format,
        ignore_duplicate_event=run_settings.ignore_duplicate_event,
        mapping_lookup=run_settings.mapping_lookup,
        it_resource_name=run_settings.it_resource_name,
        link_column_name=run_settings.link_column_name,
        action_date=run_settings.action_date,
        column_match_case_insensitive=run_settings.column_match_case_insensitive,
    )


def bootstrap_create_recon_orchestrator(
    settings: AppSettings | None = None,
    platform_engine: Engine | None = None,
    **run_overrides: object,
) -> ReconEventsJobOrchestrator:
    """Build the reconciliation orchestrator for any trigger surface.

    Args:
        settings: Optional preloaded runtime settings.
        platform_engine: Optional shared engine for the lookup tables; created when omitted.
        run_overrides: Explicit run option values taking precedence over the environment.

    Returns:
        ReconEventsJobOrchestrator: Fully wired orchestrator instance.

    Raises:
        ConfigurationError: Raised when runtime or run configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    run_settings = config_load_run_settings(**run_overrides)
    if platform_engine is None:
        platform_engine = db_create_engine(database_url=resolved_settings.database_url)
    return ReconEventsJobOrchestrator(
        source_connector=SQLAlchemySourceConnector(),
        lookup_service=SQLAlchemyLookupService(engine=platform_engine),
        submission_adapter=ReconWebServiceAdapter(
            base_url=resolved_settings.recon_service_base_url,
            token=resolved_settings.recon_service_token,
            timeout_seconds=resolved_settings.recon_service_timeout_seconds,
        ),
        config=bootstrap_build_run_config(resolved_settings, run_settings),
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Run options are resolved per `POST /recon/run`, so the API starts without them.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        ConfigurationError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    platform_engine = db_create_engine(database_url=settings.database_url)
    return create_api_application(
        settings=settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=platform_engine),
        recon_orchestrator=DeferredReconJobOrchestrator(
            lambda: bootstrap_create_recon_orchestrator(settings=settings, platform_engine=platform_engine)
        ),
    )

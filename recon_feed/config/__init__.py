"""Configuration package for runtime settings, run options and logging."""

from .logging_setup import StructuredFormatter, config_configure_logging
from .settings import (
	DEFAULT_DATA_SOURCE_NAME,
	DEFAULT_DATE_FORMAT,
	AppSettings,
	ReconRunSettings,
	config_load_database_url,
	config_load_run_settings,
	config_load_settings,
	config_resolve_data_source_url,
)

__all__ = [
	"AppSettings",
	"DEFAULT_DATA_SOURCE_NAME",
	"DEFAULT_DATE_FORMAT",
	"ReconRunSettings",
	"StructuredFormatter",
	"config_configure_logging",
	"config_load_database_url",
	"config_load_run_settings",
	"config_load_settings",
	"config_resolve_data_source_url",
]

"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	LOOKUP_DEFINITION_TABLE,
	LOOKUP_VALUE_TABLE,
	DatabaseHealthPort,
	LookupServicePort,
	LookupSessionPort,
	SourceConnectorPort,
	SourceTableReaderPort,
)
from .lookup import SQLAlchemyLookupService, SQLAlchemyLookupSession
from .session import db_create_engine, db_open_connection
from .source_reader import SQLAlchemySourceConnector, SQLAlchemySourceTableReader, db_validate_identifier

__all__ = [
	"DatabaseHealthPort",
	"LOOKUP_DEFINITION_TABLE",
	"LOOKUP_VALUE_TABLE",
	"LookupServicePort",
	"LookupSessionPort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyLookupService",
	"SQLAlchemyLookupSession",
	"SQLAlchemySourceConnector",
	"SQLAlchemySourceTableReader",
	"SourceConnectorPort",
	"SourceTableReaderPort",
	"db_create_engine",
	"db_open_connection",
	"db_validate_identifier",
]

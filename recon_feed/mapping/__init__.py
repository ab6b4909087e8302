"""Mapping layer package for row-to-event transformation boundaries."""

from .assembler import ReconEventAssembler
from .child_join import mapping_fetch_child_records
from .derivation import mapping_derive_recon_mapping, mapping_parse_entry
from .extraction import mapping_iter_event_attributes, mapping_translate_source_row
from .interfaces import (
	MAPPING_DELIMITER,
	SERVER_SENTINEL,
	ChildGroupMapping,
	ChildMappingEntry,
	ChildRowReaderPort,
	DerivedReconMapping,
	ScalarMappingEntry,
	SourceRow,
	mapping_coerce_text,
)

__all__ = [
	"MAPPING_DELIMITER",
	"SERVER_SENTINEL",
	"ChildGroupMapping",
	"ChildMappingEntry",
	"ChildRowReaderPort",
	"DerivedReconMapping",
	"ReconEventAssembler",
	"ScalarMappingEntry",
	"SourceRow",
	"mapping_coerce_text",
	"mapping_derive_recon_mapping",
	"mapping_fetch_child_records",
	"mapping_iter_event_attributes",
	"mapping_parse_entry",
	"mapping_translate_source_row",
]

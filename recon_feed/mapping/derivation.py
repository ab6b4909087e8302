"""Mapping derivation from one flat lookup table into scalar and child mappings."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from recon_feed.domain import MappingFormatError

from .interfaces import (
    MAPPING_DELIMITER,
    SERVER_SENTINEL,
    ChildGroupMapping,
    ChildMappingEntry,
    DerivedReconMapping,
    ScalarMappingEntry,
)


def mapping_parse_entry(key: str, value: str) -> ScalarMappingEntry | ChildMappingEntry:
    """Parse one lookup entry into its scalar or child variant.

    A key containing the delimiter marks a child entry: `<group>~<field>` mapped
    to `<table>~<column>`. Any other key is a scalar entry kept verbatim.

    Args:
        key: Lookup code key.
        value: Lookup decode value.

    Returns:
        ScalarMappingEntry | ChildMappingEntry: Parsed entry.

    Raises:
        MappingFormatError: Raised when a child entry does not split into exactly two non-empty segments.
    """

    if MAPPING_DELIMITER not in key:
        return ScalarMappingEntry(field_name=key, source_column=value)

    group_name, field_name = _mapping_split_pair(key, label="key", key=key)
    table_name, column_name = _mapping_split_pair(value or "", label="value", key=key)
    if column_name == SERVER_SENTINEL:
        raise MappingFormatError(f"child mapping {key!r} must not reference {SERVER_SENTINEL}")
    return ChildMappingEntry(
        group_name=group_name,
        field_name=field_name,
        table_name=table_name,
        column_name=column_name,
    )


def mapping_derive_recon_mapping(raw_mapping: Mapping[str, str]) -> DerivedReconMapping:
    """Split a flat lookup map into read-only scalar and child group mappings.

    The caller's map is left untouched.

    Args:
        raw_mapping: Lookup code key to decode value.

    Returns:
        DerivedReconMapping: Scalar attribute mapping and child groups.

    Raises:
        MappingFormatError: Raised when a child entry is malformed or a group names two tables.
    """

    attribute_mapping: dict[str, str] = {}
    group_tables: dict[str, str] = {}
    group_fields: dict[str, dict[str, str]] = {}

    for key, value in raw_mapping.items():
        entry = mapping_parse_entry(key, value)
        if isinstance(entry, ScalarMappingEntry):
            attribute_mapping[entry.field_name] = entry.source_column
            continue

        known_table = group_tables.setdefault(entry.group_name, entry.table_name)
        if known_table != entry.table_name:
            raise MappingFormatError(
                f"child group {entry.group_name!r} maps to both {known_table!r} and {entry.table_name!r}"
            )
        group_fields.setdefault(entry.group_name, {})[entry.field_name] = entry.column_name

    child_groups = {
        group_name: ChildGroupMapping(
            table_name=group_tables[group_name],
            fields=MappingProxyType(fields),
        )
        for group_name, fields in group_fields.items()
    }
    return DerivedReconMapping(
        attribute_mapping=MappingProxyType(attribute_mapping),
        child_groups=MappingProxyType(child_groups),
    )


def _mapping_split_pair(text: str, label: str, key: str) -> tuple[str, str]:
    segments = text.split(MAPPING_DELIMITER)
    # Segments are kept verbatim; only empty or blank ones are rejected.
    if len(segments) != 2 or not segments[0].strip() or not segments[1].strip():
        raise MappingFormatError(
            f"malformed child mapping {label} {text!r} for key {key!r}: "
            f"expected exactly two non-empty segments separated by {MAPPING_DELIMITER!r}"
        )
    return segments[0], segments[1]

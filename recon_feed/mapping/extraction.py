"""Record extraction from source rows into scalar reconciliation attributes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from recon_feed.domain import EventAttributes

from .interfaces import SERVER_SENTINEL, SourceRow


def mapping_translate_source_row(
    row: SourceRow,
    attribute_mapping: Mapping[str, str],
    it_resource_name: str | None,
) -> EventAttributes:
    """Build the scalar attribute record for one source row.

    With a non-empty mapping each reconciliation field reads its mapped column,
    or receives the resource instance identifier when mapped to the server
    sentinel. With an empty mapping every column is copied under its own name.

    Args:
        row: Source row.
        attribute_mapping: Reconciliation field name to source column or sentinel.
        it_resource_name: Resource instance identifier for sentinel fields.

    Returns:
        EventAttributes: Field name to text value.

    Raises:
        ColumnNotFoundError: Raised when a mapped column is absent from the row.
    """

    if not attribute_mapping:
        return dict(row.source_row_items())

    attributes: EventAttributes = {}
    for field_name, source_column in attribute_mapping.items():
        if source_column == SERVER_SENTINEL:
            attributes[field_name] = it_resource_name
        else:
            attributes[field_name] = row.source_row_text(source_column)
    return attributes


def mapping_iter_event_attributes(
    rows: Iterable[SourceRow],
    attribute_mapping: Mapping[str, str],
    it_resource_name: str | None,
) -> Iterator[EventAttributes]:
    """Lazily translate source rows in cursor order.

    Args:
        rows: Source rows from one scan.
        attribute_mapping: Reconciliation field name to source column or sentinel.
        it_resource_name: Resource instance identifier for sentinel fields.

    Returns:
        Iterator[EventAttributes]: One record per row.

    Raises:
        ColumnNotFoundError: Raised when a mapped column is absent from a row.
    """

    for row in rows:
        yield mapping_translate_source_row(row, attribute_mapping, it_resource_name)

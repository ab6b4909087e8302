"""Reconciliation event pipeline over one source table scan."""

from __future__ import annotations

import logging
from datetime import datetime

from recon_feed.db import SourceTableReaderPort
from recon_feed.domain import ReconciliationEvent
from recon_feed.mapping import (
    DerivedReconMapping,
    ReconEventAssembler,
    mapping_fetch_child_records,
    mapping_iter_event_attributes,
    mapping_translate_source_row,
)

logger = logging.getLogger(__name__)


def job_recon_build_events(
    source_reader: SourceTableReaderPort,
    derived_mapping: DerivedReconMapping,
    table_name: str,
    filter_clause: str = "",
    it_resource_name: str | None = None,
    link_column_name: str | None = None,
    action_date: datetime | None = None,
) -> tuple[ReconciliationEvent, ...]:
    """Scan the source table and assemble one event per row.

    Child groups are joined only in translated mode and only when a link
    column is configured.

    Args:
        source_reader: Reader bound to the run's source connection.
        derived_mapping: Scalar attribute mapping and child groups.
        table_name: Source table name.
        filter_clause: Optional clause appended to the scan query.
        it_resource_name: Resource instance identifier for sentinel fields.
        link_column_name: Column relating parent rows to child rows.
        action_date: Optional deferred processing timestamp.

    Returns:
        tuple[ReconciliationEvent, ...]: Events in source row order.

    Raises:
        QueryError: Raised when the source or a child query fails.
        ColumnNotFoundError: Raised when a mapped column is absent.
    """

    attribute_mapping = derived_mapping.attribute_mapping
    child_groups = derived_mapping.child_groups
    join_children = bool(attribute_mapping) and bool(child_groups) and link_column_name is not None

    if child_groups and not join_children:
        logger.warning(
            "child_groups_not_joined",
            extra={
                "group_names": sorted(child_groups),
                "identity_mode": not attribute_mapping,
                "link_column_configured": link_column_name is not None,
            },
        )

    assembler = ReconEventAssembler(child_groups_configured=join_children, action_date=action_date)
    source_rows = source_reader.db_source_scan(table_name=table_name, filter_clause=filter_clause)

    if not join_children:
        for attributes in mapping_iter_event_attributes(source_rows, attribute_mapping, it_resource_name):
            assembler.assembler_append(attributes)
        return assembler.assembler_events()

    for source_row in source_rows:
        attributes = mapping_translate_source_row(source_row, attribute_mapping, it_resource_name)
        children = mapping_fetch_child_records(
            child_row_reader=source_reader,
            child_groups=child_groups,
            link_column_name=link_column_name,
            link_value=source_row.source_row_text(link_column_name),
        )
        assembler.assembler_append(attributes, children)
    return assembler.assembler_events()

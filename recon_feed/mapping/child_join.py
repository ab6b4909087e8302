"""Child data joiner for multivalued reconciliation groups."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from recon_feed.domain import ChildRecord, ChildRecordSet

from .interfaces import ChildGroupMapping, ChildRowReaderPort

logger = logging.getLogger(__name__)


def mapping_fetch_child_records(
    child_row_reader: ChildRowReaderPort,
    child_groups: Mapping[str, ChildGroupMapping],
    link_column_name: str,
    link_value: str | None,
) -> ChildRecordSet:
    """Fetch and field-rename child rows of every configured group for one parent.

    Every group is queried; a failure in any group propagates and fails the row.

    Args:
        child_row_reader: Reader issuing the parameterized child queries.
        child_groups: Group name to child group mapping.
        link_column_name: Link column filtered on in every child table.
        link_value: Parent row correlation value.

    Returns:
        ChildRecordSet: Group name to ordered child records.

    Raises:
        QueryError: Raised when a child query fails.
        ColumnNotFoundError: Raised when a mapped child column is absent.
    """

    child_records: ChildRecordSet = {}
    for group_name, group in child_groups.items():
        child_rows = child_row_reader.db_child_rows(
            table_name=group.table_name,
            link_column_name=link_column_name,
            link_value=link_value,
        )
        records: list[ChildRecord] = []
        for child_row in child_rows:
            records.append(
                {field_name: child_row.source_row_text(column_name) for field_name, column_name in group.fields.items()}
            )
        child_records[group_name] = tuple(records)
        logger.debug(
            "child_group_fetched",
            extra={"group_name": group_name, "table_name": group.table_name, "child_record_count": len(records)},
        )
    return child_records

"""Typed interfaces for mapping-layer transformations."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol

from recon_feed.domain import ColumnNotFoundError, QueryError

MAPPING_DELIMITER = "~"
SERVER_SENTINEL = "__SERVER__"


@dataclass(frozen=True)
class ScalarMappingEntry:
    """Scalar lookup entry correlating one reconciliation field to one source column.

    Attributes:
        field_name: Reconciliation field name.
        source_column: Source column name or the server sentinel.
    """

    field_name: str
    source_column: str


@dataclass(frozen=True)
class ChildMappingEntry:
    """Composite lookup entry correlating one child field to one child table column.

    Attributes:
        group_name: Multivalued (child) reconciliation group name.
        field_name: Child reconciliation field name.
        table_name: Child table name.
        column_name: Child table column name.
    """

    group_name: str
    field_name: str
    table_name: str
    column_name: str


@dataclass(frozen=True)
class ChildGroupMapping:
    """Target table and field correspondence for one multivalued group.

    Attributes:
        table_name: Child table queried for the group's rows.
        fields: Child field name to child column name.
    """

    table_name: str
    fields: Mapping[str, str]


@dataclass(frozen=True)
class DerivedReconMapping:
    """Read-only mapping pair derived once per run from a lookup table.

    Attributes:
        attribute_mapping: Reconciliation field name to source column or sentinel.
        child_groups: Group name to child group mapping.
    """

    attribute_mapping: Mapping[str, str]
    child_groups: Mapping[str, ChildGroupMapping]


def mapping_coerce_text(value: object) -> str | None:
    """Coerce one database value to text, preserving None.

    Args:
        value: Raw driver value.

    Returns:
        str | None: Text rendering of the value.
    """

    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


@dataclass(frozen=True)
class SourceRow:
    """One row of a query result with its result-shape column names.

    Attributes:
        column_names: Column names in result-shape order.
        values: Column values aligned with `column_names`.
        case_insensitive: Match requested names ignoring case.
    """

    column_names: tuple[str, ...]
    values: tuple[object, ...]
    case_insensitive: bool = False

    def source_row_value(self, column_name: str) -> object:
        """Return the raw value of one column.

        Args:
            column_name: Requested column name.

        Returns:
            object: Raw driver value.

        Raises:
            ColumnNotFoundError: Raised when the column is absent or ambiguous.
        """

        if column_name in self.column_names:
            return self.values[self.column_names.index(column_name)]

        if self.case_insensitive:
            folded_name = column_name.casefold()
            matches = [index for index, name in enumerate(self.column_names) if name.casefold() == folded_name]
            if len(matches) == 1:
                return self.values[matches[0]]
            if len(matches) > 1:
                raise ColumnNotFoundError(
                    f"column {column_name!r} is ambiguous when ignoring case",
                    column_name=column_name,
                    available_columns=self.column_names,
                )

        raise ColumnNotFoundError(
            f"column {column_name!r} not found in result; available: {', '.join(self.column_names)}",
            column_name=column_name,
            available_columns=self.column_names,
        )

    def source_row_text(self, column_name: str) -> str | None:
        """Return one column value coerced to text.

        Raises:
            ColumnNotFoundError: Raised when the column is absent or ambiguous.
            QueryError: Raised when a binary value is not valid UTF-8.
        """

        return _mapping_column_text(column_name, self.source_row_value(column_name))

    def source_row_items(self) -> Iterator[tuple[str, str | None]]:
        """Yield (column name, text value) pairs in result-shape order."""

        for column_name, value in zip(self.column_names, self.values):
            yield column_name, _mapping_column_text(column_name, value)


def _mapping_column_text(column_name: str, value: object) -> str | None:
    try:
        return mapping_coerce_text(value)
    except UnicodeDecodeError as error:
        raise QueryError(f"column {column_name!r} holds binary data that is not valid UTF-8") from error


class ChildRowReaderPort(Protocol):
    """Port for reading child table rows related to one parent row."""

    def db_child_rows(self, table_name: str, link_column_name: str, link_value: str | None) -> list[SourceRow]:
        """Return child rows whose link column equals the given value.

        Args:
            table_name: Child table name.
            link_column_name: Link column name.
            link_value: Parent correlation value.

        Returns:
            list[SourceRow]: Matching child rows in query order.

        Raises:
            QueryError: Raised when the query is malformed or fails.
        """

"""Regression tests for source row translation into scalar event attributes."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from recon_feed.domain import ColumnNotFoundError, QueryError
from recon_feed.mapping import (
    SourceRow,
    mapping_coerce_text,
    mapping_iter_event_attributes,
    mapping_translate_source_row,
)


def _build_user_row(**overrides: object) -> SourceRow:
    """Build one USERS row with optional column value overrides."""

    values = {"USR_LOGIN": "jdoe", "USR_EMAIL": "jdoe@x.com"}
    values.update(overrides)
    return SourceRow(column_names=tuple(values), values=tuple(values.values()))


def test_mapping_translate_renames_mapped_columns() -> None:
    """Translate one row through the scalar mapping.

    Returns:
        None: Assertions validate translated attributes.

    Raises:
        AssertionError: Raised when field names or values are wrong.
    """

    attributes = mapping_translate_source_row(
        _build_user_row(),
        {"User ID": "USR_LOGIN", "Email": "USR_EMAIL"},
        it_resource_name=None,
    )

    assert attributes == {"User ID": "jdoe", "Email": "jdoe@x.com"}


def test_mapping_translate_identity_mode_copies_row_columns() -> None:
    """Copy every column under its own name when the mapping is empty."""

    row = _build_user_row(USR_STATUS=None)

    attributes = mapping_translate_source_row(row, {}, it_resource_name="ignored")

    assert attributes == {"USR_LOGIN": "jdoe", "USR_EMAIL": "jdoe@x.com", "USR_STATUS": None}
    assert list(attributes) == list(row.column_names)


def test_mapping_translate_substitutes_server_sentinel() -> None:
    """Use the resource instance identifier even when a column is named like the sentinel.

    Returns:
        None: Assertions validate sentinel substitution.

    Raises:
        AssertionError: Raised when the column value leaks into the record.
    """

    row = _build_user_row(__SERVER__="column-value")

    attributes = mapping_translate_source_row(
        row,
        {"User ID": "USR_LOGIN", "IT Resource": "__SERVER__"},
        it_resource_name="Badge Server",
    )

    assert attributes["IT Resource"] == "Badge Server"


def test_mapping_translate_preserves_nulls() -> None:
    """Keep NULL column values as None."""

    attributes = mapping_translate_source_row(_build_user_row(USR_EMAIL=None), {"Email": "USR_EMAIL"}, None)

    assert attributes == {"Email": None}


def test_mapping_translate_raises_for_absent_column() -> None:
    """Abort with ColumnNotFoundError when a mapped column is not in the result shape.

    Returns:
        None: Assertions validate fail-fast behavior.

    Raises:
        AssertionError: Raised when the missing column is tolerated.
    """

    with pytest.raises(ColumnNotFoundError) as error_info:
        mapping_translate_source_row(_build_user_row(), {"Phone": "USR_PHONE"}, None)

    assert error_info.value.column_name == "USR_PHONE"
    assert error_info.value.available_columns == ("USR_LOGIN", "USR_EMAIL")


def test_mapping_translate_matches_exact_case_by_default() -> None:
    """Treat differently cased column names as absent unless case folding is enabled."""

    lowercase_row = SourceRow(column_names=("usr_login",), values=("jdoe",))
    folding_row = SourceRow(column_names=("usr_login",), values=("jdoe",), case_insensitive=True)

    with pytest.raises(ColumnNotFoundError):
        mapping_translate_source_row(lowercase_row, {"User ID": "USR_LOGIN"}, None)
    assert mapping_translate_source_row(folding_row, {"User ID": "USR_LOGIN"}, None) == {"User ID": "jdoe"}


def test_mapping_translate_rejects_ambiguous_case_folded_column() -> None:
    """Reject a case-folded lookup matching two columns."""

    row = SourceRow(column_names=("Login", "LOGIN"), values=("a", "b"), case_insensitive=True)

    with pytest.raises(ColumnNotFoundError, match="ambiguous"):
        row.source_row_value("login")


def test_mapping_coerce_text_renders_driver_values() -> None:
    """Render common driver value types as text."""

    assert mapping_coerce_text(None) is None
    assert mapping_coerce_text("x") == "x"
    assert mapping_coerce_text(101) == "101"
    assert mapping_coerce_text(Decimal("12.50")) == "12.50"
    assert mapping_coerce_text(True) == "true"
    assert mapping_coerce_text(date(2026, 1, 31)) == "2026-01-31"
    assert mapping_coerce_text(datetime(2026, 1, 31, 8, 30)) == "2026-01-31T08:30:00"
    assert mapping_coerce_text(b"abc") == "abc"


def test_mapping_iter_event_attributes_is_lazy_and_ordered() -> None:
    """Yield one record per row in row order without consuming rows up front.

    Returns:
        None: Assertions validate lazy ordered iteration.

    Raises:
        AssertionError: Raised when rows are consumed eagerly or reordered.
    """

    consumed: list[str] = []

    def _rows():
        for login in ("a", "b", "c"):
            consumed.append(login)
            yield SourceRow(column_names=("USR_LOGIN",), values=(login,))

    records = mapping_iter_event_attributes(_rows(), {"User ID": "USR_LOGIN"}, None)

    assert consumed == []
    assert next(records) == {"User ID": "a"}
    assert consumed == ["a"]
    assert [record["User ID"] for record in records] == ["b", "c"]


def test_mapping_iter_event_attributes_yields_nothing_for_empty_scan() -> None:
    """Yield no records for an empty result."""

    assert list(mapping_iter_event_attributes(iter(()), {"User ID": "USR_LOGIN"}, None)) == []


def test_mapping_translate_rejects_undecodable_binary_column() -> None:
    """Raise QueryError naming the column when binary data is not UTF-8."""

    row = SourceRow(column_names=("USR_LOGIN", "USR_PHOTO"), values=("jdoe", b"\xff\xfe"))

    with pytest.raises(QueryError, match="USR_PHOTO"):
        mapping_translate_source_row(row, {"Photo": "USR_PHOTO"}, None)
    with pytest.raises(QueryError, match="USR_PHOTO"):
        mapping_translate_source_row(row, {}, None)

"""Tests for column normalization."""
import pytest
from pydantic import ValidationError

from schema_robomonkey.db_introspect.columns import (
    extract_length,
    keys_to_lower,
    normalize_column,
    normalize_columns,
    strip_length,
)
from conftest import show_columns_row


@pytest.mark.parametrize("type_string, base, length", [
    ("varchar(255)", "varchar", 255),
    ("int(11)", "int", 11),
    ("text", "text", 0),
    ("character varying(64)", "character varying", 64),
    ("timestamp(3) without time zone", "timestamp", 3),
])
def test_type_decomposition(type_string, base, length):
    assert strip_length(type_string) == base
    assert extract_length(type_string) == length


def test_extract_length_concatenates_every_digit():
    """Digits outside the parentheses are kept too."""
    assert extract_length("numeric(10,2)") == 102
    assert extract_length("int4") == 4
    assert strip_length("numeric(10,2)") == "numeric"


def test_keys_to_lower_copies_row():
    row = {"Field": "id", "TYPE": "int"}
    lowered = keys_to_lower(row)
    assert lowered == {"field": "id", "type": "int"}
    assert row == {"Field": "id", "TYPE": "int"}


def test_normalize_column_computed_fields():
    column = normalize_column(show_columns_row("id", "int(11)", key="PRI"), 0)
    assert column.field == "id"
    assert column.type == "int"
    assert column.length == 11
    assert column.is_primary is True
    assert column.index == 0


def test_normalize_column_preserves_raw_attributes():
    row = show_columns_row("email", "varchar(120)", key="UNI", Comment="login")
    dumped = normalize_column(row, 3).model_dump(by_alias=True)

    expected_keys = {key.lower() for key in row} | {"length", "isPrimary", "index"}
    assert set(dumped) == expected_keys
    assert dumped["null"] == "YES"
    assert dumped["comment"] == "login"
    assert dumped["key"] == "UNI"


@pytest.mark.parametrize("key", ["pri", "Pri", "PRI ", "UNI", "MUL", "", None])
def test_is_primary_requires_exact_marker(key):
    column = normalize_column(show_columns_row("id", "int", key=key), 0)
    assert column.is_primary is False


def test_normalize_column_requires_field_and_type():
    with pytest.raises(ValidationError):
        normalize_column({"Type": "int"}, 0)
    with pytest.raises(ValidationError):
        normalize_column({"Field": "id"}, 0)


def test_normalize_columns_indexes_in_fetch_order():
    rows = [
        show_columns_row("b", "text"),
        show_columns_row("a", "int(11)", key="PRI"),
        show_columns_row("c", "date"),
    ]
    table = normalize_columns(rows)
    assert list(table) == ["b", "a", "c"]
    assert [col.index for col in table.values()] == [0, 1, 2]
    assert table["a"].is_primary is True

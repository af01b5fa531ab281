"""Column normalization.

Turns one raw "describe columns" row into a Column: keys lower-cased, the type
string split into base type and length, primary key flag and fetch index set.
"""
from __future__ import annotations

import re
from typing import Any, Mapping

from .catalog_queries import PRIMARY_KEY_MARKER
from .models import Column

_NON_DIGIT_RE = re.compile(r"\D")


def keys_to_lower(row: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a row with every key lower-cased."""
    return {key.lower(): value for key, value in row.items()}


def extract_length(type_string: str) -> int:
    """Return the length of a type, eg varchar(255) => 255.

    Every digit in the string is used, so numeric(10,2) gives 102.
    """
    digits = _NON_DIGIT_RE.sub("", type_string)
    return int(digits) if digits else 0


def strip_length(type_string: str) -> str:
    """Return the base name of a type, eg varchar(255) => varchar."""
    pos = type_string.find("(")
    if pos > -1:
        return type_string[:pos]
    return type_string


def normalize_column(row: Mapping[str, Any], index: int) -> Column:
    """Normalize one raw column row.

    Args:
        row: Raw catalog row, any key casing
        index: Position of the row within its object's fetch

    Returns:
        Column with all other raw attributes preserved under lower-cased keys

    Raises:
        pydantic.ValidationError: If the row has no field or type
    """
    col = keys_to_lower(row)
    raw_type = col.get("type")
    if isinstance(raw_type, str):
        col["length"] = extract_length(raw_type)
        col["type"] = strip_length(raw_type)
    col["isPrimary"] = col.get("key") == PRIMARY_KEY_MARKER
    col["index"] = index
    return Column.model_validate(col)


def normalize_columns(rows: list[Mapping[str, Any]]) -> dict[str, Column]:
    """Normalize an object's rows into a column dictionary keyed by field name."""
    table: dict[str, Column] = {}
    for i, row in enumerate(rows):
        column = normalize_column(row, i)
        table[column.field] = column
    return table

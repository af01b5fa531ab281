"""Schema snapshot models.

Every model is frozen: a snapshot is built once per render and handed to the
caller as-is. Dumping with ``by_alias=True`` gives the camelCase document shape.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Column(BaseModel):
    """A normalized column. Raw catalog attributes are kept as extra fields."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    field: str
    type: str
    length: int = 0
    is_primary: bool = Field(False, alias="isPrimary")
    index: int
    key: str | None = None


Table = dict[str, Column]


class StoredProcedureParameter(BaseModel):
    """One row of information_schema.parameters with explicit camelCase names."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    specific_catalog: str | None = Field(None, alias="specificCatalog")
    specific_schema: str | None = Field(None, alias="specificSchema")
    specific_name: str | None = Field(None, alias="specificName")
    routine_name: str = Field(..., alias="routineName")
    ordinal_position: int = Field(..., alias="ordinalPosition")
    parameter_mode: str | None = Field(None, alias="parameterMode")
    is_result: str | None = Field(None, alias="isResult")
    as_locator: str | None = Field(None, alias="asLocator")
    parameter_name: str | None = Field(None, alias="parameterName")
    data_type: str | None = Field(None, alias="dataType")
    character_maximum_length: int | None = Field(None, alias="characterMaximumLength")
    character_octet_length: int | None = Field(None, alias="characterOctetLength")
    numeric_precision: int | None = Field(None, alias="numericPrecision")
    numeric_scale: int | None = Field(None, alias="numericScale")
    datetime_precision: int | None = Field(None, alias="datetimePrecision")
    udt_name: str | None = Field(None, alias="udtName")
    parameter_default: str | None = Field(None, alias="parameterDefault")

    @property
    def key(self) -> str:
        """Name used inside the owning procedure's parameter map."""
        return self.parameter_name or f"${self.ordinal_position}"


class StoredProcedure(BaseModel):
    """A stored procedure and its parameters keyed by parameter name."""
    model_config = ConfigDict(frozen=True)

    name: str
    parameters: dict[str, StoredProcedureParameter] = Field(default_factory=dict)


class DatabaseSchema(BaseModel):
    """Complete rendered schema: tables, views and stored procedures."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tables: dict[str, Table] = Field(default_factory=dict)
    views: dict[str, Table] = Field(default_factory=dict)
    stored_procedures: dict[str, StoredProcedure] = Field(
        default_factory=dict, alias="storedProcedures"
    )

    def to_document(self) -> dict[str, Any]:
        """Dump the snapshot as plain JSON-compatible data with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

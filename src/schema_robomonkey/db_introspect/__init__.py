"""
Database introspection.

Renders tables, views and stored procedures of a PostgreSQL schema into a
normalized DatabaseSchema snapshot.
"""

from schema_robomonkey.db_introspect.catalog_queries import ObjectKind, build_list_objects_query
from schema_robomonkey.db_introspect.columns import normalize_column, extract_length, strip_length
from schema_robomonkey.db_introspect.models import (
    Column,
    DatabaseSchema,
    StoredProcedure,
    StoredProcedureParameter,
)
from schema_robomonkey.db_introspect.schema_renderer import SchemaRenderer

__all__ = [
    "ObjectKind",
    "build_list_objects_query",
    "normalize_column",
    "extract_length",
    "strip_length",
    "Column",
    "DatabaseSchema",
    "StoredProcedure",
    "StoredProcedureParameter",
    "SchemaRenderer",
]

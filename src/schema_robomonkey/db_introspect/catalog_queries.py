"""Catalog queries against PostgreSQL's information_schema and pg_catalog.

Column and procedure listings are shaped like a "describe" result
(Field/Type/Null/Key/Default/Extra and Db/Name/Type/...), so the rest of the
pipeline works on one row shape regardless of where it came from.
"""
from __future__ import annotations

from enum import Enum

from schema_robomonkey.errors import InvalidArgument

PRIMARY_KEY_MARKER = "PRI"


class ObjectKind(str, Enum):
    """information_schema.tables.table_type markers."""
    TABLE = "BASE TABLE"
    VIEW = "VIEW"


CURRENT_DATABASE_QUERY = "SELECT current_schema() AS db"

# $1 = schema name, $2 = table or view name
LIST_COLUMNS_QUERY = """
    SELECT
        a.attname AS "Field",
        format_type(a.atttypid, a.atttypmod) AS "Type",
        CASE WHEN a.attnotnull THEN 'NO' ELSE 'YES' END AS "Null",
        CASE
            WHEN EXISTS (
                SELECT 1 FROM pg_index i
                WHERE i.indrelid = c.oid AND i.indisprimary AND a.attnum = ANY(i.indkey)
            ) THEN 'PRI'
            WHEN EXISTS (
                SELECT 1 FROM pg_index i
                WHERE i.indrelid = c.oid AND i.indisunique AND i.indnatts = 1
                AND i.indkey[0] = a.attnum
            ) THEN 'UNI'
            WHEN EXISTS (
                SELECT 1 FROM pg_index i
                WHERE i.indrelid = c.oid AND i.indkey[0] = a.attnum
            ) THEN 'MUL'
            ELSE ''
        END AS "Key",
        pg_get_expr(d.adbin, d.adrelid) AS "Default",
        CASE
            WHEN a.attidentity IN ('a', 'd') THEN 'auto_increment'
            WHEN pg_get_expr(d.adbin, d.adrelid) LIKE 'nextval(%' THEN 'auto_increment'
            WHEN a.attgenerated = 's' THEN 'STORED GENERATED'
            ELSE ''
        END AS "Extra"
    FROM pg_attribute a
    JOIN pg_class c ON c.oid = a.attrelid
    JOIN pg_namespace n ON n.oid = c.relnamespace
    LEFT JOIN pg_attrdef d ON d.adrelid = a.attrelid AND d.adnum = a.attnum
    WHERE n.nspname = $1
    AND c.relname = $2
    AND a.attnum > 0
    AND NOT a.attisdropped
    ORDER BY a.attnum
"""

# $1 = schema name
LIST_PROCEDURES_QUERY = """
    SELECT
        n.nspname AS "Db",
        p.proname AS "Name",
        'PROCEDURE' AS "Type",
        pg_catalog.pg_get_userbyid(p.proowner) AS "Definer",
        CASE WHEN p.prosecdef THEN 'DEFINER' ELSE 'INVOKER' END AS "Security_type",
        obj_description(p.oid, 'pg_proc') AS "Comment"
    FROM pg_proc p
    JOIN pg_namespace n ON n.oid = p.pronamespace
    WHERE p.prokind = 'p'
    AND n.nspname = $1
"""

# $1 = schema name
LIST_PROCEDURE_PARAMETERS_QUERY = """
    SELECT
        p.specific_catalog,
        p.specific_schema,
        p.specific_name,
        r.routine_name,
        p.ordinal_position,
        p.parameter_mode,
        p.is_result,
        p.as_locator,
        p.parameter_name,
        p.data_type,
        p.character_maximum_length,
        p.character_octet_length,
        p.numeric_precision,
        p.numeric_scale,
        p.datetime_precision,
        p.udt_name,
        p.parameter_default
    FROM information_schema.parameters p
    JOIN information_schema.routines r
        ON r.specific_schema = p.specific_schema
        AND r.specific_name = p.specific_name
    WHERE p.specific_schema = $1
    AND r.routine_type = 'PROCEDURE'
    ORDER BY r.routine_name, p.ordinal_position
"""


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_list_objects_query(list_type: ObjectKind | str, database_name: str) -> str:
    """Return a query listing all tables or views of a schema.

    The schema name is embedded in the SQL text, so it must come from the
    operator, never from untrusted input.

    Args:
        list_type: ObjectKind.TABLE or ObjectKind.VIEW (or their raw markers)
        database_name: Schema to list objects from

    Returns:
        SQL selecting object names as ``tname``

    Raises:
        InvalidArgument: If list_type is not a recognized object kind
    """
    try:
        kind = ObjectKind(list_type)
    except ValueError:
        raise InvalidArgument(f"Illegal list type: {list_type!r}") from None

    select = '"information_schema"."tables"."table_name" AS "tname"'
    source = '"information_schema"."tables"'
    db_clause = f'"information_schema"."tables"."table_schema" = {_quote_literal(database_name)}'
    type_clause = f'"information_schema"."tables"."table_type" = {_quote_literal(kind.value)}'
    return f"SELECT {select} FROM {source} WHERE {db_clause} AND {type_clause}"

"""Raw catalog fetches through a QueryExecutor."""
from __future__ import annotations

import logging
from typing import Any

from schema_robomonkey.db.executor import QueryExecutor, Row
from schema_robomonkey.errors import QueryError

from .catalog_queries import (
    CURRENT_DATABASE_QUERY,
    LIST_COLUMNS_QUERY,
    LIST_PROCEDURE_PARAMETERS_QUERY,
    LIST_PROCEDURES_QUERY,
    ObjectKind,
    build_list_objects_query,
)

logger = logging.getLogger(__name__)


class CatalogFetcher:
    """Runs catalog queries and returns raw row sets."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def _rows(self, sql: str, params: list[Any] | None = None) -> list[Row]:
        groups = await self.executor.execute(sql, params)
        return groups[0] if groups else []

    async def current_database(self) -> str:
        """Return the active schema.

        Raises:
            QueryError: If no schema of the search_path exists
        """
        rows = await self._rows(CURRENT_DATABASE_QUERY)
        name = rows[0]["db"] if rows else None
        if not name:
            raise QueryError(
                "current_schema() returned no schema; check search_path",
                sql=CURRENT_DATABASE_QUERY,
            )
        return name

    async def list_objects(self, kind: ObjectKind | str, database_name: str) -> list[str]:
        """List table or view names. Catalog order, not guaranteed stable."""
        rows = await self._rows(build_list_objects_query(kind, database_name))
        return [row["tname"] for row in rows]

    async def list_columns(self, database_name: str, object_name: str) -> list[Row]:
        """List raw column rows for a single table or view, in catalog order."""
        logger.debug(f"Fetching columns for {database_name}.{object_name}")
        return await self._rows(LIST_COLUMNS_QUERY, [database_name, object_name])

    async def list_procedures(self, database_name: str) -> list[str]:
        rows = await self._rows(LIST_PROCEDURES_QUERY, [database_name])
        return [row["Name"] for row in rows]

    async def list_procedure_parameters(self, database_name: str) -> list[Row]:
        """List the parameters of every procedure in the schema in one round trip."""
        return await self._rows(LIST_PROCEDURE_PARAMETERS_QUERY, [database_name])

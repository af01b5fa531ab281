"""Top-level schema rendering.

SchemaRenderer ties the catalog fetcher and the object/procedure renderers
together and returns a fresh DatabaseSchema on every call.
"""
from __future__ import annotations

import logging

from schema_robomonkey.config.renderer import RenderingConfig
from schema_robomonkey.db.executor import QueryExecutor

from .catalog_queries import ObjectKind
from .fetcher import CatalogFetcher
from .models import DatabaseSchema, StoredProcedure, Table
from .object_renderer import ObjectModelRenderer
from .procedure_renderer import StoredProcedureRenderer

logger = logging.getLogger(__name__)


class SchemaRenderer:
    """Renders tables, views and stored procedures of one schema."""

    def __init__(
        self,
        executor: QueryExecutor,
        database_name: str | None = None,
        config: RenderingConfig | None = None,
    ):
        self.config = config or RenderingConfig()
        self.database_name = database_name
        self.fetcher = CatalogFetcher(executor)
        self.object_renderer = ObjectModelRenderer(
            self.fetcher, max_concurrent_fetches=self.config.max_concurrent_fetches
        )
        self.procedure_renderer = StoredProcedureRenderer(
            self.fetcher, orphan_parameters=self.config.orphan_parameters
        )

    @classmethod
    async def create(
        cls,
        executor: QueryExecutor,
        database_name: str | None = None,
        config: RenderingConfig | None = None,
    ) -> SchemaRenderer:
        """Build a renderer with its database name resolved up front."""
        renderer = cls(executor, database_name=database_name, config=config)
        await renderer.resolve_database_name()
        return renderer

    async def resolve_database_name(self) -> str:
        """Return the configured database name, querying the current one at most once."""
        if not self.database_name:
            self.database_name = await self.fetcher.current_database()
            logger.info(f"Resolved current database: {self.database_name}")
        return self.database_name

    def _ordered(self, names: list[str]) -> list[str]:
        return sorted(names) if self.config.sort_objects else names

    async def render_table_model(self, database_name: str) -> dict[str, Table]:
        tables = await self.fetcher.list_objects(ObjectKind.TABLE, database_name)
        return await self.object_renderer.render(database_name, self._ordered(tables))

    async def render_view_model(self, database_name: str) -> dict[str, Table]:
        views = await self.fetcher.list_objects(ObjectKind.VIEW, database_name)
        return await self.object_renderer.render(database_name, self._ordered(views))

    async def render_stored_procedures(self, database_name: str) -> dict[str, StoredProcedure]:
        procedures = await self.procedure_renderer.render(database_name)
        if self.config.sort_objects:
            return dict(sorted(procedures.items()))
        return procedures

    async def render_database_schema(self, database_name: str | None = None) -> DatabaseSchema:
        """Render the complete schema.

        Args:
            database_name: Schema to render for this call only; defaults to the
                configured or resolved database name

        Returns:
            DatabaseSchema snapshot

        Raises:
            QueryError: If any catalog query fails
            LookupInconsistency: If a parameter belongs to an unlisted procedure
        """
        database_name = database_name or await self.resolve_database_name()
        logger.info(f"Rendering schema {database_name}")

        schema = DatabaseSchema(
            tables=await self.render_table_model(database_name),
            views=await self.render_view_model(database_name),
            stored_procedures=await self.render_stored_procedures(database_name),
        )

        logger.info(
            f"Rendered schema {database_name}: {len(schema.tables)} tables, "
            f"{len(schema.views)} views, {len(schema.stored_procedures)} procedures"
        )
        return schema

"""Query execution over asyncpg.

The renderer only depends on the QueryExecutor protocol: run one SQL string
with optional positional bind values and get back one group of rows per
statement, each row a plain dict.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, Sequence

import asyncpg

from schema_robomonkey.errors import QueryError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class QueryExecutor(Protocol):
    async def execute(
        self, sql: str, params: Sequence[Any] | None = None
    ) -> list[list[Row]]:
        ...


class AsyncpgExecutor:
    """Run catalog queries on an asyncpg pool or connection.

    The pool (or connection) is owned by the caller; this class never opens or
    closes it. A single connection runs one operation at a time, so queries on
    anything other than a pool are serialized.
    """

    def __init__(self, conn: asyncpg.Pool | asyncpg.Connection):
        self._conn = conn
        self._lock: asyncio.Lock | None = None if isinstance(conn, asyncpg.Pool) else asyncio.Lock()

    async def execute(
        self, sql: str, params: Sequence[Any] | None = None
    ) -> list[list[Row]]:
        """Execute a single statement and return its rows as one group.

        Raises:
            QueryError: If the driver reports any failure
        """
        args = tuple(params or ())
        if self._lock is None:
            return await self._fetch(sql, args)
        async with self._lock:
            return await self._fetch(sql, args)

    async def _fetch(self, sql: str, args: tuple[Any, ...]) -> list[list[Row]]:
        try:
            records = await self._conn.fetch(sql, *args)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.warning(f"Catalog query failed: {e}")
            raise QueryError(f"Query execution failed: {e}", sql=sql) from e

        return [[dict(record) for record in records]]

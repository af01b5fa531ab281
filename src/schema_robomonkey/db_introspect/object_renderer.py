"""Render tables and views into column dictionaries.

One column fetch per object, run concurrently but bounded by a semaphore so a
large schema cannot open more queries than the pool can serve.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from .columns import normalize_columns
from .fetcher import CatalogFetcher
from .models import Table

logger = logging.getLogger(__name__)


class ObjectModelRenderer:
    """Fetches and normalizes the columns of a set of tables or views."""

    def __init__(self, fetcher: CatalogFetcher, max_concurrent_fetches: int = 8):
        if max_concurrent_fetches < 1:
            raise ValueError("max_concurrent_fetches must be at least 1")
        self.fetcher = fetcher
        self.max_concurrent_fetches = max_concurrent_fetches

    async def render(self, database_name: str, object_names: Iterable[str]) -> dict[str, Table]:
        """Render every named object.

        All-or-nothing: the first failed fetch cancels the remaining ones and
        its exception propagates unchanged.

        Args:
            database_name: Schema the objects live in
            object_names: Table or view names

        Returns:
            Mapping of object name to Table, in the order of object_names
        """
        names = list(dict.fromkeys(object_names))
        if not names:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)
        fetched: dict[str, Table] = {}

        async def render_one(name: str) -> None:
            async with semaphore:
                rows = await self.fetcher.list_columns(database_name, name)
            fetched[name] = normalize_columns(rows)

        tasks = [asyncio.create_task(render_one(name)) for name in names]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.debug(f"Rendered {len(names)} objects from {database_name}")
        return {name: fetched[name] for name in names}

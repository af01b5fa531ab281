"""Shared pytest fixtures for all tests."""
import asyncio

import pytest

from schema_robomonkey.db_introspect.catalog_queries import (
    CURRENT_DATABASE_QUERY,
    LIST_COLUMNS_QUERY,
    LIST_PROCEDURE_PARAMETERS_QUERY,
    LIST_PROCEDURES_QUERY,
)


class FakeExecutor:
    """QueryExecutor answering catalog queries from in-memory fixtures.

    A column entry may be an exception instance, which is raised when that
    object's columns are fetched.
    """

    def __init__(
        self,
        database="app",
        tables=None,
        views=None,
        procedures=None,
        parameters=None,
        delay=0.0,
    ):
        self.database = database
        self.tables = tables or {}
        self.views = views or {}
        self.procedures = procedures or []
        self.parameters = parameters or []
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def execute(self, sql, params=None):
        self.calls.append((sql, list(params) if params else None))

        if sql == CURRENT_DATABASE_QUERY:
            return [[{"db": self.database}]]
        if sql == LIST_PROCEDURES_QUERY:
            return [[{"Db": params[0], "Name": name} for name in self.procedures]]
        if sql == LIST_PROCEDURE_PARAMETERS_QUERY:
            return [list(self.parameters)]
        if sql == LIST_COLUMNS_QUERY:
            return [await self._columns(params[1])]
        if "'VIEW'" in sql:
            return [[{"tname": name} for name in self.views]]
        return [[{"tname": name} for name in self.tables]]

    async def _columns(self, name):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            rows = self.tables.get(name, self.views.get(name))
            if isinstance(rows, BaseException):
                raise rows
            return list(rows or [])
        finally:
            self.in_flight -= 1

    def column_fetches(self):
        return [params[1] for sql, params in self.calls if sql == LIST_COLUMNS_QUERY]


def show_columns_row(field, type_, key="", **extra):
    """Build a raw column row with "describe columns" casing."""
    row = {"Field": field, "Type": type_, "Null": "YES", "Key": key, "Default": None, "Extra": ""}
    row.update(extra)
    return row


@pytest.fixture
def users_table():
    return [
        show_columns_row("id", "int(11)", key="PRI", Null="NO", Extra="auto_increment"),
        show_columns_row("name", "varchar(255)"),
    ]


@pytest.fixture
def fake_executor_factory():
    return FakeExecutor

"""Database access for catalog queries."""
from schema_robomonkey.db.executor import AsyncpgExecutor, QueryExecutor

__all__ = ["AsyncpgExecutor", "QueryExecutor"]

"""Exception types raised while rendering a database schema."""
from __future__ import annotations


class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class InvalidArgument(ValueError):
    """An unrecognized object-kind selector was requested."""


class QueryError(RuntimeError):
    """A catalog query failed in the underlying database driver."""

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


class LookupInconsistency(LookupError):
    """A stored procedure parameter references a procedure missing from the listing."""

    def __init__(self, routine_name: str, parameter_name: str | None) -> None:
        super().__init__(
            f"Parameter {parameter_name!r} references unknown procedure {routine_name!r}"
        )
        self.routine_name = routine_name
        self.parameter_name = parameter_name

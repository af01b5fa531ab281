"""Render stored procedures with their parameters."""
from __future__ import annotations

import logging
from typing import Literal

from schema_robomonkey.errors import LookupInconsistency

from .fetcher import CatalogFetcher
from .models import StoredProcedure, StoredProcedureParameter

logger = logging.getLogger(__name__)


class StoredProcedureRenderer:
    """Groups batched parameter rows under their owning procedures."""

    def __init__(
        self,
        fetcher: CatalogFetcher,
        orphan_parameters: Literal["raise", "skip"] = "raise",
    ):
        if orphan_parameters not in ("raise", "skip"):
            raise ValueError(f"Unknown orphan parameter policy: {orphan_parameters}")
        self.fetcher = fetcher
        self.orphan_parameters = orphan_parameters

    async def render(self, database_name: str) -> dict[str, StoredProcedure]:
        """Render every procedure of a schema, including ones without parameters.

        Parameters are keyed by name. When overloads of one procedure share a
        parameter name, later overloads use ``name@specific_name``; rows with
        the same specific_name are catalog duplicates and overwrite.

        Raises:
            LookupInconsistency: If a parameter belongs to an unlisted procedure
                and the policy is "raise"
        """
        names = await self.fetcher.list_procedures(database_name)
        rows = await self.fetcher.list_procedure_parameters(database_name)

        grouped: dict[str, dict[str, StoredProcedureParameter]] = {name: {} for name in names}
        # (routine, key) -> specific_name that owns the key
        owners: dict[tuple[str, str], str | None] = {}
        for row in rows:
            param = StoredProcedureParameter.model_validate(row)
            params = grouped.get(param.routine_name)
            if params is None:
                if self.orphan_parameters == "raise":
                    raise LookupInconsistency(param.routine_name, param.parameter_name)
                logger.warning(
                    f"Skipping parameter {param.key} of unlisted procedure "
                    f"{database_name}.{param.routine_name}"
                )
                continue

            key = param.key
            owner = owners.setdefault((param.routine_name, key), param.specific_name)
            if owner != param.specific_name:
                # Overload of the same procedure name: keep both signatures
                key = f"{key}@{param.specific_name}"
                logger.debug(
                    f"Parameter {param.key} of overloaded procedure "
                    f"{database_name}.{param.routine_name} keyed as {key}"
                )
            params[key] = param

        return {
            name: StoredProcedure(name=name, parameters=params)
            for name, params in grouped.items()
        }

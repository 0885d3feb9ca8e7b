"""Helpers converting DuckDB result rows into pydantic models."""

from collections.abc import Sequence
from typing import Any, TypeVar

import duckdb
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def fetch_one_model(
    connection: duckdb.DuckDBPyConnection,
    sql: str,
    model: type[M],
    parameters: Sequence[Any] = (),
) -> M | None:
    """Run ``sql`` and validate its first row into ``model``; ``None`` when empty."""
    cursor = connection.execute(sql, list(parameters))
    row = cursor.fetchone()
    if row is None:
        return None
    # Column keys are matched upper-case against the model aliases.
    columns = [desc[0].upper() for desc in (cursor.description or [])]
    return model.model_validate(dict(zip(columns, row)))

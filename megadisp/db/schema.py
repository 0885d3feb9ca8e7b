"""Schema helpers for the megawatt display database."""

from pathlib import Path

import duckdb

SCHEMA_FILE = Path(__file__).resolve().parent / "schema.sql"


def load_schema(connection: duckdb.DuckDBPyConnection) -> None:
    """Execute the schema SQL file."""
    sql = SCHEMA_FILE.read_text(encoding="utf-8")
    connection.execute(sql)

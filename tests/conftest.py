from contextlib import contextmanager

import duckdb
import pytest

from megadisp.db.deps import DB_CONNECT_ENV_VAR, open_connection
from megadisp.db.schema import load_schema


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "megadisp.duckdb"
    connection = duckdb.connect(str(path))
    try:
        load_schema(connection)
    finally:
        connection.close()
    return path


@pytest.fixture
def insert_row(db_path):
    def _insert(table: str, **values) -> None:
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        connection = duckdb.connect(str(db_path))
        try:
            connection.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                list(values.values()),
            )
        finally:
            connection.close()

    return _insert


@pytest.fixture
def connect(db_path, monkeypatch):
    monkeypatch.setenv(DB_CONNECT_ENV_VAR, str(db_path))
    return open_connection


@contextmanager
def unreachable_database():
    raise duckdb.IOException("IO Error: could not reach database")
    yield  # pragma: no cover


@pytest.fixture
def broken_connect():
    return unreachable_database

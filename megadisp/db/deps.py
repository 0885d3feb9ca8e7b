"""Database dependencies for FastAPI routes."""

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from pathlib import Path
import os

import duckdb

DB_CONNECT_ENV_VAR = "DB_CONNECT"
DB_USER_ENV_VAR = "DB_USER"
DB_PASSWORD_ENV_VAR = "DB_PASSWORD"

ConnectionFactory = Callable[[], AbstractContextManager[duckdb.DuckDBPyConnection]]


class DatabaseUnavailableError(RuntimeError):
    """Raised when no database can be opened for a request."""


@dataclass(frozen=True)
class ConnectionSettings:
    connect: str | None
    user: str | None = None
    password: str | None = None

    @property
    def db_path(self) -> Path | None:
        if not self.connect:
            return None
        return Path(self.connect).expanduser()


def load_connection_settings() -> ConnectionSettings:
    """Read connection parameters from the process environment.

    Called for every connection request so a changed environment is picked
    up without a restart. DuckDB is embedded, so the user and password are
    carried along but never sent anywhere.
    """
    return ConnectionSettings(
        connect=os.environ.get(DB_CONNECT_ENV_VAR),
        user=os.environ.get(DB_USER_ENV_VAR),
        password=os.environ.get(DB_PASSWORD_ENV_VAR),
    )


@contextmanager
def open_connection() -> Iterator[duckdb.DuckDBPyConnection]:
    """Yield a read-only DuckDB connection, closing it on every exit path."""
    settings = load_connection_settings()
    db_path = settings.db_path
    if db_path is None:
        raise DatabaseUnavailableError(
            f"No database configured. Set {DB_CONNECT_ENV_VAR} to the DuckDB file path."
        )
    if not db_path.exists():
        raise DatabaseUnavailableError(
            f"DuckDB file not found at {db_path}. "
            f"Set {DB_CONNECT_ENV_VAR} to override the location."
        )

    connection = duckdb.connect(str(db_path), read_only=True)
    try:
        yield connection
    finally:
        connection.close()


def get_connection_factory() -> ConnectionFactory:
    """FastAPI dependency handing out the connection factory.

    The resolver and each puller open their own connection, so routes take
    the factory rather than a single connection.
    """
    return open_connection

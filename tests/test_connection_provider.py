import duckdb
import pytest

from megadisp.db.deps import (
    DB_CONNECT_ENV_VAR,
    DB_USER_ENV_VAR,
    DatabaseUnavailableError,
    load_connection_settings,
    open_connection,
)


def test_settings_are_read_per_call(monkeypatch):
    monkeypatch.setenv(DB_CONNECT_ENV_VAR, "/srv/one.duckdb")
    monkeypatch.setenv(DB_USER_ENV_VAR, "megadisp")
    first = load_connection_settings()
    monkeypatch.setenv(DB_CONNECT_ENV_VAR, "/srv/two.duckdb")
    second = load_connection_settings()

    assert first.connect == "/srv/one.duckdb"
    assert first.user == "megadisp"
    assert second.connect == "/srv/two.duckdb"


def test_unset_connect_string(monkeypatch):
    monkeypatch.delenv(DB_CONNECT_ENV_VAR, raising=False)

    with pytest.raises(DatabaseUnavailableError, match=DB_CONNECT_ENV_VAR):
        with open_connection():
            pass


def test_missing_database_file(tmp_path, monkeypatch):
    monkeypatch.setenv(DB_CONNECT_ENV_VAR, str(tmp_path / "nope.duckdb"))

    with pytest.raises(DatabaseUnavailableError, match="not found"):
        with open_connection():
            pass


def test_connection_closed_after_error(connect):
    with pytest.raises(RuntimeError):
        with connect() as connection:
            assert connection.execute("SELECT COUNT(*) FROM abt_flow").fetchone() == (0,)
            raise RuntimeError("boom")

    with pytest.raises(duckdb.Error):
        connection.execute("SELECT 1")


def test_connection_is_read_only(connect):
    with connect() as connection:
        with pytest.raises(duckdb.Error):
            connection.execute("INSERT INTO megadisp_source VALUES ('ABT')")

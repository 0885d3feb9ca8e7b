from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from megadisp.api.app import app
from megadisp.api.routes import megawatt
from megadisp.db.deps import DB_CONNECT_ENV_VAR, get_connection_factory


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthcheck(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_abt_snapshot_end_to_end(client, connect, insert_row):
    insert_row(
        "abt_flow",
        UNIT_7=300, UNIT_8=250, GT_7=10, GT_8=8, ST_7=2, ST_8=1,
        ACT_SENT_OUT=540, FREQUENCY=50.01, BLOCK_NO=5, SG_SCH=12.5, DC_SCH=3.2,
    )

    response = client.post("/megawatt/")

    assert response.status_code == 200
    body = response.json()
    assert body["errorFlag"] == "F"
    assert body["source"] == "ABT"
    assert body["seven"] == "300.00"
    assert body["eight"] == "250.00"
    assert body["apc_7"] == "292.00"
    assert body["apc_8"] == "243.00"
    assert body["apc_total"] == "10.00"
    assert body["plf_7"] == "100.00"
    assert body["plf_8"] == "100.00"
    assert body["plf_stn"] == "100.00"
    assert body["total"] == "550.00"
    assert body["block_no"] == 5
    assert "error" not in body


def test_empty_abt_falls_through_to_yokogawa(client, connect, insert_row):
    insert_row(
        "megawattdisplay_extended",
        UNIT7=200, UNIT8=150, WBSETCL=330, FREQUENCY=49.97,
        INSERTION_TIME=datetime(2024, 6, 1, 9, 0, 0),
    )

    response = client.post("/megawatt/")

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "YOKOGAWA"
    assert body["errorFlag"] == "F"
    assert body["total"] == "350.00"
    assert body["act_sent_out"] == "330.00"
    assert body["reading_date"] == "01-06-2024"
    assert "apc_7" not in body


def test_operator_preference_selects_yokogawa(client, connect, insert_row):
    insert_row("megadisp_source", source="Yokogawa")
    insert_row("abt_flow", UNIT_7=300, UNIT_8=250)

    body = client.post("/megawatt/").json()

    assert body["source"] == "YOKOGAWA"
    assert body["seven"] == "0.00"


def test_unreachable_database_degrades(client, tmp_path, monkeypatch):
    monkeypatch.setenv(DB_CONNECT_ENV_VAR, str(tmp_path / "missing.duckdb"))

    response = client.post("/megawatt/")

    assert response.status_code == 200
    body = response.json()
    assert body["errorFlag"] == "T"
    assert body["source"] == "ABT"
    assert "missing.duckdb" in body["error"]
    assert body["seven"] == "0.00"
    assert body["total"] == "0.00"
    assert body["apc_7_p"] == "-"
    assert body["block_no"] == 0


def test_connection_factory_can_be_overridden(client, broken_connect):
    app.dependency_overrides[get_connection_factory] = lambda: broken_connect

    body = client.post("/megawatt/").json()

    assert body["errorFlag"] == "T"
    assert "could not reach database" in body["error"]


def test_dispatch_failure_is_server_error(client, connect, monkeypatch):
    def exploding_pull(connect):
        raise RuntimeError("puller crashed")

    monkeypatch.setattr(megawatt, "pull_abt", exploding_pull)

    response = client.post("/megawatt/")

    assert response.status_code == 500
    assert response.json() == {"errorFlag": "T", "error": "puller crashed"}

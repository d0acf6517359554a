import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.filter_assembler import TRACE_ENV_KEY  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture()
def client():
    return TestClient(app)


def test_compile_gallery_filter(client):
    resp = client.post(
        "/filters/gallery/compile",
        json={
            "filters": {
                "date": {"start": "2024-01-01", "end": "2024-06-30"},
                "rating": {"min": 60},
                "tagIds": ["t9"],
                "favorite": True,
            }
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["entityType"] == "gallery"
    assert body["filter"] == {
        "date": {"modifier": "BETWEEN", "value": "2024-01-01", "value2": "2024-06-30"},
        "rating100": {"modifier": "GREATER_THAN_OR_EQUAL", "value": 60},
        "tags": {"modifier": "INCLUDES", "value": ["t9"]},
        "favorite": True,
    }
    assert body["fields"] == ["date", "favorite", "rating100", "tags"]


def test_compile_empty_body(client):
    resp = client.post("/filters/scene/compile", json={})
    assert resp.status_code == 200
    assert resp.json()["filter"] == {}
    assert resp.json()["fields"] == []


def test_compile_unknown_entity_is_404(client):
    resp = client.post("/filters/movie/compile", json={"filters": {"favorite": True}})
    assert resp.status_code == 404
    assert "movie" in resp.json()["detail"]


def test_compile_non_finite_bounds_are_omitted(client):
    resp = client.post(
        "/filters/scene/compile",
        content=b'{"filters": {"rating": {"min": NaN, "max": 80}, "duration": {"min": Infinity}}}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 200
    assert resp.json()["filter"] == {"rating100": {"modifier": "LESS_THAN_OR_EQUAL", "value": 80}}


def test_query_string_form(client):
    resp = client.get(
        "/filters/scene",
        params={"date_start": "2024-03-15", "date_end": "2024-03-15", "tagIds": "1,2", "tagIdsModifier": "INCLUDES_ALL"},
    )
    assert resp.status_code == 200
    assert resp.json()["filter"] == {
        "date": {"modifier": "BETWEEN", "value": "2024-03-15", "value2": "2024-03-15"},
        "tags": {"modifier": "INCLUDES_ALL", "value": ["1", "2"]},
    }


def test_query_string_unknown_entity(client):
    resp = client.get("/filters/movie", params={"favorite": "true"})
    assert resp.status_code == 404


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_startup_trace_notice_follows_env(monkeypatch, capsys):
    import main

    monkeypatch.setenv(TRACE_ENV_KEY, "yes")
    main._announce_registry()
    assert "追踪已开启" in capsys.readouterr().out

    monkeypatch.setenv(TRACE_ENV_KEY, "off")
    main._announce_registry()
    out = capsys.readouterr().out
    assert "[startup]" in out
    assert "追踪已开启" not in out

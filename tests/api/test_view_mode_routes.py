import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from main import app  # noqa: E402


@pytest.fixture()
def client():
    return TestClient(app)


def test_scene_view_modes(client):
    resp = client.get("/view-modes/scene")
    assert resp.status_code == 200
    body = resp.json()
    assert body["entityType"] == "scene"
    assert [m["id"] for m in body["viewModes"]] == ["grid", "wall", "table", "timeline", "folder"]
    assert body["defaultSettings"]["defaultViewMode"] == "grid"
    assert "showDate" in body["availableSettings"]


def test_unknown_entity_returns_empty(client):
    resp = client.get("/view-modes/movie")
    assert resp.status_code == 200
    assert resp.json() == {
        "entityType": "movie",
        "viewModes": [],
        "defaultSettings": {},
        "availableSettings": [],
    }


def test_registry_listing(client):
    resp = client.get("/view-modes")
    assert resp.status_code == 200
    entities = {item["entityType"]: item for item in resp.json()["entities"]}
    assert set(entities) == {"scene", "gallery", "image", "performer", "studio", "tag", "group", "clip"}
    assert "timeline" not in [m["id"] for m in entities["performer"]["viewModes"]]
    assert "timeline" in [m["id"] for m in entities["image"]["viewModes"]]

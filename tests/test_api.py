"""
API tests for the export endpoints.

The content store dependency is overridden with the in-memory fixture
store; output and artifact directories point at a temporary directory.
"""

import csv
import io
import json

import pytest
from fastapi.testclient import TestClient

from src.app import artifact_writer
from src.app import config as app_config
from src.app.main import app


@pytest.fixture
def client(store, tmp_path, monkeypatch):
    """FastAPI test client backed by the fixture store."""
    monkeypatch.setattr(app_config, "OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setattr(artifact_writer, "ARTIFACTS_DIR", str(tmp_path / "artifacts"))
    app.dependency_overrides[app_config.get_content_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _manifests(tmp_path) -> list[dict]:
    paths = (tmp_path / "artifacts").glob("*/export_manifest.json")
    return [json.loads(p.read_text(encoding="utf-8")) for p in paths]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_version(client):
    response = client.get("/version")
    assert response.json() == {"version": app_config.VERSION, "name": app_config.APP_NAME}


def test_list_content_types(client):
    response = client.get("/content-types")

    assert response.status_code == 200
    names = {ct["name"]: ct["label"] for ct in response.json()["content_types"]}
    assert names["recipe"] == "Recipes"
    assert names["page"] == "Pages"


def test_list_fields(client):
    response = client.get("/content-types/recipe/fields")

    assert response.status_code == 200
    body = response.json()
    standard_tokens = [f["token"] for f in body["standard"]]
    assert standard_tokens[:2] == ["std:ID", "std:post_author"]
    assert "std:post_excerpt" in standard_tokens

    custom = {f["token"]: f for f in body["custom"]}
    assert custom["acf:hero_image"]["label"] == "Hero Image"
    assert custom["acf:hero_image"]["field_type"] == "image"


def test_list_fields_unknown_type(client):
    response = client.get("/content-types/nope/fields")

    assert response.status_code == 404
    assert response.json()["detail"]["status"] == "error"


def test_export_downloads_csv(client, tmp_path):
    response = client.post("/export", json={
        "content_type": "recipe",
        "fields": ["std:ID", "std:post_title", "acf:ingredients", "acf:pairs_with"],
    })

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "export-recipe.csv" in response.headers["content-disposition"]
    assert response.headers["content-disposition"].startswith("attachment")

    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8"), newline="")))
    assert rows[0] == ["ID", "post_title", "ingredients", "pairs_with"]
    assert rows[1] == ["5", "Apple Pie", "- Apples\n- Butter\n", "Banana Bread"]
    assert len(rows) == 3

    [manifest] = _manifests(tmp_path)
    assert manifest["status"] == "completed"
    assert manifest["rows_written"] == 2
    assert manifest["content_type"] == "recipe"


def test_export_empty_type_returns_header_only(client):
    response = client.post("/export", json={"content_type": "page", "fields": ["std:ID"]})

    assert response.status_code == 200
    assert response.content.decode("utf-8") == "ID\r\n"


@pytest.mark.parametrize("fields", [[], ["post_title"], ["xyz:post_title"], ["std:"]])
def test_export_rejects_malformed_fields(client, fields):
    response = client.post("/export", json={"content_type": "recipe", "fields": fields})
    assert response.status_code == 422


def test_export_rejects_unsafe_content_type(client):
    response = client.post("/export", json={"content_type": "../etc", "fields": ["std:ID"]})
    assert response.status_code == 422


def test_export_unknown_type_is_source_unavailable(client, tmp_path):
    response = client.post("/export", json={"content_type": "nope", "fields": ["std:ID"]})

    assert response.status_code == 503
    assert response.json()["detail"]["message"] == "Could not retrieve records for export."

    [manifest] = _manifests(tmp_path)
    assert manifest["status"] == "aborted"
    assert manifest["rows_written"] == 0


def test_export_files_are_removed(client, tmp_path):
    output = tmp_path / "output"

    ok = client.post("/export", json={"content_type": "recipe", "fields": ["std:ID"]})
    failed = client.post("/export", json={"content_type": "nope", "fields": ["std:ID"]})

    assert ok.status_code == 200
    assert ok.content.decode("utf-8") == "ID\r\n5\r\n9\r\n"
    assert failed.status_code == 503
    assert list(output.glob("*")) == []

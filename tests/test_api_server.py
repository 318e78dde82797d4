import pytest

from abbreviator.core.config import AbbreviatorConfig
from api_server import create_app
from conftest import FUBAR_MEANING, FUBAR_TAG, SNAFU_MEANING


@pytest.fixture
def client(store):
    app = create_app(config=AbbreviatorConfig(), store=store)
    app.config["TESTING"] = True
    return app.test_client()


def save(client, abbreviations, meanings):
    return client.post("/api/abbreviations", json={"abbreviations": abbreviations, "meanings": meanings})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_save_and_get_abbreviations(client):
    assert client.get("/api/abbreviations").get_json() == {}

    response = save(client, ["FUBAR", "SNAFU"], [FUBAR_MEANING, SNAFU_MEANING])
    assert response.status_code == 200
    assert response.get_json() == {"valid": True, "problems": []}

    assert client.get("/api/abbreviations").get_json() == {"FUBAR": FUBAR_MEANING, "SNAFU": SNAFU_MEANING}


def test_invalid_save_is_rejected(client):
    response = save(client, ["FUBAR", "SNAFU"], [FUBAR_MEANING])

    assert response.status_code == 400
    assert response.get_json()["valid"] is False
    assert client.get("/api/abbreviations").get_json() == {}


def test_rewrite(client):
    save(client, ["FUBAR"], [FUBAR_MEANING])
    response = client.post("/api/rewrite", json={"content": '<img alt="FUBAR">FUBAR'})

    assert response.status_code == 200
    data = response.get_json()
    assert data["content"] == f'<img alt="FUBAR">{FUBAR_TAG}'
    assert data["decision"] == {
        "has_abbreviations": True,
        "has_abbreviations_inside_tags": True,
        "tags_verified": True,
    }


def test_rewrite_with_cached_content(client, store):
    save(client, ["FUBAR"], [FUBAR_MEANING])
    payload = {"content": "<p>FUBAR</p>", "content_id": 12, "modified_at": 100}

    first = client.post("/api/rewrite", json=payload).get_json()
    second = client.post("/api/rewrite", json=payload).get_json()

    assert first["content"] == f"<p>{FUBAR_TAG}</p>"
    assert second == first
    assert store.get("abbreviator-12-post-has-abbreviations") is True


def test_rewrite_requires_content(client):
    assert client.post("/api/rewrite", json={}).status_code == 400
    assert client.post("/api/rewrite", json={"content": "x", "content_id": 1, "modified_at": "soon"}).status_code == 400


def test_strings_are_not_split_into_rows(client):
    response = save(client, "AB", "xy")

    assert response.status_code == 400
    assert response.get_json()["valid"] is False
    assert client.get("/api/abbreviations").get_json() == {}


def test_non_object_bodies_are_rejected(client):
    response = client.post("/api/abbreviations", json=[["FUBAR"], [FUBAR_MEANING]])
    assert response.status_code == 400
    assert response.get_json()["valid"] is False

    assert client.post("/api/rewrite", json=["FUBAR"]).status_code == 400

"""HTTP surface over the memory backend and the mock embedder."""

import pytest
from fastapi.testclient import TestClient

from media_catalog.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _create(client, **fields):
    response = client.post("/media", json=fields)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def seeded(client):
    return {
        "basics": _create(
            client, title="Contract Law Basics", type="text", description="Requirements for a valid contract"
        ),
        "breach": _create(
            client, title="Breach of Contract", type="text", description="Remedies when a contract is broken"
        ),
        "podcast": _create(
            client,
            title="Contract Law Podcast",
            type="audio",
            description="Weekly episode on contract disputes",
            mime_type="audio/mpeg",
        ),
    }


def test_health_and_ready(client):
    assert client.get("/health").json() == {"status": "ok"}
    ready = client.get("/ready")
    assert ready.status_code == 200
    assert ready.json()["storage"] == "memory"


def test_create_and_fetch(client):
    created = _create(client, title="Lecture", type="video", source_url="https://youtu.be/abcdefghijk")
    assert created["has_embedding"] is True
    assert "embedding" not in created
    fetched = client.get(f"/media/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Lecture"


def test_create_validates_input(client):
    assert client.post("/media", json={"title": "", "type": "text"}).status_code == 422
    assert client.post("/media", json={"title": "x", "type": "hologram"}).status_code == 422


def test_unknown_item_is_404(client):
    response = client.get("/media/media_missing")
    assert response.status_code == 404
    assert "media_missing" in response.json()["detail"]


def test_list_stats_and_delete(client, seeded):
    assert len(client.get("/media").json()) == 3
    assert len(client.get("/media", params={"limit": 2}).json()) == 2
    stats = client.get("/media/stats/embeddings").json()
    assert stats["total_items"] == 3
    assert stats["percentage_with_embeddings"] == 100.0

    assert client.delete(f"/media/{seeded['breach']['id']}").status_code == 204
    assert client.get(f"/media/{seeded['breach']['id']}").status_code == 404
    assert client.delete(f"/media/{seeded['breach']['id']}").status_code == 404


def test_backfill_with_nothing_pending(client, seeded):
    report = client.post("/media/embeddings/backfill").json()
    assert report == {"total": 0, "embedded": 0, "failed": 0, "errors": []}


def test_semantic_search(client, seeded):
    body = client.post("/media/semantic-search", json={"query": "requirements for a valid contract"}).json()
    assert body["results"][0]["item"]["id"] == seeded["basics"]["id"]
    assert body["metadata"]["search_type"] == "semantic"
    assert body["metadata"]["total_candidates"] == 3


def test_semantic_search_on_empty_catalog(client):
    body = client.post("/media/semantic-search", json={"query": "anything"}).json()
    assert body["results"] == []
    assert body["metadata"]["total_candidates"] == 0
    assert body["diagnostic_message"]


def test_search_and_similar(client, seeded):
    results = client.post("/media/search", json={"query": "valid contract", "max_distance": 2.0}).json()
    assert {r["item"]["id"] for r in results} == {s["id"] for s in seeded.values()}

    similar = client.get(f"/media/{seeded['basics']['id']}/similar", params={"max_distance": 2.0}).json()
    assert seeded["basics"]["id"] not in {r["item"]["id"] for r in similar}
    assert client.get(f"/media/{seeded['basics']['id']}/similar", params={"metric": "hamming"}).status_code == 422


def test_fuzzy_search(client, seeded):
    matches = client.post("/media/fuzzy-search", json={"query": "contarct", "min_score": 0.7}).json()
    assert matches
    assert all(m["fuzzy_score"] >= 0.7 for m in matches)
    assert matches[0]["matched_field"] in ("title", "description", "content")


def test_recommendations(client, seeded):
    response = client.post("/recommendations/item-based", json={"item_ids": [seeded["basics"]["id"]]})
    assert response.status_code == 200
    body = response.json()
    assert body["strategy"] == "item-based"
    assert seeded["basics"]["id"] not in {r["item"]["id"] for r in body["recommendations"]}

    hybrid = client.post(
        "/recommendations/hybrid",
        json={"item_ids": [seeded["basics"]["id"]], "query": "contract podcast", "limit": 2},
    ).json()
    assert len(hybrid["recommendations"]) <= 2


def test_recommendation_errors(client, seeded):
    assert client.post("/recommendations/collaborative", json={"query": "x"}).status_code == 400
    assert client.post("/recommendations/content-based", json={}).status_code == 400
    assert client.post("/recommendations/item-based", json={"item_ids": ["media_missing"]}).status_code == 404

"""Tests for API routes."""
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from chordfinder.api.deps import get_discovery, get_store
from chordfinder.config import Settings
from chordfinder.scrapers.models import NOT_EXTRACTED, SearchResult
from chordfinder.services.discovery import ChordDiscovery
from chordfinder.services.song_store import SongStoreError

SONG_BODY = {
    "title": "Wonderwall",
    "artist": "Oasis",
    "chord_content": "Em7 G Dsus4 A7sus4",
    "source_url": "https://tabs.ultimate-guitar.com/tab/oasis/wonderwall-chords-27596",
    "personal_notes": "Capo 2",
}


@pytest.fixture
def discovery():
    mock = MagicMock(spec=ChordDiscovery)
    mock.search = AsyncMock(
        return_value=[
            SearchResult(
                title="Wonderwall",
                artist="Oasis",
                url="https://tabs.ultimate-guitar.com/tab/oasis/wonderwall-chords-27596",
                type="Chords",
                source="Ultimate Guitar",
            )
        ]
    )
    mock.resolve_extraction = AsyncMock(return_value=NOT_EXTRACTED)
    return mock


@pytest.fixture
def app(tmp_path, discovery, fake_store):
    """Create test app with lifespan skipped and services overridden."""
    from chordfinder.main import create_app

    settings = Settings(_env_file=None, log_to_file=False, static_dir=str(tmp_path / "missing"))
    app = create_app(settings)
    app.dependency_overrides[get_discovery] = lambda: discovery
    app.dependency_overrides[get_store] = lambda: fake_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "chordfinder"


@pytest.mark.parametrize("params", [{}, {"q": ""}])
def test_chord_search_requires_query(client, discovery, params):
    response = client.get("/api/chords", params=params)
    assert response.status_code == 400
    assert response.json()["detail"] == "Query parameter is required"
    discovery.search.assert_not_awaited()


def test_chord_search_returns_results(client, discovery):
    response = client.get("/api/chords", params={"q": "wonderwall"})
    assert response.status_code == 200
    results = response.json()["results"]
    assert results == [
        {
            "title": "Wonderwall",
            "artist": "Oasis",
            "url": "https://tabs.ultimate-guitar.com/tab/oasis/wonderwall-chords-27596",
            "type": "Chords",
            "source": "Ultimate Guitar",
        }
    ]
    discovery.search.assert_awaited_once_with("wonderwall")


@pytest.mark.parametrize("body", [None, {}, {"url": ""}])
def test_extract_requires_url(client, discovery, body):
    response = client.post("/api/extract-chords", json=body)
    assert response.status_code == 400
    discovery.resolve_extraction.assert_not_awaited()


def test_extract_returns_sentinel_verbatim(client, discovery):
    response = client.post("/api/extract-chords", json={"url": "https://tabs.ultimate-guitar.com/tab/x"})
    assert response.status_code == 200
    assert response.json() == {"chord_content": NOT_EXTRACTED}


def test_song_lifecycle(client):
    created = client.post("/api/songs", json=SONG_BODY)
    assert created.status_code == 200
    body = created.json()
    song_id, share_token = body["id"], body["share_token"]
    assert body["message"] == "Song saved successfully"

    fetched = client.get(f"/api/songs/{song_id}").json()["song"]
    assert fetched["title"] == "Wonderwall"
    assert fetched["share_token"] == share_token

    updated = client.put(f"/api/songs/{song_id}", json={**SONG_BODY, "title": "Wonderwall (live)"})
    assert updated.status_code == 200
    refetched = client.get(f"/api/songs/{song_id}").json()["song"]
    assert refetched["title"] == "Wonderwall (live)"
    assert refetched["share_token"] == share_token

    listed = client.get("/api/songs").json()["songs"]
    assert [s["id"] for s in listed] == [song_id]

    assert client.delete(f"/api/songs/{song_id}").status_code == 200
    assert client.get(f"/api/songs/{song_id}").status_code == 404
    assert client.delete(f"/api/songs/{song_id}").status_code == 404


@pytest.mark.parametrize("missing", ["title", "artist", "chord_content"])
def test_create_song_requires_fields(client, missing):
    response = client.post("/api/songs", json={**SONG_BODY, missing: ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "Title, artist, and chord content are required"


def test_update_unknown_song_is_404(client):
    response = client.put("/api/songs/999", json=SONG_BODY)
    assert response.status_code == 404


def test_search_saved_songs(client):
    client.post("/api/songs", json=SONG_BODY)
    client.post("/api/songs", json={**SONG_BODY, "title": "Zvezda", "artist": "Kino", "chord_content": "Am C"})

    assert client.get("/api/search").status_code == 400
    matches = client.get("/api/search", params={"q": "kino"}).json()["songs"]
    assert [s["title"] for s in matches] == ["Zvezda"]


def test_share_page_renders_escaped_song(client):
    token = client.post(
        "/api/songs",
        json={**SONG_BODY, "title": "<script>alert(1)</script>"},
    ).json()["share_token"]

    response = client.get(f"/share/{token}")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;" in response.text
    assert "Em7 G Dsus4 A7sus4" in response.text


def test_share_page_not_found(client):
    response = client.get("/share/nope1234")
    assert response.status_code == 404
    assert "Song Not Found" in response.text


@pytest.mark.parametrize(
    "error",
    [
        asyncpg.PostgresError("connection was closed in the middle of operation"),
        SongStoreError("Could not allocate a unique share token"),
    ],
)
def test_store_failure_is_json_500(client, fake_store, error):
    fake_store.create = AsyncMock(side_effect=error)

    response = client.post("/api/songs", json=SONG_BODY)

    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}


def test_unconnected_store_is_json_500(client, fake_store):
    fake_store.list_all = AsyncMock(side_effect=SongStoreError("Song store is not connected"))

    response = client.get("/api/songs")

    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}

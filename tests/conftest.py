import pytest
from fastapi.testclient import TestClient

from songapp.api.deps import get_song_store
from songapp.main import app
from songapp.seed import SEED_SONGS, seed_songs
from songapp.stores.memory import InMemorySongStore


@pytest.fixture
def store():
    return InMemorySongStore()


@pytest.fixture
async def seeded_store(store):
    await seed_songs(store)
    return store


@pytest.fixture
def client(store):
    # Without a context manager TestClient skips the lifespan, so no MongoDB
    app.dependency_overrides[get_song_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client):
    for song in SEED_SONGS:
        response = client.post("/api/songs", json=song)
        assert response.status_code == 201
    return client

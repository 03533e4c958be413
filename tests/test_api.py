from songapp.api.deps import get_song_store
from songapp.core.exceptions import StoreError
from songapp.main import app
from songapp.stores.memory import InMemorySongStore

NEON_MIRAGE = {
    "title": "Neon Mirage",
    "artist": "Aurora Bloom",
    "album": "Midnight Canvas",
    "genre": "Synthwave",
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_create_then_search_ranks_it_first(client):
    response = client.post("/api/songs", json=NEON_MIRAGE)
    assert response.status_code == 201
    created = response.json()
    assert created["_id"]
    assert created["createdAt"] == created["updatedAt"]
    assert "score" not in created

    client.post("/api/songs", json={"title": "Pulse Runner", "artist": "Neon Drift", "album": "Electric Pulse", "genre": "Synthwave"})
    client.post("/api/songs", json={"title": "Rainy Avenue", "artist": "Echo Street", "album": "City Lights", "genre": "Jazz Fusion"})

    response = client.get("/api/songs", params={"search": "neon"})
    assert response.status_code == 200
    body = response.json()
    assert [song["title"] for song in body["data"]] == ["Neon Mirage", "Pulse Runner"]
    assert body["data"][0]["_id"] == created["_id"]
    assert body["data"][0]["score"] == 60
    assert body["data"][0]["score"] > body["data"][1]["score"]
    assert body["pagination"]["total"] == 2


def test_create_trims_fields(client):
    response = client.post("/api/songs", json={**NEON_MIRAGE, "title": "  Neon Mirage  "})
    assert response.status_code == 201
    assert response.json()["title"] == "Neon Mirage"


def test_create_rejects_missing_or_blank_fields(client):
    missing = {key: value for key, value in NEON_MIRAGE.items() if key != "genre"}
    assert client.post("/api/songs", json=missing).status_code == 400

    response = client.post("/api/songs", json={**NEON_MIRAGE, "artist": "   "})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid song data"}


def test_get_update_delete_lifecycle(client):
    created = client.post("/api/songs", json=NEON_MIRAGE).json()
    song_url = f"/api/songs/{created['_id']}"

    assert client.get(song_url).json()["title"] == "Neon Mirage"

    response = client.put(song_url, json={**NEON_MIRAGE, "title": "Neon Mirage (Live)"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["_id"] == created["_id"]
    assert updated["title"] == "Neon Mirage (Live)"
    assert updated["createdAt"] == created["createdAt"]

    assert client.put(song_url, json={**NEON_MIRAGE, "album": ""}).status_code == 400

    response = client.delete(song_url)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Song deleted successfully"
    assert body["song"]["_id"] == created["_id"]

    assert client.get(song_url).status_code == 404
    assert client.delete(song_url).status_code == 404


def test_unknown_and_malformed_ids_are_not_found(client):
    assert client.get("/api/songs/5f43a1b2c3d4e5f6a7b8c9d0").status_code == 404
    assert client.get("/api/songs/not-an-id").status_code == 404
    assert client.put("/api/songs/not-an-id", json=NEON_MIRAGE).status_code == 404
    assert client.delete("/api/songs/not-an-id").status_code == 404


def test_malformed_paging_degrades_to_defaults(seeded_client):
    response = seeded_client.get("/api/songs", params={"page": "abc", "limit": "1000", "sortBy": "password", "sortOrder": "sideways"})
    assert response.status_code == 200
    pagination = response.json()["pagination"]
    assert pagination["page"] == 1
    assert pagination["limit"] == 50
    assert pagination["sortBy"] == "createdAt"
    assert pagination["sortOrder"] == "desc"
    assert len(response.json()["data"]) == 15


def test_default_page(seeded_client):
    body = seeded_client.get("/api/songs").json()
    assert len(body["data"]) == 10
    assert body["pagination"] == {
        "total": 15,
        "page": 1,
        "limit": 10,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPrevPage": False,
        "sortBy": "createdAt",
        "sortOrder": "desc",
    }
    assert all("score" not in song for song in body["data"])


def test_sort_by_title(seeded_client):
    body = seeded_client.get("/api/songs", params={"sortBy": "title", "sortOrder": "asc", "limit": "5"}).json()
    assert [song["title"] for song in body["data"]] == [
        "Chromatic Dreams",
        "Concrete Lanterns",
        "Golden Paradox",
        "Ivory Echo",
        "Late Night Signals",
    ]


def test_genre_filter_is_substring(seeded_client):
    body = seeded_client.get("/api/songs", params={"genre": "rock"}).json()
    assert body["pagination"]["total"] == 3
    assert {song["genre"] for song in body["data"]} == {"Alternative Rock"}


def test_filters_combine(seeded_client):
    body = seeded_client.get("/api/songs", params={"artist": "neon", "genre": "pop"}).json()
    assert [song["title"] for song in body["data"]] == ["Static Love"]


def test_filter_with_pattern_characters_matches_nothing(seeded_client):
    body = seeded_client.get("/api/songs", params={"genre": ".*"}).json()
    assert body["data"] == []
    assert body["pagination"]["totalPages"] == 1


def test_page_beyond_last(seeded_client):
    body = seeded_client.get("/api/songs", params={"page": "5"}).json()
    assert body["data"] == []
    assert body["pagination"]["page"] == 5
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPrevPage"] is True


def test_same_query_twice_is_identical(seeded_client):
    params = {"search": "e", "sortBy": "artist", "page": "2", "limit": "4"}
    assert seeded_client.get("/api/songs", params=params).json() == seeded_client.get("/api/songs", params=params).json()


def test_statistics(seeded_client):
    response = seeded_client.get("/api/songs/stats")
    assert response.status_code == 200
    stats = response.json()
    assert stats["totalSongs"] == 15
    assert stats["totalGenres"] == 5
    assert sum(group["count"] for group in stats["songsByGenre"]) == 15
    assert set(stats["songsByAlbum"][0]) == {"_id", "count", "artist"}


def test_statistics_ignore_filters(seeded_client):
    stats = seeded_client.get("/api/songs/stats", params={"genre": "rock"}).json()
    assert stats["totalSongs"] == 15


class BrokenStore(InMemorySongStore):
    async def count(self, predicate):
        raise StoreError("count failed: connection refused")


def test_store_failures_are_500_without_detail(client):
    app.dependency_overrides[get_song_store] = lambda: BrokenStore()

    response = client.get("/api/songs")
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to fetch songs"}

    response = client.get("/api/songs/stats")
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to get statistics"}


def test_huge_page_number_returns_empty_page(seeded_client):
    response = seeded_client.get("/api/songs", params={"page": "99999999999999999999"})
    assert response.status_code == 200
    body = response.json()
    assert body["data"] == []
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPrevPage"] is True

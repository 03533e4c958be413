from songapp.services.expressions import MatchAll
from songapp.services.predicates import build_predicate
from songapp.services.query import normalize_query
from songapp.services.ranking import build_ordering, build_relevance, score_song
from songapp.stores.memory import InMemorySongStore
from songapp.stores.mongo import compile_pipeline, compile_relevance


def song(title, artist="Nobody", album="Nothing", genre="None"):
    return {"title": title, "artist": artist, "album": album, "genre": genre}


def test_title_points_are_mutually_exclusive():
    assert score_song(song("Imagine"), "imagine") == 100
    assert score_song(song("Imagine (Remix)"), "Imagine") == 60
    assert score_song(song("Songs about Imagine"), "Imagine") == 40
    assert score_song(song("Yesterday"), "Imagine") == 0


def test_secondary_fields_add_up():
    assert score_song(song("x", artist="Imagine Dragons"), "imagine") == 10
    assert score_song(song("x", album="Imagine"), "imagine") == 8
    assert score_song(song("x", genre="imagine-core"), "imagine") == 5
    full = song("Imagine", artist="Imagine", album="Imagine", genre="Imagine")
    assert score_song(full, "imagine") == 123


def test_ordering_without_search_has_no_relevance():
    ordering = build_ordering(normalize_query({"sortBy": "title", "sortOrder": "asc"}))
    assert ordering.relevance is None
    assert ordering.keys == (("title", 1), ("_id", 1))


async def insert_all(store, songs):
    for fields in songs:
        await store.insert(fields)


async def ranked(store, params):
    query = normalize_query(params)
    return await store.find(
        build_predicate(query), build_ordering(query), skip=query.skip, limit=query.limit
    )


async def test_exact_then_prefix_then_contains():
    store = InMemorySongStore()
    await insert_all(store, [
        song("Songs about Imagine"),
        song("Imagine (Remix)"),
        song("Imagine"),
    ])

    results = await ranked(store, {"search": "Imagine"})

    assert [doc["title"] for doc in results] == ["Imagine", "Imagine (Remix)", "Songs about Imagine"]
    assert [doc["score"] for doc in results] == [100, 60, 40]


async def test_title_match_outranks_all_secondary_matches():
    store = InMemorySongStore()
    await insert_all(store, [
        song("Quiet", artist="Neon Drift", album="Neon Nights", genre="Neon Pop"),
        song("The Neon Hour"),
    ])

    results = await ranked(store, {"search": "neon"})

    assert [doc["title"] for doc in results] == ["The Neon Hour", "Quiet"]
    assert [doc["score"] for doc in results] == [40, 23]


async def test_equal_scores_fall_back_to_requested_sort():
    store = InMemorySongStore()
    await insert_all(store, [
        song("Beta", artist="Echo"),
        song("Alpha", artist="Echo"),
        song("Gamma", artist="Echo"),
    ])

    ascending = await ranked(store, {"search": "echo", "sortBy": "title", "sortOrder": "asc"})
    descending = await ranked(store, {"search": "echo", "sortBy": "title", "sortOrder": "desc"})

    assert [doc["title"] for doc in ascending] == ["Alpha", "Beta", "Gamma"]
    assert [doc["title"] for doc in descending] == ["Gamma", "Beta", "Alpha"]


async def test_unranked_results_carry_no_score():
    store = InMemorySongStore()
    await insert_all(store, [song("Imagine")])

    results = await ranked(store, {})

    assert "score" not in results[0]


def test_compile_relevance_shape():
    compiled = compile_relevance(build_relevance("Imagine"))
    switches = compiled["$add"]
    assert len(switches) == 4

    title = switches[0]["$switch"]
    assert [branch["then"] for branch in title["branches"]] == [100, 60, 40]
    assert title["default"] == 0
    assert title["branches"][0]["case"] == {
        "$regexMatch": {
            "input": {"$ifNull": ["$title", ""]},
            "regex": "^Imagine$",
            "options": "i",
        }
    }
    assert [s["$switch"]["branches"][0]["then"] for s in switches[1:]] == [10, 8, 5]


def test_compile_pipeline_sorts_by_score_first():
    query = normalize_query({"search": "neon", "sortBy": "artist", "sortOrder": "asc", "page": "2", "limit": "5"})
    pipeline = compile_pipeline(build_predicate(query), build_ordering(query), query.skip, query.limit)

    stages = [next(iter(stage)) for stage in pipeline]
    assert stages == ["$match", "$addFields", "$sort", "$skip", "$limit"]
    assert list(pipeline[2]["$sort"].items()) == [("_score", -1), ("artist", 1), ("_id", 1)]
    assert pipeline[3] == {"$skip": 5}
    assert pipeline[4] == {"$limit": 5}


def test_compile_pipeline_match_all():
    query = normalize_query({"search": "x"})
    pipeline = compile_pipeline(MatchAll(), build_ordering(query), 0, 10)
    assert pipeline[0] == {"$match": {}}
    assert {"$skip": 0} not in pipeline

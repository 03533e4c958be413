"""
Relevance ranking for free-text search

songapp/services/ranking.py

Title relevance dominates: the weakest title match (40) still outweighs
every secondary field matching at once (10 + 8 + 5).
"""
from typing import Any, Mapping
from songapp.services.expressions import (
    MatchMode,
    Ordering,
    Relevance,
    ScoreRule,
    TextMatch,
    score,
)
from songapp.services.query import SongQuery

TITLE_EXACT_POINTS = 100
TITLE_PREFIX_POINTS = 60
TITLE_CONTAINS_POINTS = 40
ARTIST_POINTS = 10
ALBUM_POINTS = 8
GENRE_POINTS = 5


def build_relevance(search: str) -> Relevance:
    title = ScoreRule((
        (TextMatch("title", search, MatchMode.EXACT), TITLE_EXACT_POINTS),
        (TextMatch("title", search, MatchMode.PREFIX), TITLE_PREFIX_POINTS),
        (TextMatch("title", search, MatchMode.CONTAINS), TITLE_CONTAINS_POINTS),
    ))
    return Relevance((
        title,
        ScoreRule(((TextMatch("artist", search), ARTIST_POINTS),)),
        ScoreRule(((TextMatch("album", search), ALBUM_POINTS),)),
        ScoreRule(((TextMatch("genre", search), GENRE_POINTS),)),
    ))


def score_song(song: Mapping[str, Any], search: str) -> int:
    return score(build_relevance(search), song)


def build_ordering(query: SongQuery) -> Ordering:
    """Score descending when searching, then the requested sort, then _id"""
    keys = ((query.sort_field, query.sort_direction), ("_id", 1))
    relevance = build_relevance(query.search) if query.search else None
    return Ordering(keys=keys, relevance=relevance)

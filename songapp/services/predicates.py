"""
Predicate builder

songapp/services/predicates.py
"""
from songapp.services.expressions import And, Expression, MatchAll, MatchMode, Or, TextMatch
from songapp.services.query import SongQuery

SEARCH_FIELDS = ("title", "artist", "album", "genre")


def search_clause(search: str) -> Or:
    """Search term appears in any descriptive field"""
    return Or(tuple(TextMatch(field, search, MatchMode.CONTAINS) for field in SEARCH_FIELDS))


def build_predicate(query: SongQuery) -> Expression:
    """
    Combine the active filters and the search term into one predicate.

    - Each filter is a case-insensitive literal substring match on its field
    - Search matches title, artist, album or genre
    - Every active condition must hold
    """
    conditions = [
        TextMatch(field, value, MatchMode.CONTAINS)
        for field, value in query.filters.items()
    ]
    if query.search:
        conditions.append(search_clause(query.search))

    if not conditions:
        return MatchAll()
    if len(conditions) == 1:
        return conditions[0]
    return And(tuple(conditions))

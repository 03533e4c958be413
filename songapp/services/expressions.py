"""
Store-agnostic query expressions

songapp/services/expressions.py

Predicates and relevance scores are built once per request from these
small value types; each store backend compiles or evaluates them in its
own query language.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union


class MatchMode(str, Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class MatchAll:
    """Matches every record"""


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive literal comparison of a field against a value"""
    field: str
    value: str
    mode: MatchMode = MatchMode.CONTAINS


@dataclass(frozen=True)
class And:
    clauses: Tuple["Expression", ...]


@dataclass(frozen=True)
class Or:
    clauses: Tuple["Expression", ...]


Expression = Union[MatchAll, TextMatch, And, Or]


@dataclass(frozen=True)
class ScoreRule:
    """First matching branch contributes its points, otherwise zero"""
    branches: Tuple[Tuple[Expression, int], ...]


@dataclass(frozen=True)
class Relevance:
    """Sum of score rules"""
    rules: Tuple[ScoreRule, ...]


@dataclass(frozen=True)
class Ordering:
    """Result ordering: relevance first (when present), then field keys"""
    keys: Tuple[Tuple[str, int], ...]
    relevance: Optional[Relevance] = None


def text_matches(text: Any, match: TextMatch) -> bool:
    if not isinstance(text, str):
        return False
    haystack = text.lower()
    needle = match.value.lower()
    if match.mode is MatchMode.EXACT:
        return haystack == needle
    if match.mode is MatchMode.PREFIX:
        return haystack.startswith(needle)
    return needle in haystack


def evaluate(expression: Expression, document: Mapping[str, Any]) -> bool:
    """Evaluate a predicate against a plain document"""
    if isinstance(expression, MatchAll):
        return True
    if isinstance(expression, TextMatch):
        return text_matches(document.get(expression.field), expression)
    if isinstance(expression, And):
        return all(evaluate(clause, document) for clause in expression.clauses)
    if isinstance(expression, Or):
        return any(evaluate(clause, document) for clause in expression.clauses)
    raise TypeError(f"Unsupported expression: {expression!r}")


def score(relevance: Relevance, document: Mapping[str, Any]) -> int:
    """Evaluate a relevance expression against a plain document"""
    total = 0
    for rule in relevance.rules:
        for condition, points in rule.branches:
            if evaluate(condition, document):
                total += points
                break
    return total

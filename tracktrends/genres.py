"""
Primary-genre resolution for raw catalog rows.

The source table carries genre information in two inconsistent columns:

- ``genres``: usually a stringified list such as ``['pop', 'dance pop']``,
  sometimes JSON-ish with mixed quotes, sometimes ``[]`` or empty.
- ``genre``: a single free-form label, often polluted with stray quotes and
  brackets (``  ['Pop']"``).

Resolution is first-match-wins: the first element of the decoded ``genres``
list, then the cleaned ``genre`` label, then ``UNKNOWN_GENRE``.
"""

import json
import re
from typing import List

UNKNOWN_GENRE = "Unknown"
EMPTY_LIST_TOKEN = "[]"

_EDGE_QUOTE = re.compile(r"^['\"]|['\"]$")
_TRAILING_BRACKET_QUOTE = re.compile(r"(\][\"'])+\s*$")
_QUOTES = re.compile(r"['\"]")
_BRACKETS = re.compile(r"[\[\]]")


def _split_bracketed(value: str) -> List[str]:
    items = [g.strip() for g in value[1:-1].split(',')]
    return [_EDGE_QUOTE.sub('', g) for g in items]


def _decode_list_literal(value: str) -> List[str]:
    try:
        parsed = json.loads(value.replace("'", '"'))
    except (json.JSONDecodeError, RecursionError):
        return []
    if not isinstance(parsed, list):
        return []
    return [str(g).strip() for g in parsed if g is not None]


def parse_genre_list(value) -> List[str]:
    """Decode a ``genres`` cell into genre names, or [] when it can't be decoded."""
    if not isinstance(value, str) or value in ("", EMPTY_LIST_TOKEN):
        return []

    if value.startswith('[') and value.endswith(']'):
        genres = _split_bracketed(value)
    else:
        genres = _decode_list_literal(value)

    return [g for g in genres if g]


def clean_genre_label(value) -> str:
    """Strip quotes, brackets and trailing ``]"`` debris from a ``genre`` cell."""
    if not isinstance(value, str):
        return ""
    cleaned = _TRAILING_BRACKET_QUOTE.sub('', value)
    cleaned = _QUOTES.sub('', cleaned)
    cleaned = _BRACKETS.sub('', cleaned)
    return cleaned.strip()


def resolve_primary_genre(genres, genre) -> str:
    listed = parse_genre_list(genres)
    if listed and listed[0] != UNKNOWN_GENRE:
        return listed[0]

    if isinstance(genre, str) and genre not in ("", UNKNOWN_GENRE):
        cleaned = clean_genre_label(genre)
        if cleaned and cleaned != UNKNOWN_GENRE:
            return cleaned

    return UNKNOWN_GENRE

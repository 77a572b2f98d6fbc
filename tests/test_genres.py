import pytest

from tracktrends.genres import (
    UNKNOWN_GENRE, clean_genre_label, parse_genre_list, resolve_primary_genre,
)


@pytest.mark.parametrize("value, expected", [
    ("['pop', 'dance pop']", ["pop", "dance pop"]),
    ('["hip hop","rap"]', ["hip hop", "rap"]),
    ("[rock]", ["rock"]),
    ("['', '']", []),
    ("[ ]", []),
    ("[]", []),
    ("", []),
    (None, []),
    (float("nan"), []),
])
def test_parse_bracketed_lists(value, expected):
    assert parse_genre_list(value) == expected


def test_parse_strips_only_one_layer_of_quotes():
    assert parse_genre_list("[''indie'']") == ["'indie'"]


def test_parse_falls_back_to_list_literal_when_not_bracket_delimited():
    # leading whitespace defeats the bracket check but decodes as a literal
    assert parse_genre_list(" ['latin', 'reggaeton']") == ["latin", "reggaeton"]


@pytest.mark.parametrize("value", [
    "pop, rock",
    "'pop'",
    "42",
    "{'genre': 'pop'}",
    " [unterminated",
    pytest.param(" " + "[" * 100000 + "]" * 100000, id="deeply-nested"),
])
def test_parse_undecodable_values_give_empty_list(value):
    assert parse_genre_list(value) == []


@pytest.mark.parametrize("value, expected", [
    ("  ['Pop']\"", "Pop"),
    ("'Rock'", "Rock"),
    ("[\"Soul\"]\"", "Soul"),
    ("  Blues ", "Blues"),
    ("['']", ""),
    (None, ""),
])
def test_clean_genre_label(value, expected):
    assert clean_genre_label(value) == expected


def test_structured_list_wins_over_genre_field():
    assert resolve_primary_genre("['k-pop', 'pop']", "Rock") == "k-pop"


def test_genre_field_used_when_list_is_empty():
    assert resolve_primary_genre("[]", "  ['Pop']\"") == "Pop"


def test_genre_field_used_when_list_is_unparseable():
    assert resolve_primary_genre("pop, rock", "  ['Pop']\"") == "Pop"


def test_genre_field_used_when_list_only_names_unknown():
    assert resolve_primary_genre("['Unknown']", "Jazz") == "Jazz"


@pytest.mark.parametrize("genres, genre", [
    ("", ""),
    ("[]", "Unknown"),
    ("", "['Unknown']"),
    ("", "[\"\"]"),
    (None, None),
])
def test_unknown_when_nothing_recoverable(genres, genre):
    assert resolve_primary_genre(genres, genre) == UNKNOWN_GENRE


def test_deeply_nested_list_falls_back_to_genre_field():
    assert resolve_primary_genre(" " + "[" * 100000 + "]" * 100000, "Rock") == "Rock"

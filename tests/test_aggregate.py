import pandas as pd
import pytest

from tracktrends.aggregate import (
    artist_rollup, decade_count, decades, filter_by_genre, genre_by_decade, genre_counts,
    max_stack_height, overview_stats, ranked_artists, sample_for_scatter, stack_by_decade,
    top_genres, valid_timeline_genres,
)
from tracktrends.models import ArtistFilter, Order, RankBy


def test_genre_counts_first_seen_order_and_unknown_included(small_tracks):
    counts = genre_counts(small_tracks)
    assert list(counts.index) == ['jazz', 'swing', 'fusion', 'pop', 'Unknown']
    assert counts['jazz'] == 5
    assert counts['Unknown'] == 1


def test_genre_counts_skips_empty_keys(make_tracks):
    tracks = make_tracks([("a", "", 1990, 1, 1), ("b", "rock", 1990, 1, 1)])
    assert genre_counts(tracks).to_dict() == {'rock': 1}


def test_top_genres_ties_keep_first_seen_order(small_tracks):
    assert top_genres(small_tracks, 3) == [('jazz', 5), ('pop', 2), ('swing', 1)]


def test_top_genres_min_count(small_tracks):
    assert top_genres(small_tracks, 10, min_count=2) == [('jazz', 5), ('pop', 2)]


def test_genre_by_decade_table(small_tracks):
    table = genre_by_decade(small_tracks)
    assert list(table.columns) == [1950, 1960, 1970, 1980, 2000, 2010, 2020]
    assert table.loc['jazz', 1950] == 3
    assert table.loc['swing', 1950] == 0
    assert table.loc['pop'].sum() == 2


def test_decade_count_sparse_lookup(small_tracks):
    table = genre_by_decade(small_tracks)
    assert decade_count(table, 'jazz', 1950) == 3
    assert decade_count(table, 'fusion', 1950) == 0
    assert decade_count(table, 'polka', 1950) == 0
    assert decade_count(table, 'jazz', 1890) == 0


def test_genre_by_decade_empty(make_tracks):
    tracks = make_tracks([("a", "", 1990, 1, 1)])
    table = genre_by_decade(tracks)
    assert table.empty
    assert decade_count(table, 'rock', 1990) == 0
    assert valid_timeline_genres(tracks) == []


def test_decades(small_tracks):
    assert decades(small_tracks) == [1950, 1960, 1970, 1980, 2000, 2010, 2020]


def test_valid_timeline_genres_threshold_is_strict(make_tracks):
    rows = (
        [("a", "fifty", 1990, 1, 1)] * 50
        + [("b", "fifty-one", 1980, 1, 1)] * 30
        + [("b", "fifty-one", 2000, 1, 1)] * 21
        + [("c", "Unknown", 1990, 1, 1)] * 100
    )
    assert valid_timeline_genres(make_tracks(rows)) == ['fifty-one']


def test_valid_timeline_genres_top_cap(make_tracks):
    rows = []
    for i in range(10):
        rows += [("x", f"g{i}", 1990, 1, 1)] * (60 + i)
    genres = valid_timeline_genres(make_tracks(rows))
    assert genres == [f"g{i}" for i in range(9, 1, -1)]


def test_stack_by_decade(small_tracks):
    stacks = stack_by_decade(small_tracks, ['jazz', 'pop'])
    first = stacks[0]
    assert first['decade'] == 1950
    assert first['layers']['jazz'] == {'y0': 0, 'y1': 3, 'value': 3}
    assert first['layers']['pop'] == {'y0': 3, 'y1': 3, 'value': 0}
    assert [s['total'] for s in stacks] == [3, 1, 0, 1, 0, 1, 1]
    assert max_stack_height(stacks) == 3
    assert max_stack_height([]) == 0


def test_artist_rollup(small_tracks):
    rollup = artist_rollup(small_tracks)
    ella = rollup.loc['Ella']
    assert ella['track_count'] == 3
    assert ella['mean_track_popularity'] == pytest.approx(50)
    assert ella['mean_artist_popularity'] == pytest.approx(70)
    assert ella['distinct_genres'] == ['jazz', 'swing']
    assert rollup.loc['Miles', 'distinct_genres'] == ['jazz', 'fusion']


def test_ranked_artists_default_filter(small_tracks):
    ranked = ranked_artists(small_tracks)
    assert list(ranked.index) == ['Miles', 'Ella']


@pytest.fixture
def ten_artists(make_tracks):
    rows = []
    # artist_i has i tracks; popularity runs opposite to the track count
    for i in range(3, 13):
        rows += [(f"artist_{i}", "rock", 2000, 100 - i, 50 + i)] * i
    rows += [("one_hit", "rock", 2000, 99, 99)]
    rows += [("two_hits", "rock", 2000, 99, 99)] * 2
    return make_tracks(rows)


def test_ranked_artists_bottom_by_track_count(ten_artists):
    ranked = ranked_artists(ten_artists, ArtistFilter(count=5, rank_by=RankBy.TRACK_COUNT, order=Order.BOTTOM))
    assert list(ranked.index) == [f"artist_{i}" for i in (3, 4, 5, 6, 7)]
    assert list(ranked['track_count']) == [3, 4, 5, 6, 7]


def test_ranked_artists_top_by_track_count(ten_artists):
    ranked = ranked_artists(ten_artists, ArtistFilter(count=3, rank_by=RankBy.TRACK_COUNT))
    assert list(ranked.index) == ['artist_12', 'artist_11', 'artist_10']


def test_ranked_artists_by_popularity_excludes_small_catalogs(ten_artists):
    ranked = ranked_artists(ten_artists, ArtistFilter(count=2))
    assert list(ranked.index) == ['artist_3', 'artist_4']


def test_ranked_artists_by_artist_popularity(ten_artists):
    ranked = ranked_artists(ten_artists, ArtistFilter(count=1, rank_by=RankBy.ARTIST_POPULARITY))
    assert list(ranked.index) == ['artist_12']


def test_ranked_artists_respects_genre_view(small_tracks):
    ranked = ranked_artists(filter_by_genre(small_tracks, 'jazz'))
    assert list(ranked.index) == ['Miles']


def test_filter_by_genre_none_returns_everything(small_tracks):
    assert len(filter_by_genre(small_tracks, None)) == len(small_tracks)
    assert len(filter_by_genre(small_tracks, 'pop')) == 2


def test_overview_stats(small_tracks):
    stats = overview_stats(small_tracks)
    assert stats['total_tracks'] == 10
    assert stats['avg_popularity'] == pytest.approx(58.5)
    assert stats['year_span'] == 65
    assert stats['top_genres'][0] == ('jazz', 5)


def test_overview_stats_empty(small_tracks):
    stats = overview_stats(small_tracks.iloc[0:0])
    assert stats == {'total_tracks': 0, 'avg_popularity': 0.0, 'year_span': 0, 'top_genres': []}


def test_sample_for_scatter(make_tracks):
    tracks = make_tracks([("a", "rock", 2000, 1, 1)] * 25)
    assert len(sample_for_scatter(tracks, max_points=25)) == 25
    sampled = sample_for_scatter(tracks, max_points=10)
    assert list(sampled.index) == list(range(0, 25, 2))


def test_aggregations_leave_input_untouched(small_tracks):
    before = small_tracks.copy()
    genre_counts(small_tracks)
    top_genres(small_tracks)
    genre_by_decade(small_tracks)
    valid_timeline_genres(small_tracks)
    stack_by_decade(small_tracks, ['jazz'])
    artist_rollup(small_tracks)
    ranked_artists(small_tracks)
    overview_stats(small_tracks)
    sample_for_scatter(small_tracks, max_points=3)
    pd.testing.assert_frame_equal(small_tracks, before)

"""
Grouped statistics over the working set of normalized tracks.

Every function here is pure: it reads the tracks frame, never writes to it,
and builds its result from scratch on each call. Nothing is cached between
calls, so a change of selected genre or artist filter is always reflected
by simply calling again.
"""

from typing import Dict, List, Optional, Tuple

import pandas as pd

from .genres import UNKNOWN_GENRE
from .models import ArtistFilter, Order, RankBy
from .utils import decade_of

OVERVIEW_TOP_N = 10
TIMELINE_TOP_N = 8
TIMELINE_MIN_TOTAL = 50
MIN_ARTIST_TRACKS = 3
SCATTER_MAX_POINTS = 10000

RANK_COLUMNS = {
    RankBy.POPULARITY: 'mean_track_popularity',
    RankBy.TRACK_COUNT: 'track_count',
    RankBy.ARTIST_POPULARITY: 'mean_artist_popularity',
}


def _has_genre(genres: pd.Series) -> pd.Series:
    return genres.notna() & (genres != '')


def filter_by_genre(tracks: pd.DataFrame, genre: Optional[str] = None) -> pd.DataFrame:
    if genre is None:
        return tracks
    return tracks.loc[tracks['primary_genre'] == genre]


def genre_counts(tracks: pd.DataFrame) -> pd.Series:
    """Tracks per primary genre in first-seen order. "Unknown" is counted, empty keys are not."""
    genres = tracks['primary_genre']
    genres = genres[_has_genre(genres)]
    return genres.groupby(genres, sort=False).size().rename('count')


def top_genres(tracks: pd.DataFrame, n: int = OVERVIEW_TOP_N, min_count: int = 1) -> List[Tuple[str, int]]:
    """
    The ``n`` most common genres with at least ``min_count`` tracks.
    Ties keep first-seen order.
    """
    counts = genre_counts(tracks)
    counts = counts[counts >= min_count]
    counts = counts.sort_values(ascending=False, kind='stable')
    return [(genre, int(count)) for genre, count in counts.head(n).items()]


def decades(tracks: pd.DataFrame) -> List[int]:
    return sorted(int(d) for d in decade_of(tracks['year']).unique())


def genre_by_decade(tracks: pd.DataFrame) -> pd.DataFrame:
    """
    Track counts as a genre x decade table, zero-filled. Rows are genres in
    first-seen order, columns are decades ascending.
    """
    df = tracks.loc[_has_genre(tracks['primary_genre']), ['primary_genre', 'year']]
    if df.empty:
        return pd.DataFrame(
            index=pd.Index([], name='primary_genre', dtype=object),
            columns=pd.Index([], name='decade', dtype=int),
            dtype=int,
        )

    df = df.assign(decade=decade_of(df['year']))
    table = df.groupby(['primary_genre', 'decade']).size().unstack(fill_value=0)
    table = table.reindex(
        index=pd.unique(df['primary_genre']),
        columns=sorted(df['decade'].unique()),
        fill_value=0,
    )
    return table.rename_axis(index='primary_genre', columns='decade')


def decade_count(table: pd.DataFrame, genre: str, decade: int) -> int:
    """Look up one cell of a ``genre_by_decade`` table. Absent pairs count as 0."""
    if genre not in table.index or decade not in table.columns:
        return 0
    return int(table.at[genre, decade])


def valid_timeline_genres(tracks: pd.DataFrame, top_n: int = TIMELINE_TOP_N,
                          min_total: int = TIMELINE_MIN_TOTAL) -> List[str]:
    """
    Genres worth stacking on the timeline: not "Unknown", more than
    ``min_total`` tracks overall, the ``top_n`` largest by total.
    """
    totals = genre_by_decade(tracks).sum(axis=1)
    totals = totals[(totals.index != UNKNOWN_GENRE) & (totals > min_total)]
    totals = totals.sort_values(ascending=False, kind='stable')
    return list(totals.head(top_n).index)


def stack_by_decade(tracks: pd.DataFrame, genres: List[str]) -> List[Dict]:
    table = genre_by_decade(tracks)
    stacks = []
    for decade in decades(tracks):
        layers = {}
        current = 0
        for genre in genres:
            value = decade_count(table, genre, decade)
            layers[genre] = {'y0': current, 'y1': current + value, 'value': value}
            current += value
        stacks.append({'decade': decade, 'layers': layers, 'total': current})
    return stacks


def max_stack_height(stacks: List[Dict]) -> int:
    return max((s['total'] for s in stacks), default=0)


def artist_rollup(tracks: pd.DataFrame) -> pd.DataFrame:
    """Per-artist track count, mean popularities and ordered distinct genres."""
    grouped = tracks.groupby('name_artist', sort=False)
    rollup = grouped.agg(
        track_count=('name_track', 'size'),
        mean_track_popularity=('popularity_track', 'mean'),
        mean_artist_popularity=('popularity_artist', 'mean'),
    )
    rollup['distinct_genres'] = grouped['primary_genre'].unique().map(list)
    return rollup


def ranked_artists(tracks: pd.DataFrame, artist_filter: Optional[ArtistFilter] = None) -> pd.DataFrame:
    """
    Artists with at least MIN_ARTIST_TRACKS tracks, ranked by the filter's
    metric. ``Order.BOTTOM`` reverses the descending ranking.
    """
    artist_filter = artist_filter or ArtistFilter()
    rollup = artist_rollup(tracks)
    eligible = rollup[rollup['track_count'] >= MIN_ARTIST_TRACKS]

    ranked = eligible.sort_values(RANK_COLUMNS[artist_filter.rank_by], ascending=False, kind='stable')
    if artist_filter.order is Order.BOTTOM:
        ranked = ranked.iloc[::-1]
    return ranked.head(artist_filter.count)


def overview_stats(tracks: pd.DataFrame) -> Dict:
    if tracks.empty:
        return {'total_tracks': 0, 'avg_popularity': 0.0, 'year_span': 0, 'top_genres': []}

    return {
        'total_tracks': len(tracks),
        'avg_popularity': float(tracks['popularity_track'].mean()),
        'year_span': int(tracks['year'].max() - tracks['year'].min()),
        'top_genres': top_genres(tracks, OVERVIEW_TOP_N),
    }


def sample_for_scatter(tracks: pd.DataFrame, max_points: int = SCATTER_MAX_POINTS) -> pd.DataFrame:
    """Display-only thinning: every floor(N / max_points)-th track once N exceeds the cap."""
    if len(tracks) <= max_points:
        return tracks
    step = len(tracks) // max_points
    return tracks.iloc[::step]

import pandas as pd
import pytest


def _build_tracks(rows):
    """Build a working-set frame from (artist, genre, year, track_pop, artist_pop) tuples."""
    return pd.DataFrame(
        [
            {
                'name_track': f"{artist} #{i}",
                'name_artist': artist,
                'primary_genre': genre,
                'year': year,
                'popularity_track': float(track_pop),
                'popularity_artist': float(artist_pop),
                'danceability': 0.5,
                'energy': 0.5,
            }
            for i, (artist, genre, year, track_pop, artist_pop) in enumerate(rows)
        ]
    )


@pytest.fixture
def small_tracks():
    return _build_tracks([
        ("Ella", "jazz", 1955, 60, 70),
        ("Ella", "jazz", 1958, 40, 70),
        ("Ella", "swing", 1961, 50, 70),
        ("Miles", "jazz", 1959, 80, 75),
        ("Miles", "jazz", 1969, 70, 75),
        ("Miles", "fusion", 1970, 60, 75),
        ("Miles", "jazz", 1985, 30, 75),
        ("Dua", "pop", 2020, 90, 88),
        ("Dua", "pop", 2017, 85, 88),
        ("Solo", "Unknown", 2001, 20, 10),
    ])


@pytest.fixture
def make_tracks():
    return _build_tracks

from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd
from tqdm import tqdm

from .errors import DataLoadFailure
from .genres import UNKNOWN_GENRE, resolve_primary_genre
from .utils import coerce_numeric, parse_release_dates, to_raw_frame

RAW_COLUMNS = [
    'popularity_track', 'popularity_artist', 'danceability', 'energy',
    'release_date', 'genres', 'genre', 'name_track', 'name_artist'
]
NUMERIC_COLUMNS = ['popularity_track', 'popularity_artist', 'danceability', 'energy']
TRACK_COLUMNS = [
    'name_track', 'name_artist', 'primary_genre', 'release_date', 'year',
    *NUMERIC_COLUMNS
]
YEAR_MIN = 1920
YEAR_MAX = 2023


@dataclass
class CoercionReport:
    """Counts of silently defaulted values. Purely informational."""
    rows: int = 0
    numeric_defaults: Dict[str, int] = field(default_factory=dict)
    unparsed_dates: int = 0
    unknown_genres: int = 0
    out_of_range_years: int = 0

    @property
    def defaulted_fields(self) -> int:
        return sum(self.numeric_defaults.values()) + self.unparsed_dates + self.unknown_genres


def normalize(rows, verbose=False, report: Optional[CoercionReport] = None) -> pd.DataFrame:
    """
    Turn raw catalog rows into canonical tracks, one output row per input row.

    Numeric cells that don't parse become 0, unparseable dates give a NaN
    year, and genres go through the two-tier primary-genre resolution.
    Nothing is dropped here; see ``filter_years``.
    """
    raw = to_raw_frame(rows, RAW_COLUMNS)
    df = pd.DataFrame(index=raw.index)

    df['name_track'] = raw['name_track']
    df['name_artist'] = raw['name_artist']

    genre_pairs = zip(raw['genres'], raw['genre'])
    df['primary_genre'] = [
        resolve_primary_genre(genres, genre)
        for genres, genre in tqdm(genre_pairs, total=len(raw), desc="Resolving genres", disable=not verbose)
    ]

    df['release_date'] = parse_release_dates(raw['release_date'])
    df['year'] = df['release_date'].dt.year.astype(float)

    for col in NUMERIC_COLUMNS:
        parsed = coerce_numeric(raw[col])
        if report is not None:
            report.numeric_defaults[col] = report.numeric_defaults.get(col, 0) + int(parsed.isna().sum())
        df[col] = parsed.fillna(0.0).astype(float)

    if report is not None:
        report.rows += len(df)
        report.unparsed_dates += int(df['release_date'].isna().sum())
        report.unknown_genres += int((df['primary_genre'] == UNKNOWN_GENRE).sum())

    return df[TRACK_COLUMNS].reset_index(drop=True)


def filter_years(tracks: pd.DataFrame, verbose=False, report: Optional[CoercionReport] = None) -> pd.DataFrame:
    """Keep tracks released between YEAR_MIN and YEAR_MAX inclusive. NaN years never pass."""
    in_range = tracks['year'].between(YEAR_MIN, YEAR_MAX)
    kept = tracks.loc[in_range].copy()
    kept['year'] = kept['year'].astype(int)

    dropped = len(tracks) - len(kept)
    if report is not None:
        report.out_of_range_years += dropped
    if verbose:
        print(f"Dropped {dropped} tracks outside {YEAR_MIN}-{YEAR_MAX}", flush=True)

    return kept.reset_index(drop=True)


def read_raw_rows(filepath: str) -> pd.DataFrame:
    try:
        raw = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    except (OSError, ValueError) as e:
        raise DataLoadFailure(f"Could not read '{filepath}': {e}") from e

    if not any(col in raw.columns for col in RAW_COLUMNS):
        raise DataLoadFailure(
            f"'{filepath}' has none of the expected columns; found {list(raw.columns)}"
        )
    return raw


def load_and_clean(filepath: str, verbose=False, report: Optional[CoercionReport] = None) -> pd.DataFrame:
    raw = read_raw_rows(filepath)
    if verbose:
        print(f"Loaded {len(raw)} rows from '{filepath}'", flush=True)

    tracks = normalize(raw, verbose=verbose, report=report)
    return filter_years(tracks, verbose=verbose, report=report)


if __name__ == "__main__":
    from .config import DATA_PATH

    coercion = CoercionReport()
    df_clean = load_and_clean(DATA_PATH, verbose=True, report=coercion)
    print("Cleaned data:")
    print(df_clean.shape)
    print(f"Total tracks: {len(df_clean)}")
    print(f"Defaulted fields: {coercion.defaulted_fields}")

import re

import numpy as np
import pandas as pd

# UTC offset trailing a clock time, e.g. "T00:00:00+05:00" or "12:30Z"
_UTC_OFFSET = re.compile(r"(\d:\d{2}(?::\d{2}(?:\.\d+)?)?)\s*(?:Z|[+-]\d{2}(?::?\d{2})?)$", re.IGNORECASE)


def coerce_numeric(values: pd.Series) -> pd.Series:
    """Parse string cells as floats. Unparseable or non-finite cells (empty, junk, inf) become NaN."""
    parsed = pd.to_numeric(values.astype(str).str.strip(), errors='coerce')
    return parsed.replace([np.inf, -np.inf], np.nan)


def parse_release_dates(values: pd.Series) -> pd.Series:
    """
    Parse release dates of mixed precision ("1999", "1999-05", "1999-05-21",
    ISO timestamps). Anything unparseable becomes NaT instead of raising.

    Offsets are dropped before parsing so the result keeps the local
    wall-clock date; converting "2005-01-01T00:00:00+05:00" to UTC would
    land in 2004.
    """
    local = values.astype(str).str.strip().str.replace(_UTC_OFFSET, r"\1", regex=True)
    return pd.to_datetime(local, errors='coerce', format='mixed', utc=True)


def decade_of(years: pd.Series) -> pd.Series:
    return (np.floor(years / 10) * 10).astype(int)


def to_raw_frame(rows, columns) -> pd.DataFrame:
    """
    Return ``rows`` (a DataFrame or an iterable of mappings) as a frame of
    strings holding exactly ``columns``. Absent columns and missing cells
    become "".
    """
    if isinstance(rows, pd.DataFrame):
        df = rows.copy()
    else:
        df = pd.DataFrame.from_records(list(rows))
    df = df.reindex(columns=columns)
    return df.astype(object).fillna('').astype(str)

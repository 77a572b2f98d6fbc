from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidFilterValue

ARTIST_COUNT_OPTIONS = (5, 10, 15, 20)


class RankBy(str, Enum):
    POPULARITY = "popularity"
    TRACK_COUNT = "tracks"
    ARTIST_POPULARITY = "artist-popularity"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        aliases = {
            "trackcount": cls.TRACK_COUNT,
            "track_count": cls.TRACK_COUNT,
            "artistpopularity": cls.ARTIST_POPULARITY,
            "artist_popularity": cls.ARTIST_POPULARITY,
        }
        return aliases.get(value.strip().lower())


class Order(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


def _check_count(count) -> int:
    if isinstance(count, str) and count.strip().isdigit():
        count = int(count)
    if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count <= 0:
        raise InvalidFilterValue("count", count)
    return int(count)


def _check_choice(enum_cls, field, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidFilterValue(field, value) from None


@dataclass(frozen=True)
class ArtistFilter:
    count: int = 10
    rank_by: RankBy = RankBy.POPULARITY
    order: Order = Order.TOP

    def updated(self, count=None, rank_by=None, order=None) -> ArtistFilter:
        """Return a copy with the given fields replaced. Validates every field before building."""
        return ArtistFilter(
            count=self.count if count is None else _check_count(count),
            rank_by=self.rank_by if rank_by is None else _check_choice(RankBy, "rank_by", rank_by),
            order=self.order if order is None else _check_choice(Order, "order", order),
        )

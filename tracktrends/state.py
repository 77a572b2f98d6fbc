"""
Selection/scene state for the narrative.

A single ``SelectionState`` owns the current scene, the selected genre and
the artist ranking filter. Readers only ever see an immutable
``StateSnapshot``; every transition swaps in a new snapshot in one step and
then notifies subscribers once, so compound transitions (pick a genre and
jump to the scatter plot) are never observed half-applied. A transition
that fails validation raises before anything is swapped.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .errors import InvalidSceneIndex
from .models import ArtistFilter
from .scenes import ARTIST_ANALYSIS, SCATTER_PLOT, SCENE_COUNT


@dataclass(frozen=True)
class StateSnapshot:
    current_scene: int = 0
    selected_genre: Optional[str] = None
    artist_filter: ArtistFilter = ArtistFilter()


Listener = Callable[[StateSnapshot], None]


class SelectionState:
    def __init__(self, scene_count: int = SCENE_COUNT):
        self.scene_count = scene_count
        self._snapshot = StateSnapshot()
        self._listeners: List[Listener] = []

    @property
    def current_scene(self) -> int:
        return self._snapshot.current_scene

    @property
    def selected_genre(self) -> Optional[str]:
        return self._snapshot.selected_genre

    @property
    def artist_filter(self) -> ArtistFilter:
        return self._snapshot.artist_filter

    def snapshot(self) -> StateSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new snapshot after every transition. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _commit(self, **changes) -> StateSnapshot:
        self._snapshot = replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def _check_scene(self, index) -> int:
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise InvalidSceneIndex(index, self.scene_count)
        if not 0 <= index < self.scene_count:
            raise InvalidSceneIndex(index, self.scene_count)
        return int(index)

    def go_to_scene(self, index: int) -> StateSnapshot:
        return self._commit(current_scene=self._check_scene(index))

    def select_genre(self, genre: Optional[str]) -> StateSnapshot:
        # the scene is left alone; see select_genre_and_show
        return self._commit(selected_genre=genre or None)

    def select_genre_and_show(self, genre: Optional[str]) -> StateSnapshot:
        """Timeline click: select ``genre`` and move to the scatter plot as one transition."""
        return self._commit(selected_genre=genre or None, current_scene=self._check_scene(SCATTER_PLOT))

    def clear_genre(self) -> StateSnapshot:
        """Clear the genre filter and refresh the artist analysis as one transition."""
        return self._commit(selected_genre=None, current_scene=self._check_scene(ARTIST_ANALYSIS))

    def set_artist_filter(self, count=None, rank_by=None, order=None) -> StateSnapshot:
        # updated() validates every field before anything changes
        new_filter = self._snapshot.artist_filter.updated(count=count, rank_by=rank_by, order=order)
        return self._commit(artist_filter=new_filter)

import argparse
from typing import Callable, Optional

import pandas as pd

from .config import DATA_PATH, VERBOSE
from .console import print_view
from .data_prep import CoercionReport, load_and_clean
from .errors import (
    DataLoadFailure, InvalidFilterValue, InvalidSceneIndex, SessionNotReady, TrackTrendsError,
)
from .models import ARTIST_COUNT_OPTIONS, Order, RankBy
from .scenes import ErrorView, SCENE_COUNT, build_scene_view, get_scenes_json
from .state import SelectionState, StateSnapshot


class Narrative:
    """
    One viewing session: loads the working set once, owns the selection
    state and re-renders the current scene through ``sink`` after every
    transition.
    """

    def __init__(self, sink: Optional[Callable] = None, verbose: bool = VERBOSE):
        self.sink = sink or print_view
        self.verbose = verbose
        self.state = SelectionState()
        self.tracks: Optional[pd.DataFrame] = None
        self.failure: Optional[DataLoadFailure] = None
        self.report = CoercionReport()
        self.state.subscribe(self._on_state_change)

    @property
    def ready(self) -> bool:
        return self.tracks is not None

    def load(self, filepath: str = DATA_PATH) -> bool:
        """
        Load and clean the dataset, then render the current scene. On failure
        the sink gets an ErrorView and the session stays unusable.
        """
        if self.ready or self.failure is not None:
            raise TrackTrendsError("The dataset can only be loaded once per session")

        try:
            self.tracks = load_and_clean(filepath, verbose=self.verbose, report=self.report)
        except DataLoadFailure as e:
            self.failure = e
            if self.verbose:
                print("DEBUG - Error loading data:", e, flush=True)
            self.sink(ErrorView(message=str(e)))
            return False

        if self.verbose:
            print(f"Working set: {len(self.tracks)} tracks, "
                  f"{self.report.defaulted_fields} fields defaulted", flush=True)
        self.render()
        return True

    def render(self, snapshot: Optional[StateSnapshot] = None):
        if not self.ready:
            raise SessionNotReady("No dataset loaded")
        view = build_scene_view(snapshot or self.state.snapshot(), self.tracks)
        self.sink(view)
        return view

    def _on_state_change(self, snapshot: StateSnapshot):
        if self.ready:
            self.render(snapshot)

    def _require_ready(self):
        if not self.ready:
            raise SessionNotReady("Interactions are disabled until the dataset has loaded")

    # user interactions reported back by the presentation layer

    def go_to_scene(self, index: int) -> StateSnapshot:
        self._require_ready()
        return self.state.go_to_scene(index)

    def click_timeline_genre(self, genre: str) -> StateSnapshot:
        self._require_ready()
        return self.state.select_genre_and_show(genre)

    def change_artist_filter(self, count=None, rank_by=None, order=None) -> StateSnapshot:
        self._require_ready()
        return self.state.set_artist_filter(count=count, rank_by=rank_by, order=order)

    def clear_filters(self) -> StateSnapshot:
        self._require_ready()
        return self.state.clear_genre()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Walk through the Spotify music-trends narrative in the terminal.")
    ap.add_argument("csv", nargs="?", default=DATA_PATH, help="Tracks CSV (default: %(default)s)")
    ap.add_argument("--scene", type=int, help=f"Only show this scene (0-{SCENE_COUNT - 1})")
    ap.add_argument("--genre", help="Filter the scatter plot and artist analysis to one genre")
    ap.add_argument("--count", type=int, help=f"Number of artists to rank, e.g. {ARTIST_COUNT_OPTIONS}")
    ap.add_argument("--rank-by", choices=[r.value for r in RankBy], help="Artist ranking metric")
    ap.add_argument("--order", choices=[o.value for o in Order], help="Show the top or bottom of the ranking")
    ap.add_argument("--verbose", action="store_true", default=VERBOSE, help="Print loading diagnostics")
    ap.add_argument("--list-scenes", action="store_true", help="Print the scene definitions as JSON and exit")
    args = ap.parse_args(argv)

    if args.list_scenes:
        print(get_scenes_json())
        return 0

    narrative = Narrative(verbose=args.verbose)

    # configure state before loading so the first render already reflects it
    try:
        narrative.state.select_genre(args.genre)
        narrative.state.set_artist_filter(count=args.count, rank_by=args.rank_by, order=args.order)
        if args.scene is not None:
            narrative.state.go_to_scene(args.scene)
    except (InvalidSceneIndex, InvalidFilterValue) as e:
        ap.error(str(e))

    if not narrative.load(args.csv):
        return 1

    if args.scene is None:
        for index in range(1, SCENE_COUNT):
            narrative.go_to_scene(index)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

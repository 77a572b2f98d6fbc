"""
The four narrative scenes and the data each one hands to the presentation sink.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict

import pandas as pd

from .aggregate import (
    decades, filter_by_genre, genre_by_decade, max_stack_height, overview_stats,
    ranked_artists, sample_for_scatter, stack_by_decade, valid_timeline_genres,
)

OVERVIEW, GENRE_TIMELINE, SCATTER_PLOT, ARTIST_ANALYSIS = range(4)
SCATTER_COLUMNS = [
    'name_track', 'name_artist', 'primary_genre', 'danceability', 'energy', 'popularity_track'
]


@dataclass(frozen=True)
class SceneConfig:
    id: int
    title: str
    description: str
    chart_type: str


SCENES = (
    SceneConfig(
        OVERVIEW,
        "Welcome to Spotify Music Trends",
        "Let's explore how music has changed over the years using Spotify data. "
        "This shows some basic stats to get started.",
        "overview",
    ),
    SceneConfig(
        GENRE_TIMELINE,
        "How Genres Changed Over Time",
        "This chart shows which music genres were popular in different decades. "
        "You can click on genres to learn more about them.",
        "genre-timeline",
    ),
    SceneConfig(
        SCATTER_PLOT,
        "Danceability vs Energy Analysis",
        "This scatter plot shows how danceable and energetic different songs are. "
        "The size of each point shows popularity.",
        "scatter-plot",
    ),
    SceneConfig(
        ARTIST_ANALYSIS,
        "Most Popular Artists",
        "This shows the top artists based on their average track popularity. "
        "Hover to see more details.",
        "artist-analysis",
    ),
)
SCENE_COUNT = len(SCENES)


@dataclass(frozen=True)
class SceneView:
    scene: SceneConfig
    state: Any  # StateSnapshot
    data: Dict[str, Any]


@dataclass(frozen=True)
class ErrorView:
    message: str
    title: str = "Error loading data"


def get_scenes_json() -> str:
    return json.dumps([asdict(s) for s in SCENES], indent=2)


def _overview(tracks, snapshot):
    return overview_stats(tracks)


def _genre_timeline(tracks, snapshot):
    genres = valid_timeline_genres(tracks)
    stacks = stack_by_decade(tracks, genres)
    return {
        'genres': genres,
        'decades': decades(tracks),
        'table': genre_by_decade(tracks),
        'stacks': stacks,
        'max_height': max_stack_height(stacks),
    }


def _scatter_plot(tracks, snapshot):
    selected = filter_by_genre(tracks, snapshot.selected_genre)
    points = sample_for_scatter(selected)
    return {
        'genre': snapshot.selected_genre,
        'total': len(selected),
        'points': points[SCATTER_COLUMNS],
    }


def _artist_analysis(tracks, snapshot):
    selected = filter_by_genre(tracks, snapshot.selected_genre)
    return {
        'genre': snapshot.selected_genre,
        'artist_filter': snapshot.artist_filter,
        'artists': ranked_artists(selected, snapshot.artist_filter),
    }


SCENE_BUILDERS = {
    'overview': _overview,
    'genre-timeline': _genre_timeline,
    'scatter-plot': _scatter_plot,
    'artist-analysis': _artist_analysis,
}


def build_scene_view(snapshot, tracks: pd.DataFrame) -> SceneView:
    """Compute the aggregate view for the snapshot's current scene from the full working set."""
    scene = SCENES[snapshot.current_scene]
    data = SCENE_BUILDERS[scene.chart_type](tracks, snapshot)
    return SceneView(scene=scene, state=snapshot, data=data)

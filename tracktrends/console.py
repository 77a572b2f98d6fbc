"""Plain-text presentation sink: prints a SceneView or ErrorView to stdout."""

from .scenes import ErrorView

SCATTER_PREVIEW_ROWS = 10


def _chart_title(view) -> str:
    genre = view.data.get('genre')
    chart_type = view.scene.chart_type
    if chart_type == 'scatter-plot':
        return f"Danceability vs Energy for {genre}" if genre else "Danceability vs Energy by Genre"
    if chart_type == 'artist-analysis':
        return f"Top Artists in {genre} Genre" if genre else "Top Artists by Average Track Popularity"
    return view.scene.title


def _print_overview(data):
    print(f"Total Tracks: {data['total_tracks']:,}")
    print(f"Average Popularity: {round(data['avg_popularity'])}")
    print(f"Years of Data: {data['year_span']}")
    print("\nTop Genres")
    if not data['top_genres']:
        print("  No valid genres found")
    for genre, count in data['top_genres']:
        print(f"  {genre}: {count} tracks")


def _print_timeline(data):
    if not data['genres']:
        print("No genres with enough tracks to chart.")
        return
    print(data['table'].reindex(index=data['genres']).to_string())
    print(f"\nTallest decade: {data['max_height']} tracks")


def _print_scatter(data):
    points = data['points']
    print(f"{data['total']} tracks, showing {len(points)} points")
    print(points.head(SCATTER_PREVIEW_ROWS).to_string(index=False))


def _print_artists(data):
    artist_filter = data['artist_filter']
    print(f"{artist_filter.order.value.title()} {artist_filter.count} by {artist_filter.rank_by.value}")
    for artist, row in data['artists'].iterrows():
        print(
            f"  {artist}: {row['track_count']} tracks, "
            f"avg track popularity {round(row['mean_track_popularity'])}, "
            f"avg artist popularity {round(row['mean_artist_popularity'])}, "
            f"genres {', '.join(row['distinct_genres'][:3])}"
        )


PRINTERS = {
    'overview': _print_overview,
    'genre-timeline': _print_timeline,
    'scatter-plot': _print_scatter,
    'artist-analysis': _print_artists,
}


def print_view(view):
    if isinstance(view, ErrorView):
        print(f"\n=== {view.title} ===")
        print("Make sure your CSV file is in the data folder.")
        print(f"Error: {view.message}", flush=True)
        return

    print(f"\n=== Scene {view.scene.id + 1}: {view.scene.title} ===")
    print(view.scene.description)
    print(f"--- {_chart_title(view)} ---")
    PRINTERS[view.scene.chart_type](view.data)
    print(flush=True)

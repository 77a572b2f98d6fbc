import os
from dotenv import load_dotenv

load_dotenv()

DATA_PATH = os.getenv("TRACKTRENDS_DATA", "data/spotify_tracks_with_artist_data.csv")
VERBOSE = os.getenv("TRACKTRENDS_VERBOSE", "0") == "1"

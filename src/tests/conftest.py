"""Shared fixtures for the track pipeline tests."""

from collections.abc import Callable

import polars as pl
import pytest

from src.utils.music_styles import with_music_style
from src.utils.track_data import TRACK_SCHEMA

BASE_TRACK = {
    "artist": "Test Artist",
    "track": "Test Track",
    "album": "Test Album",
    "album_type": "album",
    "danceability": 0.5,
    "energy": 0.5,
    "loudness": -6.0,
    "speechiness": 0.05,
    "acousticness": 0.2,
    "instrumentalness": 0.0,
    "liveness": 0.1,
    "valence": 0.5,
    "tempo": 120.0,
    "duration_min": 3.5,
    "title": "Test Track (Official Video)",
    "channel": "Test Channel",
    "views": 1_000_000,
    "likes": 10_000,
    "comments": 500,
    "licensed": True,
    "official_video": True,
    "stream": 2_000_000,
    "energy_liveness": 5.0,
    "most_played_on": "Spotify",
}

SAMPLE_TRACKS = [
    {
        "artist": "The Weeknd",
        "track": "Blinding Lights",
        "album": "After Hours",
        "danceability": 0.514,
        "energy": 0.73,
        "loudness": -5.934,
        "speechiness": 0.0598,
        "acousticness": 0.00146,
        "instrumentalness": 0.000095,
        "liveness": 0.0897,
        "valence": 0.334,
        "tempo": 171.005,
        "duration_min": 3.33,
        "views": 600_000_000,
        "likes": 8_000_000,
        "comments": 300_000,
        "stream": 3_386_520_288,
        "energy_liveness": 8.13,
        "most_played_on": "Spotify",
    },
    {
        "artist": "Ed Sheeran",
        "track": "Shape of You",
        "album": "Divide",
        "danceability": 0.825,
        "energy": 0.652,
        "loudness": -3.183,
        "speechiness": 0.0802,
        "acousticness": 0.581,
        "liveness": 0.0931,
        "valence": 0.931,
        "tempo": 95.977,
        "duration_min": 3.9,
        "views": 5_908_398_479,
        "likes": 31_047_780,
        "comments": 1_130_327,
        "stream": 3_362_005_201,
        "energy_liveness": 7.0,
        "most_played_on": "Youtube",
    },
    {
        "artist": "Ed Sheeran",
        "track": "Perfect",
        "album": "Divide",
        "danceability": 0.599,
        "energy": 0.448,
        "loudness": -6.312,
        "speechiness": 0.0232,
        "acousticness": 0.163,
        "liveness": 0.106,
        "valence": 0.168,
        "tempo": 95.05,
        "duration_min": 4.39,
        "views": 3_300_000_000,
        "likes": 17_000_000,
        "comments": 600_000,
        "stream": 2_300_000_000,
        "energy_liveness": 4.23,
        "most_played_on": "Youtube",
    },
    {
        "artist": "CoComelon",
        "track": "Wheels on the Bus",
        "album": "CoComelon Vol 1",
        "album_type": "compilation",
        "danceability": 0.85,
        "energy": 0.85,
        "loudness": -4.0,
        "speechiness": 0.05,
        "acousticness": 0.2,
        "liveness": 0.3,
        "valence": 0.95,
        "tempo": 120.0,
        "duration_min": 2.5,
        "views": 4_900_000_000,
        "likes": 1_000,
        "comments": 0,
        "licensed": False,
        "stream": 197_000_000,
        "energy_liveness": 2.83,
        "most_played_on": "Youtube",
    },
    {
        "artist": "Rain Fruits Sounds",
        "track": "Rain on Tent",
        "album": "Sleep Rain",
        "album_type": "single",
        "danceability": 0.1,
        "energy": 0.99,
        "loudness": -25.0,
        "speechiness": 0.05,
        "acousticness": 0.9,
        "instrumentalness": 0.95,
        "liveness": 0.95,
        "valence": 0.01,
        "tempo": 80.0,
        "duration_min": 60.0,
        "title": None,
        "channel": None,
        "views": 1_000,
        "likes": 10,
        "comments": 0,
        "licensed": False,
        "official_video": False,
        "stream": 15_000_000,
        "energy_liveness": 1.04,
        "most_played_on": "Spotify",
    },
    {
        "artist": "Luis Fonsi",
        "track": "Despacito",
        "album": "VIDA",
        "danceability": 0.655,
        "energy": 0.797,
        "loudness": -4.787,
        "speechiness": 0.153,
        "acousticness": 0.198,
        "liveness": 0.067,
        "valence": 0.839,
        "tempo": 177.928,
        "duration_min": 3.8,
        "views": 8_079_649_362,
        "likes": 50_788_652,
        "comments": 4_252_791,
        "stream": 1_506_598_096,
        "energy_liveness": 11.9,
        "most_played_on": "Youtube",
    },
]


def build_tracks(records: list[dict]) -> pl.DataFrame:
    """
    Build a track frame holding every track column from partial records.

    Parameters
    ----------
    records : list[dict]
        Values overriding ``BASE_TRACK`` for each record.

    Returns
    -------
    pl.DataFrame
        Frame with the ``TRACK_SCHEMA`` columns and dtypes.
    """
    return pl.DataFrame([{**BASE_TRACK, **record} for record in records], schema=TRACK_SCHEMA)


@pytest.fixture
def track_factory() -> Callable[[list[dict]], pl.DataFrame]:
    """
    Fixture providing the partial-record track builder.

    Returns
    -------
    Callable[[list[dict]], pl.DataFrame]
        ``build_tracks``.
    """
    return build_tracks


@pytest.fixture
def normalized_tracks() -> pl.DataFrame:
    """
    Fixture providing six valid tracks in the normalised (bronze) shape.

    Returns
    -------
    pl.DataFrame
        Tracks with the 24 track columns.
    """
    return build_tracks(SAMPLE_TRACKS)


@pytest.fixture
def silver_tracks(normalized_tracks: pl.DataFrame) -> pl.DataFrame:
    """
    Fixture providing the six sample tracks in the silver shape.

    Returns
    -------
    pl.DataFrame
        Tracks with the 24 track columns and ``music_style``.
    """
    return with_music_style(normalized_tracks)

"""Schema definitions for Spotify/YouTube track data validation."""

import pandera.polars as pa
from dagster_pandera import pandera_schema_to_dagster_type

from src.utils.track_data import ALBUM_TYPES


class SpotifyTracksSilverSchema(pa.DataFrameModel):
    """Schema for spotify_tracks_silver asset."""

    artist: str = pa.Field(nullable=False, description="Name of the artist/band.")
    track: str = pa.Field(nullable=False, description="Name of the song.")
    album: str = pa.Field(nullable=False, description="Album name.")
    album_type: str = pa.Field(nullable=False, isin=list(ALBUM_TYPES), description="single, album or compilation.")
    danceability: float = pa.Field(nullable=False, ge=0, le=1, description="How suitable for dancing.")
    energy: float = pa.Field(nullable=False, ge=0, le=1, description="Intensity and power.")
    loudness: float = pa.Field(nullable=False, description="Overall loudness in decibels.")
    speechiness: float = pa.Field(nullable=False, ge=0, le=1, description="Presence of spoken words.")
    acousticness: float = pa.Field(nullable=False, ge=0, le=1, description="How acoustic the track is.")
    instrumentalness: float = pa.Field(nullable=False, ge=0, le=1, description="Likelihood of no vocals.")
    liveness: float = pa.Field(nullable=False, ge=0, le=1, description="Presence of an audience.")
    valence: float = pa.Field(nullable=False, ge=0, le=1, description="Musical positiveness.")
    tempo: float = pa.Field(nullable=False, gt=0, description="Beats per minute.")
    duration_min: float = pa.Field(nullable=False, gt=0, description="Length of the track in minutes.")
    title: str = pa.Field(nullable=True, description="YouTube video title.")
    channel: str = pa.Field(nullable=True, description="YouTube channel name.")
    views: int = pa.Field(nullable=False, ge=0, description="YouTube views.")
    likes: int = pa.Field(nullable=False, ge=0, description="YouTube likes.")
    comments: int = pa.Field(nullable=False, ge=0, description="YouTube comments.")
    licensed: bool = pa.Field(nullable=False, description="Whether the content is licensed.")
    official_video: bool = pa.Field(nullable=False, description="Whether it is an official music video.")
    stream: int = pa.Field(nullable=False, ge=0, description="Number of Spotify streams.")
    energy_liveness: float = pa.Field(nullable=True, ge=0, description="Combined energy and liveness score.")
    most_played_on: str = pa.Field(nullable=False, description="Platform where the track is most popular.")
    music_style: str = pa.Field(nullable=False, description="Style assigned by the audio feature rules.")

    class Config:
        """Pandera configuration."""

        strict = True  # Reject unknown columns
        coerce = True
        description = "Schema for quality-gated Spotify/YouTube tracks."


SpotifyTracksSilverDagsterType = pandera_schema_to_dagster_type(SpotifyTracksSilverSchema)

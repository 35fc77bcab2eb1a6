"""Assets loading and quality-gating the Spotify/YouTube track snapshot."""

import dagster as dg
import polars as pl

from src.assets.music.common import BRONZE_TRACKS_IN
from src.resources.data_loader import DataLoaderResource
from src.utils.music_styles import with_music_style
from src.utils.track_data import apply_quality_gate, normalize_track_columns
from src.validation.schemas.track_schema import SpotifyTracksSilverDagsterType


@dg.asset(
    name="spotify_tracks_bronze",
    key_prefix=["music", "bronze"],
    io_manager_key="io_manager_pl",
    description="Raw Spotify/YouTube track snapshot with snake_case columns cast to the track schema",
    group_name="music",
    kinds={"polars", "bronze"},
    tags={"domain": "music", "source": "kaggle"},
)
def spotify_tracks_bronze(context: dg.AssetExecutionContext, data_loader: DataLoaderResource) -> pl.DataFrame:
    """
    Load the track snapshot and normalise its columns.

    Parameters
    ----------
    context : dg.AssetExecutionContext
        The execution context.
    data_loader : DataLoaderResource
        Resource resolving the snapshot path from the ``spotify.tracks`` configuration entry.

    Returns
    -------
    pl.DataFrame
        The snapshot with the 24 track columns. Values that could not be cast are null.
    """
    raw_tracks = data_loader.load_data("spotify", "tracks", infer_schema_length=10000)
    context.log.info(f"Loaded {raw_tracks.height} raw track records with {raw_tracks.width} columns")

    return normalize_track_columns(raw_tracks)


@dg.asset(
    name="spotify_tracks_silver",
    key_prefix=["music", "silver"],
    io_manager_key="io_manager_pl",
    dagster_type=SpotifyTracksSilverDagsterType,
    description="Quality-gated tracks with their rule-based music style",
    group_name="music",
    kinds={"polars", "silver"},
    tags={"domain": "music", "source": "kaggle"},
    ins=BRONZE_TRACKS_IN,
)
def spotify_tracks_silver(context: dg.AssetExecutionContext, spotify_tracks_bronze: pl.DataFrame) -> pl.DataFrame:
    """
    Drop invalid records and classify the remaining tracks.

    A record is dropped when it holds a null in a required column, a duration or tempo <= 0,
    a negative engagement count, an audio feature outside [0, 1] or an unknown album type.

    Parameters
    ----------
    context : dg.AssetExecutionContext
        The execution context.
    spotify_tracks_bronze : pl.DataFrame
        Normalised snapshot.

    Returns
    -------
    pl.DataFrame
        Valid tracks with an additional ``music_style`` column.
    """
    valid_tracks = apply_quality_gate(spotify_tracks_bronze)

    dropped = spotify_tracks_bronze.height - valid_tracks.height
    if dropped:
        context.log.warning(f"Quality gate dropped {dropped} of {spotify_tracks_bronze.height} records")

    if valid_tracks.height == 0:
        context.log.warning("No valid track records remain after the quality gate")

    context.log.info(f"Classifying {valid_tracks.height} tracks")
    return with_music_style(valid_tracks)

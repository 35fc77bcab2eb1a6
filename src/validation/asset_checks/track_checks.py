"""Data quality checks for the Spotify/YouTube track assets."""

import dagster as dg
import pandera.polars as pa
import polars as pl

from src.assets.music.tracks import spotify_tracks_silver
from src.utils.music_styles import MUSIC_STYLES
from src.utils.track_data import find_duplicate_tracks
from src.validation.schemas.track_schema import SpotifyTracksSilverSchema


@dg.asset_check(asset=spotify_tracks_silver)
def check_spotify_tracks_silver_schema(spotify_tracks_silver: pl.DataFrame) -> dg.AssetCheckResult:
    """
    Validate the silver tracks against the Pandera schema, collecting every failure.

    Returns
    -------
    dg.AssetCheckResult
        The result of the check.
    """
    if spotify_tracks_silver.height == 0:
        return dg.AssetCheckResult(passed=True, metadata={"num_rows": 0, "status": "empty_input"})

    try:
        SpotifyTracksSilverSchema.validate(spotify_tracks_silver, lazy=True)
        return dg.AssetCheckResult(
            passed=True,
            metadata={
                "num_rows": spotify_tracks_silver.height,
                "schema": "SpotifyTracksSilverSchema",
                "status": "passed",
            },
        )
    except pa.errors.SchemaErrors as e:
        return dg.AssetCheckResult(
            passed=False,
            metadata={
                "num_rows": spotify_tracks_silver.height,
                "schema": "SpotifyTracksSilverSchema",
                "status": "failed",
                "errors": str(e.failure_cases),
            },
        )


@dg.asset_check(asset=spotify_tracks_silver)
def check_spotify_tracks_silver_duplicates(spotify_tracks_silver: pl.DataFrame) -> dg.AssetCheckResult:
    """
    Warn when the same artist/track/album appears more than once.

    Returns
    -------
    dg.AssetCheckResult
        The result of the check.
    """
    duplicates = find_duplicate_tracks(spotify_tracks_silver)
    return dg.AssetCheckResult(
        passed=duplicates.height == 0,
        severity=dg.AssetCheckSeverity.WARN,
        metadata={"num_rows": spotify_tracks_silver.height, "duplicated_keys": duplicates.height},
    )


@dg.asset_check(asset=spotify_tracks_silver)
def check_spotify_tracks_silver_styles(spotify_tracks_silver: pl.DataFrame) -> dg.AssetCheckResult:
    """
    Verify every track carries exactly one known music style.

    Returns
    -------
    dg.AssetCheckResult
        The result of the check.
    """
    unknown = spotify_tracks_silver.filter(
        pl.col("music_style").is_null() | ~pl.col("music_style").is_in(list(MUSIC_STYLES))
    )
    return dg.AssetCheckResult(
        passed=unknown.height == 0,
        metadata={"num_rows": spotify_tracks_silver.height, "unclassified_rows": unknown.height},
    )
